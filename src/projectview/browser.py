"""ProjectBrowser: a project root bound to its listing and reading options."""

import asyncio
import codecs
import os
from collections.abc import Iterable

from projectview.constants import (
    CONTAINMENT_MODES,
    CONTAINMENT_PREFIX,
    DEFAULT_ENCODING,
    DEFAULT_EXCLUDED_DIRS,
)
from projectview.file_operations import list_files, read_file
from projectview.models import FileContent, FileListing, Snapshot


class ProjectBrowser:
    """Lists and reads files below one fixed project root.

    The root is made absolute once at construction and never changes, so a
    single instance can serve concurrent requests.
    """

    def __init__(
        self,
        root: str | os.PathLike,
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
        respect_gitignore: bool = False,
        containment: str = CONTAINMENT_PREFIX,
        encoding: str = DEFAULT_ENCODING,
    ):
        if containment not in CONTAINMENT_MODES:
            raise ValueError(
                f"Unknown containment mode {containment!r}; expected one of {CONTAINMENT_MODES}"
            )
        try:
            codecs.lookup(encoding)
        except LookupError as e:
            raise ValueError(f"Unknown encoding {encoding!r}") from e

        self.root = os.path.abspath(root)
        self.excluded_dirs = tuple(excluded_dirs)
        self.respect_gitignore = respect_gitignore
        self.containment = containment
        self.encoding = encoding

    def __repr__(self) -> str:
        return f"ProjectBrowser(root={self.root!r}, excluded_dirs={self.excluded_dirs!r})"

    def list_files(self) -> FileListing:
        return list_files(self.root, self.excluded_dirs, self.respect_gitignore)

    def read_file(self, requested_path: str | None) -> FileContent:
        return read_file(self.root, requested_path, self.containment, self.encoding)

    def snapshot(self, requested_path: str | None = None) -> Snapshot:
        """List the project and read ``requested_path`` only when one is given."""
        listing = self.list_files()
        selected = self.read_file(requested_path) if requested_path else None
        return Snapshot(listing=listing, selected=selected)

    async def alist_files(self) -> FileListing:
        return await asyncio.to_thread(self.list_files)

    async def aread_file(self, requested_path: str | None) -> FileContent:
        return await asyncio.to_thread(self.read_file, requested_path)

    async def asnapshot(self, requested_path: str | None = None) -> Snapshot:
        listing = await self.alist_files()
        selected = await self.aread_file(requested_path) if requested_path else None
        return Snapshot(listing=listing, selected=selected)
