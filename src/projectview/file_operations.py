"""File system operations: filtered project enumeration and contained file reads."""

import codecs
import logging
import os
import pathlib
from collections.abc import Iterable

import pathspec

from projectview.constants import (
    ALWAYS_IGNORE_PATTERNS,
    CONTAINMENT_ANCESTRY,
    CONTAINMENT_PREFIX,
    DEFAULT_ENCODING,
    DEFAULT_EXCLUDED_DIRS,
    FETCH_FAILED_PREFIX,
    FILE_PATH_REQUIRED,
    LIST_FAILED,
    PATH_TRAVERSAL_DETECTED,
)
from projectview.models import Failure, FailureKind, FileContent, FileListing

logger = logging.getLogger(__name__)


def get_combined_spec(root_dir: pathlib.Path) -> pathspec.PathSpec:
    """Combines ALWAYS_IGNORE_PATTERNS with the project's own ignore files.

    Loads .gitignore from the project root and also checks .git/info/exclude.

    Args:
        root_dir: Project root directory

    Returns:
        PathSpec object combining hardcoded patterns and .gitignore patterns
    """
    all_patterns = list(ALWAYS_IGNORE_PATTERNS)

    for ignore_path in (root_dir / ".gitignore", root_dir / ".git" / "info" / "exclude"):
        if not ignore_path.is_file():
            continue
        try:
            with open(ignore_path, encoding="utf-8", errors="ignore") as f:
                all_patterns.extend(f.read().splitlines())
        except OSError as e:
            logger.warning("Could not read %s: %s", ignore_path, e)

    return pathspec.PathSpec.from_lines("gitwildmatch", all_patterns)


def is_excluded(relative_dir: str, excluded_dirs: Iterable[str]) -> bool:
    """Return True when any exclusion substring occurs in ``relative_dir``."""
    return any(name in relative_dir for name in excluded_dirs)


def _scan(directory: str) -> list[os.DirEntry]:
    with os.scandir(directory) as entries:
        return list(entries)


def _relative(path: str, root: str) -> str:
    return os.path.relpath(path, root).replace(os.sep, "/")


def collect_files(
    root: str,
    excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
    ignore_spec: pathspec.PathSpec | None = None,
) -> list[str]:
    """Walk ``root`` depth-first and return relative paths of non-directory entries.

    Entries are visited in the order the filesystem reports them and each
    subdirectory is descended into as soon as it is met. Symlinks are never
    followed. Errors propagate to the caller.

    Args:
        root: Absolute project root
        excluded_dirs: Substrings that prune a directory when found in its path
        ignore_spec: Optional gitignore spec applied on top of ``excluded_dirs``

    Returns:
        Relative POSIX paths in discovery order
    """
    excluded_dirs = tuple(excluded_dirs)
    files: list[str] = []
    stack = [iter(_scan(root))]

    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        relative = _relative(entry.path, root)
        if entry.is_dir(follow_symlinks=False):
            if is_excluded(relative, excluded_dirs):
                logger.debug("Pruned excluded directory %s", relative)
                continue
            if ignore_spec is not None and ignore_spec.match_file(relative + "/"):
                logger.debug("Pruned ignored directory %s", relative)
                continue
            stack.append(iter(_scan(entry.path)))
        else:
            if ignore_spec is not None and ignore_spec.match_file(relative):
                continue
            files.append(relative)

    return files


def list_files(
    root: str | os.PathLike,
    excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
    respect_gitignore: bool = False,
) -> FileListing:
    """Enumerate every file under ``root``, never raising.

    Any traversal error discards the partial result and returns an empty
    listing flagged with ENUMERATION_PARTIAL_FAILURE.
    """
    root_str = os.path.abspath(root)
    try:
        ignore_spec = get_combined_spec(pathlib.Path(root_str)) if respect_gitignore else None
        files = collect_files(root_str, excluded_dirs, ignore_spec)
    except OSError as e:
        logger.warning("Error listing files under %s: %s", root_str, e)
        return FileListing(
            files=[],
            failure=Failure(FailureKind.ENUMERATION_PARTIAL_FAILURE, LIST_FAILED),
        )

    logger.debug("Listed %d files under %s", len(files), root_str)
    return FileListing(files=files)


def resolve_requested_path(root: str, requested_path: str) -> str:
    """Lexically normalize ``requested_path`` and anchor it at ``root``.

    The filesystem is not consulted, so symlinks are not resolved. An
    absolute ``requested_path`` replaces ``root`` entirely.
    """
    return os.path.normpath(os.path.join(root, os.path.normpath(requested_path)))


def is_contained(resolved: str, root: str, containment: str = CONTAINMENT_PREFIX) -> bool:
    """Check that ``resolved`` lies within ``root``.

    ``prefix`` compares raw strings, so ``/project-evil`` passes for a root of
    ``/project``. ``ancestry`` compares path segments and does not.
    """
    if containment == CONTAINMENT_ANCESTRY:
        try:
            return os.path.commonpath([root, resolved]) == root
        except ValueError:
            # Different drives on Windows.
            return False
    return resolved.startswith(root)


def _fetch_failure(kind: FailureKind, requested_path: str, error: Exception) -> FileContent:
    logger.warning("Error fetching file content for %s: %s", requested_path, error)
    return FileContent(
        path=requested_path,
        failure=Failure(kind, f"{FETCH_FAILED_PREFIX}: {error}"),
    )


def read_file(
    root: str | os.PathLike,
    requested_path: str | None,
    containment: str = CONTAINMENT_PREFIX,
    encoding: str = DEFAULT_ENCODING,
) -> FileContent:
    """Read one file below ``root`` as text, never raising.

    Args:
        root: Project root the request is evaluated against
        requested_path: Caller-supplied path, normally relative to ``root``
        containment: ``prefix`` or ``ancestry`` (see is_contained)
        encoding: Text encoding used to decode the file

    Returns:
        FileContent with either the full decoded text or a Failure
    """
    if not requested_path:
        return FileContent(
            path=requested_path,
            failure=Failure(FailureKind.INVALID_REQUEST, FILE_PATH_REQUIRED),
        )

    try:
        codecs.lookup(encoding)
    except LookupError as e:
        return _fetch_failure(FailureKind.READ_FAILED, requested_path, e)

    root_str = os.path.abspath(root)
    resolved = resolve_requested_path(root_str, requested_path)

    if not is_contained(resolved, root_str, containment):
        logger.warning("Rejected path outside project root: %s", requested_path)
        return FileContent(
            path=requested_path,
            failure=Failure(FailureKind.PATH_TRAVERSAL_REJECTED, PATH_TRAVERSAL_DETECTED),
        )

    try:
        content = pathlib.Path(resolved).read_bytes().decode(encoding)
    except (FileNotFoundError, NotADirectoryError) as e:
        return _fetch_failure(FailureKind.NOT_FOUND, requested_path, e)
    except PermissionError as e:
        return _fetch_failure(FailureKind.ACCESS_DENIED, requested_path, e)
    except IsADirectoryError as e:
        return _fetch_failure(FailureKind.IS_A_DIRECTORY, requested_path, e)
    except OSError as e:
        return _fetch_failure(FailureKind.READ_FAILED, requested_path, e)
    except UnicodeDecodeError as e:
        return _fetch_failure(FailureKind.DECODE_ERROR, requested_path, e)
    except ValueError as e:
        # Embedded null bytes in the path.
        return _fetch_failure(FailureKind.READ_FAILED, requested_path, e)

    return FileContent(path=requested_path, content=content)
