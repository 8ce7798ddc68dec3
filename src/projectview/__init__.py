"""projectview: list a project's files and read them without escaping its root.

This package provides a filtered, depth-first directory enumerator and a
path-traversal-safe text file reader, both returning typed result values
instead of raising.
"""

from projectview.browser import ProjectBrowser
from projectview.file_operations import list_files, read_file
from projectview.models import Failure, FailureKind, FileContent, FileListing, Snapshot

__version__ = "0.1.0"
__all__ = [
    "ProjectBrowser",
    "list_files",
    "read_file",
    "Failure",
    "FailureKind",
    "FileContent",
    "FileListing",
    "Snapshot",
]
