"""Data models for projectview."""

from dataclasses import dataclass, field
from enum import Enum


class FailureKind(str, Enum):
    """Closed set of reasons an operation can fail."""

    INVALID_REQUEST = "invalid_request"
    PATH_TRAVERSAL_REJECTED = "path_traversal_rejected"
    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    IS_A_DIRECTORY = "is_a_directory"
    READ_FAILED = "read_failed"
    DECODE_ERROR = "decode_error"
    ENUMERATION_PARTIAL_FAILURE = "enumeration_partial_failure"


@dataclass(frozen=True)
class Failure:
    """A typed failure descriptor.

    Attributes:
        kind: Which failure occurred
        message: Human-readable error string handed to the presentation layer
    """

    kind: FailureKind
    message: str


@dataclass(frozen=True)
class FileListing:
    """Result of enumerating a project tree.

    Attributes:
        files: Relative POSIX paths in discovery order
        failure: Set when the traversal failed; ``files`` is then empty
    """

    files: list[str] = field(default_factory=list)
    failure: Failure | None = None

    def __post_init__(self):
        if self.failure is not None and self.files:
            raise ValueError("A failed listing must not carry files")

    @property
    def ok(self) -> bool:
        return self.failure is None

    def to_dict(self) -> dict:
        payload: dict = {"files": list(self.files)}
        if self.failure is not None:
            payload["error"] = self.failure.message
        return payload


@dataclass(frozen=True)
class FileContent:
    """Result of reading a single file: either text or a failure, never both.

    Attributes:
        path: The path as requested by the caller
        content: Decoded text on success
        failure: Failure descriptor otherwise
    """

    path: str | None
    content: str | None = None
    failure: Failure | None = None

    def __post_init__(self):
        if (self.content is None) == (self.failure is None):
            raise ValueError("FileContent needs exactly one of content or failure")

    @property
    def ok(self) -> bool:
        return self.failure is None

    def to_dict(self) -> dict:
        if self.failure is not None:
            return {"error": self.failure.message}
        return {"content": self.content}


@dataclass(frozen=True)
class Snapshot:
    """One page request: the project listing plus an optional selected file.

    Attributes:
        listing: Enumeration result
        selected: Read result, or None when no path was requested
    """

    listing: FileListing
    selected: FileContent | None = None

    def to_dict(self) -> dict:
        payload = self.listing.to_dict()
        payload["selected_file"] = self.selected.to_dict() if self.selected else None
        payload["file"] = self.selected.path if self.selected else None
        return payload
