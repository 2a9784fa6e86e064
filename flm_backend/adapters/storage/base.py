"""
Storage backend contract consumed by the listing engine.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Union, runtime_checkable

from flm_shared import ErrorCode


class StorageError(Exception):
    """Base class for storage adapter failures."""

    code: ErrorCode = ErrorCode.PROBE_FAILED


class ProbeError(StorageError):
    """A metadata probe (MIME type, image header) failed for one entry."""


class StorageUnavailableError(StorageError):
    """The backend could not list a folder. Fails the whole listing."""

    code = ErrorCode.STORAGE_UNAVAILABLE


@dataclass(frozen=True)
class FileAttributes:
    path: str
    file_size: Optional[int] = None
    visibility: Optional[str] = None
    last_modified: Optional[int] = None

    @property
    def type(self) -> str:
        return "file"

    @property
    def is_file(self) -> bool:
        return True


@dataclass(frozen=True)
class DirectoryAttributes:
    path: str
    visibility: Optional[str] = None
    last_modified: Optional[int] = None

    @property
    def type(self) -> str:
        return "dir"

    @property
    def is_file(self) -> bool:
        return False


StorageAttributes = Union[FileAttributes, DirectoryAttributes]


@dataclass(frozen=True)
class StorageCapabilities:
    """
    Capability flags the engine branches on.

    public_thumbnails: the backend serves entry paths from a public URL, so
        image thumbnails point straight at `url(path)`.
    local_paths: `path()` returns a real filesystem path that can be opened.
    """
    public_thumbnails: bool = False
    local_paths: bool = False


@runtime_checkable
class StorageBackend(Protocol):
    capabilities: StorageCapabilities

    def list_contents(self, path: str) -> Iterable[StorageAttributes]:
        """List immediate children. Raises StorageUnavailableError."""
        ...

    def mime_type(self, path: str) -> str:
        """MIME type of a file. Raises ProbeError."""
        ...

    def path(self, relative_path: str) -> str:
        ...

    def url(self, path: str) -> str:
        ...
