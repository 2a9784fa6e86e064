"""
Storage adapters.
"""

from .base import (
    DirectoryAttributes,
    FileAttributes,
    ProbeError,
    StorageAttributes,
    StorageBackend,
    StorageCapabilities,
    StorageError,
    StorageUnavailableError,
)
from .local import LocalStorage

__all__ = [
    "DirectoryAttributes",
    "FileAttributes",
    "LocalStorage",
    "ProbeError",
    "StorageAttributes",
    "StorageBackend",
    "StorageCapabilities",
    "StorageError",
    "StorageUnavailableError",
]
