"""
Navigation helpers: parent "Go up" entry, breadcrumbs and the public folder path.
"""
from __future__ import annotations

from typing import Optional

from ...adapters.storage import StorageBackend
from ...config import ListingConfig
from ...path_utils import clean_slashes, split_segments
from ...utils import format_bytes
from .models import EntryRecord

PARENT_ID = "folder_back"
PARENT_MIME_CLASS = "dirBack"
GO_UP_LABEL = "Go up"
LOCAL_URL_PREFIX = "/storage"


def _storage_root(storage: StorageBackend) -> str:
    root = clean_slashes(storage.path("")) or ""
    return root if root.endswith("/") else root + "/"


def _strip_storage_root(storage: StorageBackend, value: str) -> str:
    """Drop the storage root from a filesystem path for local backends."""
    if not storage.capabilities.local_paths:
        return value
    root = _storage_root(storage)
    cleaned = clean_slashes(value) or ""
    if root != "/" and (cleaned + "/").startswith(root):
        return cleaned[len(root):]
    return value


def url_prefix(config: ListingConfig) -> str:
    """Public prefix for folder paths: none for cloud disks, `/storage` otherwise."""
    return "" if config.is_cloud_disk else LOCAL_URL_PREFIX


def relative_path(folder: str, storage: StorageBackend, config: ListingConfig) -> str:
    """Public path of `folder`, used to build thumbnails on non-public backends."""
    folder = str(folder or "/")
    public_path = _strip_storage_root(storage, folder)
    if folder != "/":
        return clean_slashes(f"{url_prefix(config)}/{public_path}") or ""
    return clean_slashes(f"{url_prefix(config)}{public_path}") or ""


def generate_parent(folder: str, storage: StorageBackend, label: str = GO_UP_LABEL) -> Optional[EntryRecord]:
    """
    Pseudo-directory pointing one level up from `folder`.

    Returns None at the top level. A leading slash on `folder` is kept on the
    parent path.
    """
    segments = split_segments(folder)
    if not segments:
        return None

    parent_segments = segments[:-1]
    if parent_segments:
        parent = "/".join(parent_segments)
        if str(folder).startswith("/"):
            parent = "/" + parent
    else:
        parent = "/"

    return EntryRecord(
        id=PARENT_ID,
        name=label,
        path=clean_slashes(parent) or "/",
        type="dir",
        mime_class=PARENT_MIME_CLASS,
        extension=False,
        size=0,
        size_human=format_bytes(0),
        thumbnail=None,
        asset_url=clean_slashes(storage.url(parent)) or "",
        last_modified=False,
        date=False,
    )


def get_paths(folder: str, storage: StorageBackend) -> list[dict[str, str]]:
    """
    Breadcrumbs for `folder`, innermost first.

    Each crumb's path is rebuilt from the segments up to and including its own
    index, so repeated segment names stay unambiguous.
    """
    current = folder
    if storage.capabilities.local_paths:
        current = clean_slashes(storage.path(folder)) or ""
    segments = split_segments(_strip_storage_root(storage, current))
    crumbs = [{"name": seg, "path": "/".join(segments[: i + 1])} for i, seg in enumerate(segments)]
    crumbs.reverse()
    return crumbs
