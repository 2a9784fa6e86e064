"""Thumbnail URL resolution."""
from __future__ import annotations

from typing import Optional

from ...adapters.storage import StorageBackend
from ...path_utils import clean_slashes
from .models import RawEntry


def is_image_like(entry: RawEntry) -> bool:
    return "image" in (entry.mime_type or "") or entry.extension == "svg"


def resolve_thumbnail(entry: RawEntry, storage: StorageBackend, current_folder: str) -> Optional[str]:
    """
    Public URL of the image for backends that serve entries directly,
    otherwise `current_folder/basename`. None for non-images.
    """
    if not is_image_like(entry):
        return None
    if storage.capabilities.public_thumbnails:
        return clean_slashes(storage.url(entry.path))
    return clean_slashes(f"{current_folder}/{entry.basename}")
