"""
Turn raw storage attribute records into `RawEntry` descriptors.
"""
from __future__ import annotations

import dataclasses
import posixpath

from flm_shared import DIR_MIME, ErrorCode, Result, get_logger, sanitize_error_message

from ...adapters.storage import StorageAttributes, StorageBackend
from .models import RawEntry

logger = get_logger(__name__)


def path_basename(path: str) -> str:
    return posixpath.basename(str(path or "").replace("\\", "/").rstrip("/"))


def path_extension(path: str) -> str:
    """Text after the last dot of the basename, "" when there is none."""
    _, sep, ext = path_basename(path).rpartition(".")
    return ext if sep else ""


def probe_mime_type(storage: StorageBackend, path: str) -> Result[str]:
    """Ask the backend for a MIME type without letting its errors escape."""
    try:
        mime = storage.mime_type(path)
    except Exception as exc:
        return Result.Err(ErrorCode.PROBE_FAILED, sanitize_error_message(exc, "MIME probe failed"))
    if not mime:
        return Result.Err(ErrorCode.PROBE_FAILED, "Empty MIME type")
    return Result.Ok(str(mime))


def normalize_entry(storage: StorageBackend, attrs: StorageAttributes, probe_mime: bool = True) -> RawEntry:
    path = attrs.path
    is_file = bool(attrs.is_file)

    mime_type: str | None = DIR_MIME
    if is_file:
        mime_type = None
        if probe_mime:
            res = probe_mime_type(storage, path)
            if not res.ok:
                logger.debug("MIME probe degraded for %s: %s", path, res.error)
            mime_type = res.data if res.ok else None

    return RawEntry(
        type="file" if is_file else "dir",
        basename=path_basename(path),
        path=path,
        extension=path_extension(path) if is_file else None,
        size=int(getattr(attrs, "file_size", None) or 0) if is_file else 0,
        visibility=attrs.visibility,
        last_modified=attrs.last_modified,
        mime_type=mime_type,
        mime_probed=probe_mime or not is_file,
    )


def list_contents(storage: StorageBackend, folder: str, probe_mime: bool = True) -> list[RawEntry]:
    """
    Normalize every child of `folder`.

    Storage failures on the listing call itself propagate to the caller.
    """
    return [normalize_entry(storage, attrs, probe_mime=probe_mime) for attrs in storage.list_contents(folder)]


def resolve_mime(storage: StorageBackend, entry: RawEntry) -> RawEntry:
    """Run a MIME probe that `list_contents(..., probe_mime=False)` deferred."""
    if entry.mime_probed:
        return entry
    res = probe_mime_type(storage, entry.path)
    if not res.ok:
        logger.debug("MIME probe degraded for %s: %s", entry.path, res.error)
    return dataclasses.replace(entry, mime_type=res.data if res.ok else None, mime_probed=True)
