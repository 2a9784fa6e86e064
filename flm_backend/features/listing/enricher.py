"""
Build presentation records for accepted entries.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from flm_shared import classify_mime, format_modification_date, get_logger

from ...adapters.storage import StorageBackend
from ...config import ListingConfig
from ...path_utils import clean_slashes
from ...utils import format_bytes
from .acceptance import AcceptPredicate, accept, default_accept, folder_is_visible
from .dimensions import probe_dimensions
from .models import EntryRecord, RawEntry
from .normalizer import resolve_mime
from .thumbnails import resolve_thumbnail

logger = get_logger(__name__)


@dataclass(frozen=True)
class EnrichContext:
    """Ambient inputs shared by every entry of one listing call."""

    storage: StorageBackend
    config: ListingConfig
    current_folder: str = ""
    predicate: AcceptPredicate = default_accept
    http_client: Optional[httpx.Client] = None


def build_entry_record(entry: RawEntry, entry_id: str, ctx: EnrichContext) -> Optional[EntryRecord]:
    """
    Enriched record for `entry`, or None when it must not be listed.

    Directories holding a `.hide` marker are dropped entirely. A deferred MIME
    probe runs only once the entry has been accepted.
    """
    cfg = ctx.config
    if not accept(
        entry,
        excluded_extensions=cfg.excluded_extensions,
        excluded_folders=cfg.excluded_folders,
        excluded_files=cfg.excluded_files,
        predicate=ctx.predicate,
    ):
        return None

    if entry.is_dir and not folder_is_visible(ctx.storage, entry.path):
        logger.debug("Hiding folder %s (marker file present)", entry.path)
        return None

    entry = resolve_mime(ctx.storage, entry)
    mime_class = classify_mime(entry.mime_type, entry.extension, entry.type)

    dimensions = None
    if mime_class == "image" and entry.is_file:
        res = probe_dimensions(entry, ctx.storage, cfg, client=ctx.http_client)
        if res.ok and res.data:
            width, height = res.data
            dimensions = f"{width}x{height}"
        else:
            logger.debug("No dimensions for %s: [%s] %s", entry.path, res.code, res.error)

    return EntryRecord(
        id=entry_id,
        name=entry.basename.strip(),
        path=clean_slashes(entry.path) or "",
        type=entry.type,
        mime_class=mime_class,
        extension=entry.extension if entry.extension is not None else False,
        size=entry.size or 0,
        size_human=format_bytes(entry.size or 0, 0),
        thumbnail=resolve_thumbnail(entry, ctx.storage, ctx.current_folder),
        asset_url=clean_slashes(ctx.storage.url(entry.basename)) or "",
        last_modified=entry.last_modified,
        date=format_modification_date(entry.last_modified) if entry.last_modified is not None else None,
        dimensions=dimensions,
    )
