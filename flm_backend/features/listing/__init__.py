"""
Folder listing feature.
"""

from .acceptance import accept, default_accept, folder_is_visible, is_dot
from .cache_gate import get_or_compute
from .dimensions import probe_dimensions, probe_dimensions_from_url, read_image_size
from .enricher import EnrichContext, build_entry_record
from .identity import generate_id
from .models import EntryRecord, RawEntry
from .navigation import generate_parent, get_paths, relative_path, url_prefix
from .normalizer import list_contents, normalize_entry, probe_mime_type, resolve_mime
from .ordering import filter_data, order_data
from .service import ListingService
from .thumbnails import resolve_thumbnail

__all__ = [
    "EnrichContext",
    "EntryRecord",
    "ListingService",
    "RawEntry",
    "accept",
    "build_entry_record",
    "default_accept",
    "filter_data",
    "folder_is_visible",
    "generate_id",
    "generate_parent",
    "get_or_compute",
    "get_paths",
    "is_dot",
    "list_contents",
    "normalize_entry",
    "order_data",
    "probe_dimensions",
    "probe_dimensions_from_url",
    "probe_mime_type",
    "read_image_size",
    "relative_path",
    "resolve_mime",
    "resolve_thumbnail",
    "url_prefix",
]
