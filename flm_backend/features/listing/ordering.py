"""
Category filtering and ordering of enriched records.

Both steps partition records into directories and files first; directories
always come out ahead of files.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ...config import DIRECTION_DESC
from .models import EntryRecord

# Request-facing order names mapped to record attributes
ORDER_FIELD_ALIASES = {
    "mime": "mime_class",
    "ext": "extension",
    "last_modification": "last_modified",
    "modified": "last_modified",
}


def split_entries(records: Sequence[EntryRecord]) -> tuple[list[EntryRecord], list[EntryRecord]]:
    dirs = [r for r in records if r.type == "dir"]
    files = [r for r in records if r.type == "file"]
    return dirs, files


def filter_data(
    records: Sequence[EntryRecord],
    filter_key: Optional[str],
    filters: Mapping[str, frozenset[str]],
) -> list[EntryRecord]:
    """
    Keep every directory and only the files whose extension the named filter allows.

    An unknown key matches no files. Without any configured filter the
    records pass through untouched.
    """
    if not filter_key or not filters:
        return list(records)
    dirs, files = split_entries(records)
    allowed = filters.get(str(filter_key).lower(), frozenset())
    return dirs + [r for r in files if r.extension in allowed]


def _field_text(record: EntryRecord, order: str) -> str:
    value: Any = getattr(record, ORDER_FIELD_ALIASES.get(order, order), None)
    if value is None or value is False:
        return ""
    return str(value).lower()


def _sort_group(group: list[EntryRecord], order: str, direction: str) -> list[EntryRecord]:
    if order == "size":
        return sorted(group, key=lambda r: r.size or 0, reverse=True)
    if direction == DIRECTION_DESC:
        return sorted(group, key=lambda r: _field_text(r, order), reverse=True)
    # Stable sorts: name breaks ties of the requested field.
    by_name = sorted(group, key=lambda r: r.name)
    return sorted(by_name, key=lambda r: _field_text(r, order))


def order_data(records: Sequence[EntryRecord], order: str = "name", direction: str = "asc") -> list[EntryRecord]:
    """
    Sort directories and files separately, then put directories first.

    `size` always sorts largest first; other fields compare lower-cased text
    and honour `direction`.
    """
    order = str(order or "name")
    dirs, files = split_entries(records)
    return _sort_group(dirs, order, direction) + _sort_group(files, order, direction)
