"""Stable entry identifiers."""
from __future__ import annotations

import hashlib

from .models import RawEntry


def generate_id(entry: RawEntry, disk: str) -> str:
    """
    MD5 hex digest of disk, trimmed basename and modification time.

    The same inputs give the same id across processes, so it doubles as the
    cache key for the enriched record.
    """
    seed = f"{disk}_{entry.basename.strip()}"
    if entry.last_modified is not None:
        seed += str(entry.last_modified)
    return hashlib.md5(seed.encode("utf-8")).hexdigest()
