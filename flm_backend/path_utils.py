"""
Shared path normalization and safety helpers.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.-]*:)?//")
_MULTI_SLASH_RE = re.compile(r"/{2,}")


def clean_slashes(value: str | None) -> str | None:
    """
    Normalize separators: backslashes become "/" and repeated slashes collapse.

    A leading URL scheme ("https://") or protocol-relative "//" is preserved.
    """
    if value is None:
        return None
    raw = str(value).replace("\\", "/")
    match = _SCHEME_RE.match(raw)
    head = ""
    if match:
        head = match.group(0)
        raw = raw[len(head):]
    return head + _MULTI_SLASH_RE.sub("/", raw)


def split_segments(value: str | None) -> list[str]:
    """Split a slash path into its non-empty segments."""
    cleaned = clean_slashes(value or "") or ""
    return [part for part in cleaned.split("/") if part]


def safe_rel_path(value: str | None) -> Path | None:
    """
    Convert a backend-relative path into a relative `Path`.

    Leading slashes are treated as the storage root. Returns None for values
    that would escape the root.
    """
    if value is None:
        return Path("")
    raw = str(value).strip().replace("\\", "/").lstrip("/")
    if raw == "":
        return Path("")
    if "\x00" in raw:
        return None
    try:
        rel = Path(raw)
    except (OSError, ValueError):
        return None
    if getattr(rel, "drive", ""):
        return None
    if rel.is_absolute():
        return None
    if any(part == ".." for part in rel.parts):
        return None
    return rel


def is_within_root(candidate: Path, root: Path) -> bool:
    try:
        root_resolved = root.resolve(strict=True)
        cand_resolved = candidate.resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return False
    try:
        return cand_resolved == root_resolved or cand_resolved.is_relative_to(root_resolved)
    except AttributeError:
        try:
            common = os.path.commonpath([str(cand_resolved), str(root_resolved)])
            return os.path.normcase(common) == os.path.normcase(str(root_resolved))
        except ValueError:
            return False
