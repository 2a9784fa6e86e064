"""
Configuration for the FLM listing engine.

Values are read from `FLM_*` environment variables once and carried around as
an explicit `ListingConfig` instance.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Mapping

from .utils import env_bool

logger = logging.getLogger(__name__)

DIRECTION_ASC = "asc"
DIRECTION_DESC = "desc"

DEFAULT_DISK = "public"
DEFAULT_CLOUD_DISKS: tuple[str, ...] = ("s3", "google", "s3-cached")
DEFAULT_FILTERS: dict[str, tuple[str, ...]] = {
    "images": ("jpg", "jpeg", "png", "gif", "svg", "bmp", "tiff", "webp"),
    "documents": ("doc", "docx", "xls", "xlsx", "ppt", "pptx", "pdf", "txt", "rtf", "odt", "csv"),
    "videos": ("mp4", "avi", "mov", "mkv", "webm", "wmv", "flv"),
    "audios": ("mp3", "ogg", "wav", "flac", "aac", "m4a"),
}


def _env_raw(*names: str, default: str | None = None) -> str | None:
    for name in names:
        if not name:
            continue
        val = os.getenv(name)
        if val is not None and str(val).strip() != "":
            return str(val).strip()
    return default


def _env_int(default: int, *names: str, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid integer for %s=%r, using default=%s", names[0] if names else "<unknown>", raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, min_value)
        value = min_value
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, max_value)
        value = max_value
    return value


def _env_float(default: float, *names: str, min_value: float | None = None, max_value: float | None = None) -> float:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid float for %s=%r, using default=%s", names[0] if names else "<unknown>", raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, min_value)
        value = min_value
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, max_value)
        value = max_value
    return value


def _env_bool(default: bool, *names: str) -> bool:
    for name in names:
        if name and name in os.environ:
            return env_bool(name, default)
    return default


def _env_list(default: tuple[str, ...], *names: str) -> tuple[str, ...]:
    """Comma separated list; an explicitly empty variable yields an empty tuple."""
    for name in names:
        if name and name in os.environ:
            raw = os.environ.get(name) or ""
            return tuple(part.strip() for part in raw.split(",") if part.strip())
    return default


def _env_filters(default: Mapping[str, tuple[str, ...]], *names: str) -> dict[str, tuple[str, ...]]:
    raw = _env_raw(*names)
    if raw is None:
        return dict(default)
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Invalid JSON for %s, using default filters", names[0] if names else "<unknown>")
        return dict(default)
    if not isinstance(parsed, dict):
        logger.warning("%s must be a JSON object, using default filters", names[0] if names else "<unknown>")
        return dict(default)
    filters: dict[str, tuple[str, ...]] = {}
    for key, exts in parsed.items():
        if isinstance(exts, str):
            exts = [exts]
        if not isinstance(exts, (list, tuple)):
            logger.warning("Ignoring filter %r: expected a list of extensions", key)
            continue
        filters[str(key)] = tuple(str(e) for e in exts)
    return filters


def normalize_filters(filters: Mapping[str, tuple[str, ...] | list[str] | set[str]]) -> dict[str, frozenset[str]]:
    """Lower-case filter keys so lookups are case-insensitive."""
    return {str(key).lower(): frozenset(str(e) for e in exts) for key, exts in (filters or {}).items()}


@dataclass(frozen=True)
class ListingConfig:
    """Everything the listing engine reads from configuration."""

    disk: str = DEFAULT_DISK
    cache_ttl: float = 0.0
    direction: str = DIRECTION_ASC
    filters: dict[str, frozenset[str]] = field(default_factory=lambda: normalize_filters(DEFAULT_FILTERS))
    cloud_disks: frozenset[str] = frozenset(DEFAULT_CLOUD_DISKS)
    excluded_extensions: frozenset[str] = frozenset()
    excluded_folders: frozenset[str] = frozenset()
    excluded_files: frozenset[str] = frozenset()
    probe_cloud_dimensions: bool = False
    workers: int = 1
    http_timeout: float = 10.0

    def __post_init__(self) -> None:
        direction = str(self.direction or DIRECTION_ASC).strip().lower()
        if direction not in (DIRECTION_ASC, DIRECTION_DESC):
            logger.warning("Unknown sort direction %r, using %s", self.direction, DIRECTION_ASC)
            direction = DIRECTION_ASC
        object.__setattr__(self, "direction", direction)
        object.__setattr__(self, "filters", normalize_filters(self.filters))
        for name in ("cloud_disks", "excluded_extensions", "excluded_folders", "excluded_files"):
            object.__setattr__(self, name, frozenset(getattr(self, name) or ()))
        object.__setattr__(self, "workers", max(1, int(self.workers or 1)))

    @property
    def cache_enabled(self) -> bool:
        return bool(self.cache_ttl and self.cache_ttl > 0)

    @property
    def is_cloud_disk(self) -> bool:
        return self.disk in self.cloud_disks

    @classmethod
    def from_env(cls) -> "ListingConfig":
        return cls(
            disk=_env_raw("FLM_DISK", default=DEFAULT_DISK) or DEFAULT_DISK,
            cache_ttl=_env_float(0.0, "FLM_CACHE_TTL_SECONDS", "FLM_CACHE", min_value=0.0, max_value=365.0 * 24.0 * 3600.0),
            direction=_env_raw("FLM_DIRECTION", default=DIRECTION_ASC) or DIRECTION_ASC,
            filters=_env_filters(DEFAULT_FILTERS, "FLM_FILTERS"),
            cloud_disks=frozenset(_env_list(DEFAULT_CLOUD_DISKS, "FLM_CLOUD_DISKS")),
            excluded_extensions=frozenset(_env_list((), "FLM_EXCLUDED_EXTENSIONS")),
            excluded_folders=frozenset(_env_list((), "FLM_EXCLUDED_FOLDERS")),
            excluded_files=frozenset(_env_list((), "FLM_EXCLUDED_FILES")),
            probe_cloud_dimensions=_env_bool(False, "FLM_PROBE_CLOUD_DIMENSIONS"),
            workers=_env_int(1, "FLM_LIST_WORKERS", min_value=1, max_value=32),
            http_timeout=_env_float(10.0, "FLM_HTTP_TIMEOUT", min_value=0.5, max_value=120.0),
        )
