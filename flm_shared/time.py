"""
Time utilities for timestamps and performance measurement.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

MODIFICATION_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def now() -> float:
    """Get current timestamp in seconds (float)."""
    return time.time()


def format_modification_date(ts: float | int | None) -> str | None:
    """
    Format an epoch timestamp as "YYYY-MM-DD HH:MM:SS" in UTC.

    Returns None when the timestamp cannot be converted.
    """
    if ts is None or isinstance(ts, bool):
        return None
    try:
        return datetime.fromtimestamp(float(ts), tz=timezone.utc).strftime(MODIFICATION_DATE_FORMAT)
    except (OverflowError, OSError, ValueError, TypeError):
        return None


@contextmanager
def timer(label: str, logger: logging.Logger) -> Iterator[None]:
    """
    Context manager for timing operations.

    Usage:
        with timer("listing photos/", logger):
            service.list_folder("photos")
    """
    start = now()
    try:
        yield
    finally:
        logger.debug("%s took %.3fs", label, now() - start)
