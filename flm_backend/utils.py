"""
Utility helpers shared across backend modules.
"""
from __future__ import annotations

import os
from typing import Any

BOOL_TRUE_VALUES = frozenset({"1", "true", "yes", "on", "enabled"})
BOOL_FALSE_VALUES = frozenset({"0", "false", "no", "off", "disabled"})

# 1024-based units
BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


def parse_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in BOOL_TRUE_VALUES:
            return True
        if normalized in BOOL_FALSE_VALUES:
            return False
        try:
            return bool(float(normalized))
        except ValueError:
            pass
    return default


def env_bool(name: str, default: bool) -> bool:
    if not name:
        return default
    raw = os.environ.get(name)
    if raw is None:
        return default
    return parse_bool(raw, default)


def format_bytes(size: int | float, precision: int = 0) -> str:
    """
    Human-readable size using binary (1024) steps, e.g. 2048 -> "2 KB".

    Negative sizes are clamped to zero.
    """
    value = max(float(size or 0), 0.0)
    power = 0
    while value >= 1024 and power < len(BYTE_UNITS) - 1:
        value /= 1024
        power += 1
    return f"{round(value, precision):.{precision}f} {BYTE_UNITS[power]}"
