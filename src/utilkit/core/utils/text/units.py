"""Human-readable unit formatting."""
from __future__ import annotations

import re
from typing import Any

BYTE_UNITS = ("bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")

_LEADING_INT = re.compile(r"\s*([-+]?\d+)")


def _as_int(value: Any) -> int:
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def format_bytes(size: Any) -> str:
    """Format a byte count with 1024-based units.

    Scaled values below 10 keep one decimal; anything unparseable counts as 0.

    Example:
        >>> format_bytes(1536)
        '1.5 KB'
        >>> format_bytes(12 * 1024 ** 3)
        '12 GB'
    """
    n: float = _as_int(size)
    level = 0
    while n >= 1024 and level < len(BYTE_UNITS) - 1:
        n /= 1024
        level += 1
    decimals = 1 if n < 10 and level > 0 else 0
    return f"{n:.{decimals}f} {BYTE_UNITS[level]}"


__all__ = ["format_bytes", "BYTE_UNITS"]
