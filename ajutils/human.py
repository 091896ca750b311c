"""Human readable output."""

from __future__ import annotations

import math

_SIZES = ("B", "kB", "MB", "GB", "TB", "PB", "EB")
_BASE = 1000
_MAX = 2**64 - 1


def format_bytes(size: int) -> str:
    """Return a human readable SI representation of a byte count, e.g. ``"1.0 kB"``."""
    if size < 0 or size > _MAX:
        raise ValueError(f"size {size} is outside the range 0..{_MAX}")
    if size < 10:
        return f"{size} B"

    exponent = 0
    while size >= _BASE ** (exponent + 1):
        exponent += 1

    value = math.floor(size / _BASE**exponent * 10 + 0.5) / 10
    suffix = _SIZES[exponent]
    if value < 10:
        return f"{value:.1f} {suffix}"
    return f"{value:.0f} {suffix}"