"""Runtime statistics: elapsed time and memory usage."""

from __future__ import annotations

import gc
import sys
import tracemalloc
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TextIO

from ajutils.human import format_bytes

try:
    import resource
except ImportError:  # not available on every platform
    resource = None  # type: ignore[assignment]


@dataclass(frozen=True)
class MemoryUsage:
    """A snapshot of the interpreter's memory usage."""

    alloc: int  # bytes currently traced by tracemalloc (0 when not tracing)
    total_alloc: int  # peak traced bytes (0 when not tracing)
    sys_bytes: int  # maximum resident set size of the process, 0 if unknown
    num_gc: int  # completed garbage collection runs over all generations


def _max_rss() -> int:
    if resource is None:
        return 0
    rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # Reported in bytes on macOS and in kilobytes elsewhere.
    return rss if sys.platform == "darwin" else rss * 1024


def get_memory_usage() -> MemoryUsage:
    """Return the current memory usage statistics."""
    if tracemalloc.is_tracing():
        current, peak = tracemalloc.get_traced_memory()
    else:
        current, peak = 0, 0
    collections = sum(stat.get("collections", 0) for stat in gc.get_stats())
    return MemoryUsage(
        alloc=current,
        total_alloc=peak,
        sys_bytes=_max_rss(),
        num_gc=collections,
    )


def print_memory_usage(out: TextIO, msg: str, usage: MemoryUsage) -> None:
    """Write the memory usage, preceded by msg when it is not empty."""
    if msg:
        out.write(msg)
    out.write(f"Alloc = {format_bytes(usage.alloc)}")
    out.write(f"\tTotalAlloc = {format_bytes(usage.total_alloc)}")
    out.write(f"\tSys = {format_bytes(usage.sys_bytes)}")
    out.write(f"\tNumGC = {usage.num_gc}\n")


def _fraction(value: int, divisor: int) -> str:
    whole, rest = divmod(value, divisor)
    if not rest:
        return str(whole)
    digits = len(str(divisor)) - 1
    return f"{whole}.{rest:0{digits}d}".rstrip("0")


def _format_duration(elapsed: timedelta) -> str:
    """Format a duration as e.g. ``1h2m3.5s``, ``1.5ms`` or ``0s``."""
    ns = (elapsed // timedelta(microseconds=1)) * 1000
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)

    if ns < 1_000_000_000:
        if ns < 1_000:
            return f"{sign}{ns}ns"
        if ns < 1_000_000:
            return f"{sign}{_fraction(ns, 1_000)}µs"
        return f"{sign}{_fraction(ns, 1_000_000)}ms"

    total_seconds, frac = divmod(ns, 1_000_000_000)
    minutes, seconds = divmod(total_seconds, 60)
    hours, minutes = divmod(minutes, 60)
    text = _fraction(seconds * 1_000_000_000 + frac, 1_000_000_000) + "s"
    if hours or minutes:
        text = f"{minutes}m{text}"
    if hours:
        text = f"{hours}h{text}"
    return sign + text


def _now_like(reference: datetime) -> datetime:
    return datetime.now(reference.tzinfo)


def measure_elapsed_time(out: TextIO, name: str, start: datetime) -> None:
    """Write how long has passed since start, as ``"<name> took: <duration>"``."""
    print_time_taken(out, name, start, _now_like(start))


def print_time_taken(out: TextIO, name: str, start: datetime, end: datetime) -> None:
    """Write the time between start and end, as ``"<name> took: <duration>"``."""
    out.write(f"{name} took: {_format_duration(end - start)}\n")