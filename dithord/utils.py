from __future__ import annotations

"""
Shared utilities for dithord.

Row-band partitioning for threaded dithering, worker-count defaults, and the
print-based log lines the CLI emits.
"""

import os
import sys
from typing import Any, Iterable, List, Tuple


# Work splitting


def split_rows_into_parts(height: int, parts: int) -> List[Tuple[int, int]]:
    """Partition range [0, height) into ~parts contiguous [start, end) row bands."""
    parts = max(1, int(parts))
    step = max(1, (height + parts - 1) // parts)
    return [(start, min(start + step, height)) for start in range(0, height, step)]


def default_workers() -> int:
    """CPU count minus a small reserve for the system (at least 1)."""
    n = os.cpu_count() or 4
    reserve = 1 if n <= 6 else 2 if n <= 12 else 3
    return max(1, n - reserve)


# Formatting


def format_duration(seconds: float) -> str:
    """'12.3ms' under a second, '1.234s' under a minute, else 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {int(round(seconds - 60 * minutes))}s"


def format_percentage(share: float, decimals: int = 1) -> str:
    """0..1 share as a percentage string."""
    return f"{share * 100.0:.{decimals}f}%"


def key_value_pairs_to_string(pairs: Iterable[Tuple[str, Any]]) -> str:
    """'Name: value' blocks joined by two spaces; ints get thousands separators."""
    return "  ".join(
        f"{name}: {value:,}" if isinstance(value, int) else f"{name}: {value}"
        for name, value in pairs
    )


# Logging


def enable_line_buffered_stdout() -> None:
    """Line-buffer stdout when the stream supports .reconfigure()."""
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (ValueError, OSError):
            pass


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    One config line, e.g. "[run] Level: 2  Matrix: 8x8  Workers: 6".
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def print_banner(title: str) -> None:
    print(f"\n=== {title} ===", flush=True)


def log(message: str) -> None:
    print(message, flush=True)


def debug_log(message: str) -> None:
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error line, always to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    "split_rows_into_parts",
    "default_workers",
    "format_duration",
    "format_percentage",
    "key_value_pairs_to_string",
    "enable_line_buffered_stdout",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
