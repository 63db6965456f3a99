"""
Tunables shared across the project.

- Threshold map levels (DEFAULT_LEVEL, MAX_LEVEL)
- Binary output values (ON_VALUE, OFF_VALUE)
- Threading cut-off for row-band dithering
- Rec. 709 luma weights
"""
from __future__ import annotations

from typing import Tuple

# =====================
# Threshold map levels
# =====================
DEFAULT_LEVEL: int = 2  # 8x8
# Interleaved values carry 2 * (level + 1) bits and must stay exact in a
# float32 significand (24 bits).
MAX_LEVEL: int = 11
FLOAT32_SIGNIFICAND_BITS: int = 24

# ==============
# Binary output
# ==============
ON_VALUE: int = 255
OFF_VALUE: int = 0
OPAQUE_ALPHA: int = 255

# ==========
# Threading
# ==========
PARALLEL_MIN_ROWS: int = 256

# =====
# Luma
# =====
LUMA_REC709: Tuple[float, float, float] = (0.2126, 0.7152, 0.0722)

# ====
# I/O
# ====
STDIO_PATH: str = "-"
NO_ALPHA_SUFFIXES = frozenset({".jpg", ".jpeg"})

__all__ = [
    "DEFAULT_LEVEL",
    "MAX_LEVEL",
    "FLOAT32_SIGNIFICAND_BITS",
    "ON_VALUE",
    "OFF_VALUE",
    "OPAQUE_ALPHA",
    "PARALLEL_MIN_ROWS",
    "LUMA_REC709",
    "STDIO_PATH",
    "NO_ALPHA_SUFFIXES",
]
