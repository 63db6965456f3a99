# dithord/threshold_map.py
from __future__ import annotations

"""
Bayer threshold map generation and toroidal sampling.

A level N map is a square of side 2 ** (N + 1). Cell (i, j) is built by
XOR-ing the row and column indices and interleaving the bits of the column
with the bits of the XOR, most significant pair first. Dividing by size**2
gives a threshold in [0, 1). This reproduces the recursive Bayer pattern
without recursion; level 2 is the classic 8x8 matrix.

Sampling wraps on both axes so a small map tiles across any image.
Convention: row = y, col = x. The matrix is not symmetric.
"""

from dataclasses import dataclass
from typing import Union

import numpy as np

from .constants import FLOAT32_SIGNIFICAND_BITS, MAX_LEVEL
from .core_types import ThresholdMatrix
from .errors import InvalidParameterError

IntOrArray = Union[int, np.ndarray]


# ---------- bit helpers -------------------------------------------------------


def interleave_bits(high: IntOrArray, low: IntOrArray, power: int) -> IntOrArray:
    """
    Interleave `power` bits of `high` and `low`, MSB pair first.

    Bit k of `high` lands at output bit 2*(power-1-k), bit k of `low` right
    above it. Works on Python ints and numpy integer arrays alike.
    """
    result = (high * 0) | (low * 0)
    bit = 0
    for mask in range(power - 1, -1, -1):
        result |= ((high >> mask) & 1) << bit
        bit += 1
        result |= ((low >> mask) & 1) << bit
        bit += 1
    return result


def _check_level(level: int) -> int:
    if isinstance(level, bool) or not isinstance(level, (int, np.integer)):
        raise InvalidParameterError(f"level must be an integer, got {level!r}")
    level = int(level)
    if level < 0:
        raise InvalidParameterError(f"level must be >= 0, got {level}")
    if level > MAX_LEVEL or 2 * (level + 1) > FLOAT32_SIGNIFICAND_BITS:
        raise InvalidParameterError(
            f"level {level} exceeds the supported maximum of {MAX_LEVEL}"
        )
    return level


def bayer_matrix(level: int) -> ThresholdMatrix:
    """Generate the (2**(level+1))**2 float32 threshold matrix for `level`."""
    level = _check_level(level)
    power = level + 1
    size = 1 << power

    # 2 * power <= 24 bits: int32 holds every value, float32 keeps it exact.
    rows = np.arange(size, dtype=np.int32)[:, None]
    cols = np.arange(size, dtype=np.int32)[None, :]
    interleaved = interleave_bits(cols, rows ^ cols, power)

    matrix = interleaved.astype(np.float32)
    matrix *= np.float32(1.0 / (size * size))
    return matrix


# ---------- value object ------------------------------------------------------


@dataclass(frozen=True, eq=False)
class ThresholdMap:
    """Immutable square Bayer threshold matrix with wrap-around sampling."""

    level: int
    matrix: ThresholdMatrix  # (size, size), read-only

    def __post_init__(self) -> None:
        level = _check_level(self.level)
        size = 1 << (level + 1)
        matrix = np.array(self.matrix, dtype=np.float32, copy=True)
        if matrix.shape != (size, size):
            raise InvalidParameterError(
                f"level {level} needs a {size}x{size} matrix, got shape {matrix.shape}"
            )
        if not np.all((matrix >= 0.0) & (matrix < 1.0)):
            raise InvalidParameterError("threshold values must lie in [0, 1)")
        matrix.setflags(write=False)
        object.__setattr__(self, "level", level)
        object.__setattr__(self, "matrix", matrix)

    @classmethod
    def from_level(cls, level: int) -> "ThresholdMap":
        return cls(level, bayer_matrix(level))

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> "ThresholdMap":
        """
        Wrap an explicit square matrix.

        The side must be a power of two >= 2 and every value in [0, 1).
        The level is derived from the side length.
        """
        arr = np.asarray(matrix, dtype=np.float32)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise InvalidParameterError(
                f"threshold matrix must be square, got shape {arr.shape}"
            )
        size = int(arr.shape[0])
        if size < 2 or size & (size - 1):
            raise InvalidParameterError(
                f"threshold matrix side must be a power of two >= 2, got {size}"
            )
        return cls(size.bit_length() - 2, arr)

    @property
    def size(self) -> int:
        return int(self.matrix.shape[0])

    def sample(self, x: int, y: int) -> float:
        """Threshold at (x, y), wrapping around on both axes."""
        size = self.size
        return float(self.matrix[y % size, x % size])

    def tile(self, height: int, width: int, y0: int = 0, x0: int = 0) -> ThresholdMatrix:
        """
        (height, width) block of thresholds starting at (x0, y0).

        Cell (r, c) equals sample(x0 + c, y0 + r).
        """
        size = self.size
        ys = (np.arange(height, dtype=np.int64) + int(y0)) % size
        xs = (np.arange(width, dtype=np.int64) + int(x0)) % size
        return self.matrix[np.ix_(ys, xs)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ThresholdMap):
            return NotImplemented
        return self.level == other.level and np.array_equal(self.matrix, other.matrix)

    def __hash__(self) -> int:
        return hash((self.level, self.matrix.tobytes()))

    def __repr__(self) -> str:
        return f"ThresholdMap(level={self.level}, size={self.size})"


__all__ = ["ThresholdMap", "bayer_matrix", "interleave_bits"]
