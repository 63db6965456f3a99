from __future__ import annotations

"""
Core type aliases, the image capability interface, and small validators.
"""

from dataclasses import dataclass
from typing import Protocol, Tuple, runtime_checkable

import numpy as np
from numpy.typing import NDArray

# Basic aliases

U8Image = NDArray[np.uint8]  # (H, W, 3) or (H, W, 4)
U8Gray = NDArray[np.uint8]  # (H, W)
LumaImage = NDArray[np.float32]  # (H, W) values in [0, 1]
ThresholdMatrix = NDArray[np.float32]  # (S, S) values in [0, 1)
BinaryMask = NDArray[np.bool_]  # (H, W) True = on
Size = Tuple[int, int]  # (width, height)

# Capability interface


@runtime_checkable
class LuminanceSource(Protocol):
    """Anything with a size and a normalized per-pixel luminance reader."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def luminance(self, x: int, y: int) -> float: ...


@runtime_checkable
class BinarySink(Protocol):
    """Anything with a size and a per-pixel on/off writer."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def put(self, x: int, y: int, on: bool) -> None: ...


# Value objects


@dataclass(frozen=True, eq=False)
class LumaGrid:
    """
    Float32 luminance buffer implementing both LuminanceSource and BinarySink.

    put() overwrites the sample with 1.0 (on) or 0.0 (off), so a grid can be
    dithered in place.
    Equality and hashing are by identity.
    """

    data: LumaImage  # shape (H, W)

    def __post_init__(self) -> None:
        assert_luma_2d(self.data)

    @classmethod
    def blank(cls, width: int, height: int) -> "LumaGrid":
        return cls(np.zeros((int(height), int(width)), dtype=np.float32))

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def size(self) -> Size:
        return (self.width, self.height)

    def luminance(self, x: int, y: int) -> float:
        return float(self.data[y, x])

    def put(self, x: int, y: int, on: bool) -> None:
        self.data[y, x] = 1.0 if on else 0.0


# Validators


def assert_luma_2d(luma: np.ndarray) -> LumaImage:
    """Validate a 2D luminance array and return it typed as LumaImage."""
    if not isinstance(luma, np.ndarray) or luma.ndim != 2:
        raise TypeError("expected 2D (H,W) luminance array")
    return luma  # type: ignore[return-value]


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3 or 4) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] < 3:
        raise TypeError("expected uint8 (H,W,3/4) image")
    return image  # type: ignore[return-value]


def source_size(source: LuminanceSource) -> Size:
    """(width, height) of any sized image."""
    return (int(source.width), int(source.height))


__all__ = [
    # aliases / types
    "U8Image",
    "U8Gray",
    "LumaImage",
    "ThresholdMatrix",
    "BinaryMask",
    "Size",
    # capability interface
    "LuminanceSource",
    "BinarySink",
    # value objects
    "LumaGrid",
    # helpers
    "assert_luma_2d",
    "assert_u8_image_rgb",
    "source_size",
]
