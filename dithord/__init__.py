"""
dithord package.

Purpose:
  Bayer ordered dithering: grayscale luminance in, black/white out.
  See dithord.cli for the command line.

Public API:
  ThresholdMap   : immutable Bayer threshold matrix with wrap-around sampling.
  dither_luma    : vectorized dithering of a float32 (H,W) luminance array.
  dither_image   : per-pixel dithering over the LuminanceSource/BinarySink interface.
  is_on          : the single-pixel decision (luminance > threshold).
  LumaGrid       : numpy-backed LuminanceSource and BinarySink.
  errors         : InvalidParameterError, DimensionMismatchError.
  image_io       : Pillow decode/encode helpers (outside the core).

Quick start:
  from dithord import ThresholdMap, dither_luma
  mask = dither_luma(luma, ThresholdMap.from_level(2))
"""

__version__ = "0.1.0"

from . import constants
from . import core_types
from . import errors
from . import utils

from .core_types import BinarySink, LumaGrid, LuminanceSource  # noqa: E402
from .errors import (  # noqa: E402
    DimensionMismatchError,
    DithordError,
    InvalidParameterError,
)
from .threshold_map import ThresholdMap  # noqa: E402
from .ordered_dither import dither_image, dither_luma, is_on  # noqa: E402

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "errors",
    "utils",
    "BinarySink",
    "LumaGrid",
    "LuminanceSource",
    "DithordError",
    "DimensionMismatchError",
    "InvalidParameterError",
    "ThresholdMap",
    "dither_image",
    "dither_luma",
    "is_on",
]
