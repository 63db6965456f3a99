# dithord/luma.py
from __future__ import annotations

"""
Pixel values to normalized luminance.

Exports:
  unit_scale(arr)
  rgb_to_luma(rgb)
  rgb_to_luma_threaded(rgb, workers)

Rec. 709 weights are applied to the encoded (gamma) values, no linearization.
"""

from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .constants import LUMA_REC709, PARALLEL_MIN_ROWS
from .core_types import LumaImage
from .utils import split_rows_into_parts


def unit_scale(arr: np.ndarray) -> np.ndarray:
    """
    Scale integer samples to float32 in [0, 1] by their dtype's range.
    Float input is passed through as float32.
    """
    if np.issubdtype(arr.dtype, np.integer):
        top = float(np.iinfo(arr.dtype).max)
        return (arr.astype(np.float32) / np.float32(top)).astype(np.float32, copy=False)
    return arr.astype(np.float32, copy=False)


def rgb_to_luma(rgb: np.ndarray) -> LumaImage:
    """
    RGB(A) [...,3/4] to float32 luminance [...] in [0, 1].
    Accepts any integer dtype (scaled by its range) or float [0..1].
    """
    # float64 sum so full-scale white lands on exactly 1.0
    rgb_f = unit_scale(rgb[..., :3]).astype(np.float64)
    wr, wg, wb = LUMA_REC709
    luma = wr * rgb_f[..., 0] + wg * rgb_f[..., 1] + wb * rgb_f[..., 2]
    return np.clip(luma, 0.0, 1.0).astype(np.float32, copy=False)


def rgb_to_luma_threaded(rgb: np.ndarray, workers: int) -> LumaImage:
    """Threaded RGB→luma row-chunk conversion (returns float32 [H,W])."""
    H = int(rgb.shape[0])
    if workers <= 1 or H < PARALLEL_MIN_ROWS:
        return rgb_to_luma(rgb)
    with ThreadPoolExecutor(max_workers=workers) as ex:
        futs = [
            ex.submit(rgb_to_luma, rgb[s:e])
            for s, e in split_rows_into_parts(H, workers)
        ]
        parts = [fu.result() for fu in futs]
    return np.vstack(parts).astype(np.float32, copy=False)


__all__ = ["unit_scale", "rgb_to_luma", "rgb_to_luma_threaded"]
