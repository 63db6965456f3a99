# dithord/ordered_dither.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import numpy as np

from .constants import PARALLEL_MIN_ROWS
from .core_types import (
    BinaryMask,
    BinarySink,
    LumaGrid,
    LumaImage,
    LuminanceSource,
    assert_luma_2d,
    source_size,
)
from .errors import DimensionMismatchError
from .threshold_map import ThresholdMap
from .utils import split_rows_into_parts


# ---------- per-pixel decision ------------------------------------------------


def is_on(luminance: float, threshold: float) -> bool:
    """On iff luminance > threshold, compared in float32. Equal is off."""
    return bool(np.float32(luminance) > np.float32(threshold))


# ---------- array path --------------------------------------------------------


def _dither_rows(
    luma: LumaImage,
    threshold_map: ThresholdMap,
    out: np.ndarray,
    start: int,
    end: int,
) -> None:
    """Threshold rows [start, end) of luma into the same rows of out."""
    band = luma[start:end].astype(np.float32, copy=False)
    thresholds = threshold_map.tile(end - start, band.shape[1], y0=start)
    out[start:end] = band > thresholds


def dither_luma(
    luma: LumaImage,
    threshold_map: ThresholdMap,
    *,
    workers: int = 1,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Ordered-dither a float32 (H,W) luminance array.

    Returns a bool mask (True = on) unless `out` is given, in which case the
    decisions are written into `out` and it is returned. Passing the
    luminance array itself as `out` dithers in place (1.0 / 0.0).

    With workers > 1 and at least PARALLEL_MIN_ROWS rows the image is split
    into row bands on a thread pool. Bands never overlap.
    """
    luma = assert_luma_2d(luma)
    H, W = luma.shape
    if out is None:
        out = np.empty((H, W), dtype=np.bool_)
    elif out.shape != luma.shape:
        raise DimensionMismatchError((W, H), tuple(reversed(out.shape[:2])))

    if workers <= 1 or H < PARALLEL_MIN_ROWS:
        _dither_rows(luma, threshold_map, out, 0, H)
        return out

    with ThreadPoolExecutor(max_workers=workers) as ex:
        futs = [
            ex.submit(_dither_rows, luma, threshold_map, out, s, e)
            for s, e in split_rows_into_parts(H, workers)
        ]
        for fu in futs:
            fu.result()
    return out


# ---------- capability-interface path -----------------------------------------


def dither_image(
    source: LuminanceSource,
    threshold_map: ThresholdMap,
    sink: Optional[BinarySink] = None,
) -> BinarySink:
    """
    Ordered-dither any LuminanceSource into a BinarySink, pixel by pixel.

    Without a sink the source is overwritten when it is itself a BinarySink,
    otherwise a fresh LumaGrid of the same size receives the result.
    """
    size = source_size(source)
    if sink is None:
        sink = source if isinstance(source, BinarySink) else LumaGrid.blank(*size)
    elif source_size(sink) != size:
        raise DimensionMismatchError(size, source_size(sink))

    width, height = size
    for y in range(height):
        for x in range(width):
            sink.put(x, y, is_on(source.luminance(x, y), threshold_map.sample(x, y)))
    return sink


def on_share(mask: BinaryMask) -> float:
    """Fraction of on pixels; 0.0 for an empty mask."""
    if mask.size == 0:
        return 0.0
    return float(np.count_nonzero(mask)) / float(mask.size)


__all__ = ["is_on", "dither_luma", "dither_image", "on_share"]
