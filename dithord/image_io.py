# dithord/image_io.py
from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import BinaryIO, Optional, Union

import numpy as np
from PIL import Image, ImageOps

from .constants import (
    NO_ALPHA_SUFFIXES,
    OFF_VALUE,
    ON_VALUE,
    OPAQUE_ALPHA,
    STDIO_PATH,
)
from .core_types import BinaryMask, LumaImage, U8Gray, U8Image, assert_u8_image_rgb
from .luma import rgb_to_luma_threaded, unit_scale

"""
Image I/O around the dithering core: decode to luminance, encode binary masks.

"-" stands for stdin (input) or stdout (output). Decode and encode errors
from Pillow are left to propagate to the caller.
"""

PathLike = Union[str, Path]

# Single-channel modes read directly as luminance.
_GREY_MODES = {"L", "I", "I;16", "F"}


# ---------- input -------------------------------------------------------------


def read_input_bytes(src: PathLike, stream: Optional[BinaryIO] = None) -> bytes:
    """Read raw image bytes from a file path, or from stdin when src is "-"."""
    if str(src) == STDIO_PATH:
        stream = stream if stream is not None else sys.stdin.buffer
        return stream.read()
    return Path(src).read_bytes()


def decode_image(data: bytes) -> Image.Image:
    """
    Decode bytes with format auto-detection and apply EXIF orientation.
    The detected format name is kept on the returned image (`.format`).
    """
    with Image.open(io.BytesIO(data)) as im0:
        im0.load()
        im = ImageOps.exif_transpose(im0)
        im.format = im0.format
    return im


def image_to_luma(im: Image.Image, workers: int = 1) -> LumaImage:
    """Pillow image to float32 (H,W) luminance in [0, 1]. Alpha is dropped."""
    if im.mode in _GREY_MODES:
        arr = np.array(im)
        if im.mode == "I":
            # 32-bit mode "I" usually holds 16-bit samples
            arr = np.clip(arr, 0, 65535).astype(np.uint16)
        elif im.mode == "F":
            arr = np.clip(arr, 0.0, 1.0)
        return unit_scale(arr)
    if im.mode == "LA":
        return unit_scale(np.array(im)[..., 0])
    rgb = np.array(im.convert("RGB"), dtype=np.uint8)
    return rgb_to_luma_threaded(rgb, workers)


def load_luma(src: PathLike, workers: int = 1) -> LumaImage:
    """read_input_bytes -> decode_image -> image_to_luma."""
    return image_to_luma(decode_image(read_input_bytes(src)), workers=workers)


# ---------- output ------------------------------------------------------------


def binary_to_u8(mask: BinaryMask) -> U8Gray:
    """Bool/0-1 mask to uint8 grey (ON_VALUE / OFF_VALUE)."""
    return np.where(np.asarray(mask) > 0, ON_VALUE, OFF_VALUE).astype(np.uint8)


def binary_to_rgba(mask: BinaryMask) -> U8Image:
    """Replicate the binary grey over RGB at full opacity: (H,W,4) uint8."""
    grey = binary_to_u8(mask)
    H, W = grey.shape
    out = np.empty((H, W, 4), dtype=np.uint8)
    out[..., :3] = grey[..., None]
    out[..., 3] = OPAQUE_ALPHA
    return out


def encode_png(rgba: U8Image) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(assert_u8_image_rgb(rgba)).save(buf, format="PNG")
    return buf.getvalue()


def drops_alpha(dst: PathLike) -> bool:
    """True when the destination format cannot carry an alpha channel."""
    return str(dst) != STDIO_PATH and Path(dst).suffix.lower() in NO_ALPHA_SUFFIXES


def write_image(
    dst: PathLike, rgba: U8Image, stream: Optional[BinaryIO] = None
) -> Optional[Path]:
    """
    Write an RGBA image.

    "-" writes PNG bytes to `stream` (stdout by default) and returns None.
    Otherwise the format follows the file extension (PNG when there is none)
    and the written path is returned.
    """
    if str(dst) == STDIO_PATH:
        stream = stream if stream is not None else sys.stdout.buffer
        stream.write(encode_png(rgba))
        stream.flush()
        return None

    path = Path(dst)
    im = Image.fromarray(assert_u8_image_rgb(rgba))
    if drops_alpha(path):
        im = im.convert("RGB")
    if path.suffix:
        im.save(path)
    else:
        im.save(path, format="PNG")
    return path


__all__ = [
    "read_input_bytes",
    "decode_image",
    "image_to_luma",
    "load_luma",
    "binary_to_u8",
    "binary_to_rgba",
    "encode_png",
    "drops_alpha",
    "write_image",
]
