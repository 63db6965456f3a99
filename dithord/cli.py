#!/usr/bin/env python3
"""
dithord command line.

Usage:
  dithord INPUT OUTPUT [--level N] [--workers N] [--debug]

Input:
  Any Pillow-readable image, or "-" for stdin. Colour input is reduced to
  Rec. 709 luma; alpha is ignored.

Output:
  Black/white RGBA image at full opacity. Format follows the OUTPUT
  extension, or PNG on stdout when OUTPUT is "-". Log lines go to stderr in
  that case.

Level:
  Threshold map side is 2 ** (level + 1): 0 -> 2x2, 1 -> 4x4, 2 -> 8x8 (default).
"""

from __future__ import annotations

import argparse
import sys
import time
from contextlib import redirect_stdout
from typing import BinaryIO, List, Optional

from PIL import UnidentifiedImageError

from . import __version__
from .constants import DEFAULT_LEVEL, MAX_LEVEL, STDIO_PATH
from .errors import InvalidParameterError
from .image_io import (
    binary_to_rgba,
    decode_image,
    drops_alpha,
    image_to_luma,
    read_input_bytes,
    write_image,
)
from .ordered_dither import dither_luma, on_share
from .threshold_map import ThresholdMap
from .utils import (
    debug_log,
    default_workers,
    enable_line_buffered_stdout,
    error,
    format_duration,
    format_percentage,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)

EXIT_FAILURE = 1
EXIT_USAGE = 2


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        input: path or "-"
        output: path or "-"
        level: threshold map level
        workers: threads for luma conversion and dithering
        debug: bool for verbose stage details
    """
    parser = argparse.ArgumentParser(
        prog="dithord",
        description="Bayer ordered dithering utility.",
    )
    parser.add_argument("input", help='Input image file path ("-" for stdin)')
    parser.add_argument("output", help='Output image file path ("-" for stdout)')
    parser.add_argument(
        "-l",
        "--level",
        type=int,
        default=DEFAULT_LEVEL,
        help=f"Threshold map level 0..{MAX_LEVEL} (side = 2^(level+1))",
    )
    parser.add_argument(
        "--workers", type=int, default=default_workers(), help="Internal threads"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose stage details")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace, out_stream: Optional[BinaryIO] = None) -> int:
    """
    load -> threshold map -> dither -> save. Returns a process exit code.
    """
    t_start = time.perf_counter()
    print_banner("stdin" if args.input == STDIO_PATH else str(args.input))

    try:
        threshold_map = ThresholdMap.from_level(args.level)
    except InvalidParameterError as e:
        error(str(e))
        return EXIT_USAGE

    print_config_line(
        "run",
        [
            ("Level", threshold_map.level),
            ("Matrix", f"{threshold_map.size}x{threshold_map.size}"),
            ("Workers", args.workers),
        ],
        debug=False,
    )

    # Load
    try:
        data = read_input_bytes(args.input)
    except FileNotFoundError:
        error(f"not found: {args.input}")
        return EXIT_USAGE
    except OSError as e:
        error(f"failed to read image: {e}")
        return EXIT_FAILURE
    try:
        image = decode_image(data)
    except (UnidentifiedImageError, OSError) as e:
        error(f"failed to decode image: {e}")
        return EXIT_FAILURE
    luma = image_to_luma(image, workers=args.workers)
    t_loaded = time.perf_counter()

    height, width = luma.shape
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Loaded", f"{width}x{height}"),
                    ("Mode", image.mode),
                    ("Format", image.format or "-"),
                ]
            )
        )

    # Dither
    mask = dither_luma(luma, threshold_map, workers=args.workers)
    t_dithered = time.perf_counter()

    if args.debug:
        secs = t_dithered - t_loaded
        debug_log(
            key_value_pairs_to_string(
                [
                    ("On share", format_percentage(on_share(mask))),
                    ("Dither time", format_duration(secs)),
                ]
            )
        )

    # Save
    if drops_alpha(args.output):
        warn(f"{args.output}: format has no alpha channel, writing RGB")
    try:
        written = write_image(args.output, binary_to_rgba(mask), stream=out_stream)
    except (ValueError, OSError) as e:
        error(f"failed to save image: {e}")
        return EXIT_FAILURE
    t_saved = time.perf_counter()

    name = written.name if written is not None else "stdout"
    log(f"Wrote {name} | size={width}x{height} | level={threshold_map.level}")
    if args.debug:
        debug_log(
            f"Total {format_duration(t_saved - t_start)}  "
            f"(load={format_duration(t_loaded - t_start)}, "
            f"dither={format_duration(t_dithered - t_loaded)}, "
            f"save={format_duration(t_saved - t_dithered)})"
        )
    else:
        log(f"Total time {format_duration(t_saved - t_start)}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    When writing the image to stdout, log output is redirected to stderr so
    the byte stream stays clean.
    """
    args = parse_cli_args(argv)
    if args.output == STDIO_PATH:
        out_stream = sys.stdout.buffer
        with redirect_stdout(sys.stderr):
            return run(args, out_stream=out_stream)
    enable_line_buffered_stdout()
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
