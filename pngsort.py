#!/usr/bin/env python3
"""
PNGSort — Pixel Sorting Glitch Tool
CLI entry point. Also importable as a library.

Usage:
    python pngsort.py -i in.png -o out.png
    python pngsort.py -i in.png -o out.png --sort-range column --descending
    python pngsort.py -i in.png -o out.png --sort-mode tied-by-order --sort-channel g,r
    python pngsort.py -i in.png -o out.png --sort-mode untied --sort-channel r,b
    python pngsort.py -i in.png -o out.png --config settings.json
    python pngsort.py --list-modes
"""

import sys
import os
import argparse
import logging

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core.config import ColorChannel, SortConfig, SortMode, SortRange, parse_config
from core.engine import sort_image
from core.image_io import decode_png, encode_png
from core.safety import preflight
from effects import list_sorters

__version__ = "0.1.0"

SORT_RANGES = {
    "row": SortRange.ROW,
    "column": SortRange.COLUMN,
    "row-major": SortRange.ROW_MAJOR,
    "column-major": SortRange.COLUMN_MAJOR,
}

SORT_MODES = {
    "tied-by-sum": SortMode.TIED_BY_SUM,
    "tied-by-order": SortMode.TIED_BY_ORDER,
    "untied": SortMode.UNTIED,
}

ALL_CHANNELS = [ColorChannel.R, ColorChannel.G, ColorChannel.B]


def _parse_channels(val: str) -> list:
    """Parse a comma-separated channel list ("r,g,b"). Empty string = no channels."""
    channels = []
    for part in val.split(","):
        part = part.strip().upper()
        if not part:
            continue
        try:
            channels.append(ColorChannel(part))
        except ValueError:
            raise argparse.ArgumentTypeError(
                f"Unknown channel '{part.lower()}'. Use r, g or b."
            )
    return channels


def build_config(args, color_type) -> SortConfig:
    """Turn CLI flags (or --config) into a SortConfig for an image of color_type."""
    sort_flags = [args.descending, args.sort_range, args.sort_mode, args.sort_channel]
    if args.config:
        if any(flag is not None for flag in sort_flags):
            raise ValueError("--config cannot be combined with sort flags")
        with open(args.config, encoding="utf-8") as f:
            return parse_config(f.read())

    channels = args.sort_channel
    if channels is None:
        channels = [] if color_type.is_grayscale else list(ALL_CHANNELS)

    return SortConfig(
        descending=bool(args.descending),
        sort_range=SORT_RANGES[args.sort_range or "row"],
        sort_mode=SORT_MODES[args.sort_mode] if args.sort_mode else None,
        sort_channel=channels,
    )


def cmd_sort(args):
    """Sort one PNG file into another."""
    info = preflight(args.input, args.output)
    logging.debug("Input validated: %.1fMB %s", info["size_mb"], info["extension"])

    with open(args.input, "rb") as f:
        src = f.read()
    image = decode_png(src)
    config = build_config(args, image.color_type)

    result = sort_image(config, image)
    data = encode_png(result)
    with open(args.output, "wb") as f:
        f.write(data)

    print(f"Sorted {image.width}x{image.height} {image.color_type.value} "
          f"({config.sort_range.value}) -> {args.output}")


def cmd_list_modes(args):
    """List the available sorters and the modes they serve."""
    print("\n  Sort modes")
    print(f"  {'—' * 50}")
    for s in list_sorters():
        for mode in s["modes"]:
            print(f"    {mode:15s} — {s['description']}")
    print(f"\n  Sort ranges: {', '.join(SORT_RANGES)}")
    print("  Grayscale images take no --sort-mode or --sort-channel.\n")


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pngsort",
        description="PNGSort — pixel sorting for PNG images",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-i", "--input", help="Input PNG path")
    parser.add_argument("-o", "--output", help="Output PNG path")
    parser.add_argument("--descending", action="store_true", default=None,
                        help="Sort from high to low")
    parser.add_argument("--sort-range", choices=list(SORT_RANGES),
                        help="Pixels sorted together (default: row)")
    parser.add_argument("--sort-mode", choices=list(SORT_MODES),
                        help="RGB/RGBA only (default: tied-by-sum)")
    parser.add_argument("--sort-channel", type=_parse_channels,
                        help="Comma-separated channels, e.g. 'r,g,b' (default: r,g,b on color images)")
    parser.add_argument("--config", help="JSON settings file, used instead of the sort flags")
    parser.add_argument("--list-modes", action="store_true", help="List sort modes and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_modes:
        cmd_list_modes(args)
        return
    if not args.input or not args.output:
        parser.error("the following arguments are required: -i/--input, -o/--output")

    try:
        cmd_sort(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
