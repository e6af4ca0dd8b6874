"""
Pixvix command line — convert a pixel-art image to SVG or a rescaled PNG.

Usage:
  pixvix sprite.png                          # prints SVG to stdout
  pixvix sprite.png -o sprite.svg -g 16      # 16px cells, saved to file
  pixvix sprite.png -o big.png --format png --width 640
  pixvix sprite.png --palette                # frequency-sorted palette
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from pixvix.engine.color_groups import group_colors_by_hue
from pixvix.engine.color_space import color_to_rgba
from pixvix.engine.grid_sampler import (
    extract_palette,
    get_grid_dimensions,
    get_minimal_bounding_frame,
    sample_grid,
)
from pixvix.engine.raster_emitter import generate_png
from pixvix.engine.types import GridConfig, IgnoredSet, SampledGrid, SampleMode
from pixvix.engine.vector_emitter import generate_svg
from pixvix.utils.image_io import ImageDecodeError, load_pixel_buffer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pixvix", description="Pixel art to SVG converter")
    parser.add_argument("input", help="Image file (PNG, GIF, ...)")
    parser.add_argument("-o", "--output", help="Output file (SVG goes to stdout if omitted)")
    parser.add_argument("-g", "--grid-size", type=int, default=1, help="Source pixels per cell")
    parser.add_argument("--offset-x", type=int, default=0)
    parser.add_argument("--offset-y", type=int, default=0)
    parser.add_argument(
        "--sample-mode",
        choices=[m.value for m in SampleMode],
        default=SampleMode.CENTER.value,
    )
    parser.add_argument("--auto-fit", action="store_true", help="Crop output to non-transparent cells")
    parser.add_argument("--format", choices=["svg", "png"], default="svg")
    parser.add_argument("--width", type=int, help="PNG width in pixels")
    parser.add_argument("--height", type=int, help="PNG height in pixels")
    parser.add_argument("--palette", action="store_true", help="Print the palette instead of converting")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _print_palette(colors: SampledGrid, ignored: IgnoredSet) -> None:
    palette = extract_palette(colors, ignored)
    for group in group_colors_by_hue(palette):
        print(f"{group.name}:")
        for entry in group.colors:
            print(f"  {entry.hex_code}  {color_to_rgba(entry.color):<32} x{entry.count}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if not os.path.exists(args.input):
        print(f"File not found: {args.input}", file=sys.stderr)
        return 1

    try:
        config = GridConfig(
            grid_size=args.grid_size,
            offset_x=args.offset_x,
            offset_y=args.offset_y,
            sample_mode=SampleMode(args.sample_mode),
        )
    except ValueError as e:
        print(f"Invalid grid: {e}", file=sys.stderr)
        return 1

    with open(args.input, "rb") as f:
        raw = f.read()
    try:
        buffer = load_pixel_buffer(raw)
    except ImageDecodeError as e:
        print(str(e), file=sys.stderr)
        return 1

    colors = sample_grid(buffer, config)
    ignored: frozenset[str] = frozenset()

    if args.palette:
        _print_palette(colors, ignored)
        return 0

    frame = None
    if args.auto_fit:
        dims = get_grid_dimensions(buffer.width, buffer.height, config)
        frame = get_minimal_bounding_frame(dims.cols, dims.rows, ignored, colors)

    if args.format == "png":
        if not args.output:
            print("--format png needs an output file (-o)", file=sys.stderr)
            return 1
        data = generate_png(colors, ignored, frame, width=args.width, height=args.height)
        with open(args.output, "wb") as f:
            f.write(data)
        logger.info("Wrote %s (%d bytes)", args.output, len(data))
        return 0

    svg = generate_svg(colors, config, ignored, frame)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(svg)
        logger.info("Wrote %s (%d bytes)", args.output, len(svg))
    else:
        print(svg)
    return 0


if __name__ == "__main__":
    sys.exit(main())
