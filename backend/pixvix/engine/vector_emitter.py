"""SVG emission with horizontal run merging.

Each output row is scanned left to right; maximal spans of the same
post-adjustment color collapse into one rectangle. Geometry is authored
in cell units relative to the frame origin and scaled by ``grid_size``
only through the document's width/height.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pixvix.engine.color_groups import get_adjusted_color
from pixvix.engine.color_space import color_to_hex
from pixvix.engine.grid_sampler import (
    cell_at,
    get_output_dimensions,
    is_pixel_transparent,
    resolve_bounds,
)
from pixvix.engine.types import (
    GridConfig,
    GroupAdjustments,
    IgnoredSet,
    OutputFrame,
    PixelColor,
    SampledGrid,
)
from pixvix.svg.serializer import serialize_svg

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SvgRect:
    x: int
    y: int
    width: int
    height: int
    color: str


def effective_color(
    col: int,
    row: int,
    colors: SampledGrid,
    ignored: IgnoredSet,
    adjustments: GroupAdjustments | None,
) -> PixelColor | None:
    """Post-adjustment color of a visible cell, ``None`` when transparent."""
    if is_pixel_transparent(col, row, colors, ignored):
        return None
    color = cell_at(colors, col, row)
    if adjustments:
        color = get_adjusted_color(color, adjustments)
    return color


def collect_runs(
    colors: SampledGrid,
    ignored: IgnoredSet,
    frame: OutputFrame | None = None,
    adjustments: GroupAdjustments | None = None,
) -> list[SvgRect]:
    """Merge each row into maximal same-color horizontal runs."""
    start_row, end_row, start_col, end_col = resolve_bounds(colors, frame)
    rects: list[SvgRect] = []

    for row in range(start_row, end_row + 1):
        run_start = start_col
        run_color: str | None = None

        # One sentinel column past the end closes the last run.
        for col in range(start_col, end_col + 2):
            hex_color = None
            if col <= end_col:
                color = effective_color(col, row, colors, ignored, adjustments)
                if color is not None:
                    hex_color = color_to_hex(color)

            if hex_color == run_color:
                continue

            if run_color is not None and col > run_start:
                rects.append(
                    SvgRect(
                        x=run_start - start_col,
                        y=row - start_row,
                        width=col - run_start,
                        height=1,
                        color=run_color,
                    )
                )
            run_start = col
            run_color = hex_color

    return rects


def generate_svg(
    colors: SampledGrid,
    grid_config: GridConfig,
    ignored: IgnoredSet,
    frame: OutputFrame | None = None,
    adjustments: GroupAdjustments | None = None,
    title: str = "",
) -> str:
    """Render the sampled grid as an SVG document of merged rectangles."""
    dims = get_output_dimensions(colors, frame)
    rects = collect_runs(colors, ignored, frame, adjustments)

    elements = [
        {
            "tag": "rect",
            "x": r.x,
            "y": r.y,
            "width": r.width,
            "height": r.height,
            "fill": r.color,
        }
        for r in rects
    ]

    logger.debug(
        "SVG export: %dx%d cells -> %d rects",
        dims.cols,
        dims.rows,
        len(rects),
    )
    return serialize_svg(
        elements,
        view_w=dims.cols,
        view_h=dims.rows,
        width=dims.cols * grid_config.grid_size,
        height=dims.rows * grid_config.grid_size,
        title=title,
    )
