"""Raster export — same visibility and adjustment rules as the SVG path, painted into pixels."""

from __future__ import annotations

import io
import logging
import math

import numpy as np
from PIL import Image

from pixvix.engine.color_space import round_half_up
from pixvix.engine.grid_sampler import cell_at, get_output_dimensions, resolve_bounds
from pixvix.engine.types import (
    GridDimensions,
    GroupAdjustments,
    IgnoredSet,
    OutputFrame,
    SampledGrid,
)
from pixvix.engine.vector_emitter import effective_color

logger = logging.getLogger(__name__)

# Export sizing defaults: 10 px per cell, never narrower than 100 px.
_DEFAULT_PX_PER_CELL = 10
_MIN_DEFAULT_WIDTH = 100


def default_png_size(
    output_cols: int,
    output_rows: int,
    px_per_cell: int = _DEFAULT_PX_PER_CELL,
    min_width: int = _MIN_DEFAULT_WIDTH,
) -> tuple[int, int]:
    """Suggested export size keeping the frame's aspect ratio."""
    if output_cols <= 0 or output_rows <= 0:
        return (min_width, min_width)
    width = max(output_cols * px_per_cell, min_width)
    height = max(round_half_up(width * output_rows / output_cols), 1)
    return (width, height)


def resolve_png_size(
    dims: GridDimensions,
    width: int | None = None,
    height: int | None = None,
) -> tuple[int, int]:
    """Final canvas size. A missing side follows the other one at the frame's aspect ratio;
    with neither given it is one pixel per cell. Never smaller than 1x1.
    """
    if dims.cols > 0 and dims.rows > 0:
        if width is not None and height is None:
            height = round_half_up(width * dims.rows / dims.cols)
        elif height is not None and width is None:
            width = round_half_up(height * dims.cols / dims.rows)
    out_w = width if width is not None else dims.cols
    out_h = height if height is not None else dims.rows
    return max(out_w, 1), max(out_h, 1)


def render_raster(
    colors: SampledGrid,
    ignored: IgnoredSet,
    frame: OutputFrame | None = None,
    width: int | None = None,
    height: int | None = None,
    adjustments: GroupAdjustments | None = None,
) -> Image.Image:
    """Paint every visible cell as a scaled rectangle on a transparent RGBA canvas.

    Size comes from :func:`resolve_png_size`. Cell origins are floored and
    extents ceiled so neighbouring cells never leave a seam.
    """
    dims = get_output_dimensions(colors, frame)
    out_w, out_h = resolve_png_size(dims, width, height)
    canvas = np.zeros((out_h, out_w, 4), dtype=np.uint8)

    if dims.cols == 0 or dims.rows == 0:
        return Image.fromarray(canvas)

    scale_x = out_w / dims.cols
    scale_y = out_h / dims.rows
    start_row, end_row, start_col, end_col = resolve_bounds(colors, frame)
    painted = 0

    for row in range(start_row, end_row + 1):
        cy = row - start_row
        y0 = int(math.floor(cy * scale_y))
        y1 = min(int(math.ceil((cy + 1) * scale_y)), out_h)
        for col in range(start_col, end_col + 1):
            color = effective_color(col, row, colors, ignored, adjustments)
            if color is None:
                continue
            # Adjusted colors come back opaque; keep the sampled alpha.
            alpha = cell_at(colors, col, row).a
            cx = col - start_col
            x0 = int(math.floor(cx * scale_x))
            x1 = min(int(math.ceil((cx + 1) * scale_x)), out_w)
            canvas[y0:y1, x0:x1] = (color.r, color.g, color.b, alpha)
            painted += 1

    logger.debug("Raster export: %d cells painted into %dx%d", painted, out_w, out_h)
    return Image.fromarray(canvas)


def generate_png(
    colors: SampledGrid,
    ignored: IgnoredSet,
    frame: OutputFrame | None = None,
    width: int | None = None,
    height: int | None = None,
    adjustments: GroupAdjustments | None = None,
) -> bytes:
    """:func:`render_raster` encoded as PNG."""
    image = render_raster(colors, ignored, frame, width, height, adjustments)
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()
