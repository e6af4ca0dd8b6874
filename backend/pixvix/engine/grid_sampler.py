"""Grid sampling — bridges a raw RGBA buffer and the logical cell grid.

Also owns the shared transparency predicate, bounding-frame fitting and
palette extraction, since all three scan the sampled grid.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

import numpy as np

from pixvix.engine.color_space import color_to_hex, round_half_up
from pixvix.engine.types import (
    CellBounds,
    GridConfig,
    GridDimensions,
    IgnoredSet,
    OutputFrame,
    PaletteEntry,
    PixelBuffer,
    PixelColor,
    Point,
    SampledGrid,
    SampleMode,
    pixel_key,
)

logger = logging.getLogger(__name__)


def get_cell_center(col: int, row: int, config: GridConfig) -> Point:
    half = config.grid_size // 2
    return Point(
        x=col * config.grid_size + config.offset_x + half,
        y=row * config.grid_size + config.offset_y + half,
    )


def get_cell_bounds(
    col: int,
    row: int,
    config: GridConfig,
    image_width: int,
    image_height: int,
) -> CellBounds:
    """Top-left of the cell plus its bottom-right clamped to the image edge."""
    x1 = col * config.grid_size + config.offset_x
    y1 = row * config.grid_size + config.offset_y
    return CellBounds(
        x1=x1,
        y1=y1,
        x2=min(x1 + config.grid_size, image_width),
        y2=min(y1 + config.grid_size, image_height),
    )


def get_grid_dimensions(image_width: int, image_height: int, config: GridConfig) -> GridDimensions:
    """``ceil((dim - offset) / grid_size)`` per axis. Every bound downstream relies on this."""
    cols = -(-(image_width - config.offset_x) // config.grid_size)
    rows = -(-(image_height - config.offset_y) // config.grid_size)
    return GridDimensions(cols=max(cols, 0), rows=max(rows, 0))


def get_pixel_color(buffer: PixelBuffer, x: int, y: int) -> PixelColor | None:
    if x < 0 or x >= buffer.width or y < 0 or y >= buffer.height:
        return None
    r, g, b, a = buffer.data[y, x]
    return PixelColor(int(r), int(g), int(b), int(a))


def get_average_color(
    buffer: PixelBuffer,
    col: int,
    row: int,
    config: GridConfig,
) -> PixelColor | None:
    """Mean of every channel (alpha included) over the clamped cell window."""
    bounds = get_cell_bounds(col, row, config, buffer.width, buffer.height)
    if (
        bounds.x1 >= buffer.width
        or bounds.y1 >= buffer.height
        or bounds.x2 <= bounds.x1
        or bounds.y2 <= bounds.y1
    ):
        return None

    window = buffer.data[bounds.y1:bounds.y2, bounds.x1:bounds.x2].reshape(-1, 4)
    count = window.shape[0]
    totals = window.sum(axis=0, dtype=np.int64)
    r, g, b, a = (round_half_up(int(t) / count) for t in totals)
    return PixelColor(r, g, b, a)


def sample_grid(buffer: PixelBuffer, config: GridConfig) -> SampledGrid:
    """Sample one color per cell, row-major. Cells off the image are ``None``."""
    dims = get_grid_dimensions(buffer.width, buffer.height, config)
    use_average = config.sample_mode is SampleMode.AVERAGE

    grid: SampledGrid = []
    for row in range(dims.rows):
        row_colors: list[PixelColor | None] = []
        for col in range(dims.cols):
            if use_average:
                color = get_average_color(buffer, col, row, config)
            else:
                center = get_cell_center(col, row, config)
                color = get_pixel_color(buffer, center.x, center.y)
            row_colors.append(color)
        grid.append(row_colors)

    logger.debug(
        "Sampled %dx%d grid from %dx%d image (%s)",
        dims.cols,
        dims.rows,
        buffer.width,
        buffer.height,
        config.sample_mode.value,
    )
    return grid


def cell_at(colors: SampledGrid, col: int, row: int) -> PixelColor | None:
    """Grid lookup that treats anything outside the grid as absent."""
    if row < 0 or row >= len(colors) or col < 0:
        return None
    row_colors = colors[row]
    if col >= len(row_colors):
        return None
    return row_colors[col]


def is_pixel_transparent(
    col: int,
    row: int,
    colors: SampledGrid | None,
    ignored: IgnoredSet,
) -> bool:
    """Ignored by the user, absent, or alpha 0.

    Without grid data only the ignored set is consulted.
    """
    if pixel_key(col, row) in ignored:
        return True
    if colors is not None:
        color = cell_at(colors, col, row)
        if color is None or color.a == 0:
            return True
    return False


def get_minimal_bounding_frame(
    cols: int,
    rows: int,
    ignored: IgnoredSet,
    colors: SampledGrid | None = None,
) -> OutputFrame | None:
    """Tightest frame around every non-transparent cell; ``None`` for an empty canvas."""
    min_col, max_col = cols, -1
    min_row, max_row = rows, -1

    for row in range(rows):
        for col in range(cols):
            if is_pixel_transparent(col, row, colors, ignored):
                continue
            if col < min_col:
                min_col = col
            if col > max_col:
                max_col = col
            if row < min_row:
                min_row = row
            if row > max_row:
                max_row = row

    if max_col < 0 or max_row < 0:
        return None

    return OutputFrame(start_col=min_col, start_row=min_row, end_col=max_col, end_row=max_row)


def resolve_bounds(
    colors: SampledGrid,
    frame: OutputFrame | None = None,
) -> tuple[int, int, int, int]:
    """(start_row, end_row, start_col, end_col), inclusive. Whole grid when no frame."""
    if frame is not None:
        return frame.start_row, frame.end_row, frame.start_col, frame.end_col
    cols = len(colors[0]) if colors else 0
    return 0, len(colors) - 1, 0, cols - 1


def get_output_dimensions(colors: SampledGrid, frame: OutputFrame | None = None) -> GridDimensions:
    """Size of the emitted artifact in cells."""
    start_row, end_row, start_col, end_col = resolve_bounds(colors, frame)
    return GridDimensions(cols=max(end_col - start_col + 1, 0), rows=max(end_row - start_row + 1, 0))


def extract_palette(
    colors: SampledGrid,
    ignored: IgnoredSet,
    frame: OutputFrame | None = None,
) -> list[PaletteEntry]:
    """Unique opaque colors in the frame, most frequent first.

    Ties keep row-major discovery order: ``most_common`` sorts stably.
    """
    start_row, end_row, start_col, end_col = resolve_bounds(colors, frame)
    counts: Counter[str] = Counter()
    first_seen: dict[str, PixelColor] = {}

    for row in range(start_row, end_row + 1):
        for col in range(start_col, end_col + 1):
            if is_pixel_transparent(col, row, colors, ignored):
                continue
            color = colors[row][col]
            hex_code = color_to_hex(color)
            if hex_code not in first_seen:
                first_seen[hex_code] = color
            counts[hex_code] += 1

    return [
        PaletteEntry(hex_code=hex_code, color=first_seen[hex_code], count=count)
        for hex_code, count in counts.most_common()
    ]


def count_ignored_in_frame(ignored: Iterable[str], frame: OutputFrame | None = None) -> int:
    """How many ignored keys land inside ``frame`` (all of them without one)."""
    keys = list(ignored)
    if frame is None:
        return len(keys)

    total = 0
    for key in keys:
        col_str, sep, row_str = key.partition("-")
        if not sep:
            continue
        try:
            col, row = int(col_str), int(row_str)
        except ValueError:
            continue
        if frame.contains(col, row):
            total += 1
    return total
