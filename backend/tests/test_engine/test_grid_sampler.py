"""Tests for grid sampling, transparency, bounding frames and palettes."""

import numpy as np
import pytest

from pixvix.engine.grid_sampler import (
    count_ignored_in_frame,
    extract_palette,
    get_average_color,
    get_cell_bounds,
    get_cell_center,
    get_grid_dimensions,
    get_minimal_bounding_frame,
    get_output_dimensions,
    get_pixel_color,
    is_pixel_transparent,
    sample_grid,
)
from pixvix.engine.types import (
    CellBounds,
    GridConfig,
    GridDimensions,
    OutputFrame,
    PixelBuffer,
    PixelColor,
    Point,
    SampleMode,
)
from tests.conftest import BLUE, CLEAR, GREEN, RED, make_buffer


# ── Geometry ──


def test_grid_dimensions_ceil():
    assert get_grid_dimensions(100, 50, GridConfig(grid_size=10)) == GridDimensions(10, 5)
    assert get_grid_dimensions(105, 51, GridConfig(grid_size=10)) == GridDimensions(11, 6)


def test_grid_dimensions_with_offset():
    config = GridConfig(grid_size=10, offset_x=5, offset_y=3)
    assert get_grid_dimensions(100, 100, config) == GridDimensions(10, 10)
    assert get_grid_dimensions(15, 13, config) == GridDimensions(1, 1)


@pytest.mark.parametrize("g,ox,oy", [(1, 0, 0), (4, 1, 3), (7, 6, 2), (10, 5, 0)])
@pytest.mark.parametrize("col,row", [(0, 0), (3, 1), (9, 12)])
def test_cell_center_formula(g, ox, oy, col, row):
    config = GridConfig(grid_size=g, offset_x=ox, offset_y=oy)
    assert get_cell_center(col, row, config) == Point(col * g + ox + g // 2, row * g + oy + g // 2)


def test_cell_bounds_clamped_to_image():
    config = GridConfig(grid_size=10, offset_x=2)
    assert get_cell_bounds(0, 0, config, 100, 100) == CellBounds(2, 0, 12, 10)
    assert get_cell_bounds(9, 9, config, 95, 95) == CellBounds(92, 90, 95, 95)


# ── Buffer reads ──


def test_pixel_color_out_of_bounds():
    buf = make_buffer([[RED, GREEN]])
    assert get_pixel_color(buf, 1, 0) == GREEN
    assert get_pixel_color(buf, 2, 0) is None
    assert get_pixel_color(buf, -1, 0) is None
    assert get_pixel_color(buf, 0, 1) is None


def test_average_color_rounds_each_channel():
    buf = make_buffer([[RED, GREEN], [GREEN, RED]])
    avg = get_average_color(buf, 0, 0, GridConfig(grid_size=2))
    assert avg == PixelColor(128, 128, 0, 255)


def test_average_color_includes_alpha():
    buf = make_buffer([[RED, CLEAR]])
    avg = get_average_color(buf, 0, 0, GridConfig(grid_size=2))
    assert avg == PixelColor(128, 0, 0, 128)


def test_average_color_outside_image():
    buf = make_buffer([[RED, RED]])
    assert get_average_color(buf, 1, 0, GridConfig(grid_size=2)) is None


def test_from_bytes_row_major():
    raw = bytes([255, 0, 0, 255, 0, 0, 255, 128])
    buf = PixelBuffer.from_bytes(2, 1, raw)
    assert buf.width == 2 and buf.height == 1
    assert get_pixel_color(buf, 1, 0) == PixelColor(0, 0, 255, 128)
    with pytest.raises(ValueError):
        PixelBuffer.from_bytes(3, 1, raw)


# ── Sampling ──


@pytest.mark.parametrize("mode", list(SampleMode))
@pytest.mark.parametrize("g,ox,oy", [(1, 0, 0), (3, 0, 0), (4, 2, 1), (5, 4, 4)])
def test_sample_grid_shape_matches_dimensions(mode, g, ox, oy):
    buf = PixelBuffer(data=np.zeros((17, 23, 4), dtype=np.uint8))
    config = GridConfig(grid_size=g, offset_x=ox, offset_y=oy, sample_mode=mode)
    dims = get_grid_dimensions(buf.width, buf.height, config)
    grid = sample_grid(buf, config)
    assert len(grid) == dims.rows
    assert all(len(row) == dims.cols for row in grid)


def test_sample_grid_center_mode(sprite_rows):
    grid = sample_grid(make_buffer(sprite_rows), GridConfig(grid_size=4))
    assert grid == [[RED, CLEAR], [GREEN, BLUE]]


def test_sample_grid_average_mode_blends():
    rows = [[RED, RED, GREEN, GREEN]]
    grid = sample_grid(make_buffer(rows), GridConfig(grid_size=2, sample_mode="average"))
    assert grid == [[RED, GREEN]]


def test_sample_grid_center_off_image_is_absent():
    # 5x5 at 4px cells: only the first cell's center (2, 2) lies on the image.
    rows = [[RED] * 5 for _ in range(5)]
    grid = sample_grid(make_buffer(rows), GridConfig(grid_size=4))
    assert grid == [[RED, None], [None, None]]


# ── Transparency predicate ──


def test_is_pixel_transparent_union():
    grid = [[RED, CLEAR, None]]
    assert not is_pixel_transparent(0, 0, grid, set())
    assert is_pixel_transparent(0, 0, grid, {"0-0"})
    assert is_pixel_transparent(1, 0, grid, set())
    assert is_pixel_transparent(2, 0, grid, set())
    # Outside the grid counts as absent
    assert is_pixel_transparent(5, 0, grid, set())


def test_is_pixel_transparent_without_grid_uses_ignored_only():
    assert not is_pixel_transparent(1, 0, None, set())
    assert is_pixel_transparent(1, 0, None, {"1-0"})


# ── Bounding frame ──


def test_bounding_frame_corners_ignored_keeps_full_span():
    grid = [[RED] * 3 for _ in range(3)]
    ignored = {"0-0", "2-0", "0-2", "2-2"}
    assert get_minimal_bounding_frame(3, 3, ignored, grid) == OutputFrame(0, 0, 2, 2)


def test_bounding_frame_all_transparent_is_none():
    grid = [[CLEAR, None], [CLEAR, CLEAR]]
    assert get_minimal_bounding_frame(2, 2, set(), grid) is None


def test_bounding_frame_tightens_around_content():
    grid = [
        [CLEAR, CLEAR, CLEAR, CLEAR],
        [CLEAR, RED, CLEAR, CLEAR],
        [CLEAR, CLEAR, GREEN, CLEAR],
    ]
    assert get_minimal_bounding_frame(4, 3, set(), grid) == OutputFrame(1, 1, 2, 2)


def test_bounding_frame_without_grid_data():
    ignored = {f"{c}-0" for c in range(3)}
    assert get_minimal_bounding_frame(3, 2, ignored) == OutputFrame(0, 1, 2, 1)


# ── Palette ──


def test_palette_sorted_by_count():
    grid = [[RED, GREEN, RED], [BLUE, GREEN, RED]]
    palette = extract_palette(grid, set())
    assert [e.hex_code for e in palette] == ["#ff0000", "#00ff00", "#0000ff"]
    assert [e.count for e in palette] == [3, 2, 1]


def test_palette_ties_keep_scan_order():
    grid = [[BLUE, RED], [RED, BLUE]]
    assert [e.hex_code for e in extract_palette(grid, set())] == ["#0000ff", "#ff0000"]


def test_palette_skips_transparent_and_ignored():
    grid = [[RED, CLEAR, None], [GREEN, GREEN, RED]]
    palette = extract_palette(grid, {"0-1", "1-1"})
    assert [(e.hex_code, e.count) for e in palette] == [("#ff0000", 2)]


def test_palette_is_alpha_blind():
    half = PixelColor(255, 0, 0, 128)
    palette = extract_palette([[RED, half]], set())
    assert len(palette) == 1
    assert palette[0].count == 2
    assert palette[0].color == RED


def test_palette_respects_frame():
    grid = [[RED, GREEN], [BLUE, BLUE]]
    palette = extract_palette(grid, set(), OutputFrame(1, 0, 1, 1))
    assert [e.hex_code for e in palette] == ["#00ff00", "#0000ff"]


def test_palette_frame_past_grid_edge():
    grid = [[RED]]
    assert [e.count for e in extract_palette(grid, set(), OutputFrame(0, 0, 3, 3))] == [1]


# ── Helpers ──


def test_output_dimensions():
    grid = [[RED] * 4 for _ in range(3)]
    assert get_output_dimensions(grid) == GridDimensions(4, 3)
    assert get_output_dimensions(grid, OutputFrame(1, 1, 2, 1)) == GridDimensions(2, 1)
    assert get_output_dimensions([]) == GridDimensions(0, 0)


def test_count_ignored_in_frame():
    ignored = {"0-0", "1-1", "5-5", "junk"}
    assert count_ignored_in_frame(ignored) == 4
    assert count_ignored_in_frame(ignored, OutputFrame(0, 0, 2, 2)) == 2


# ── Config validation ──


@pytest.mark.parametrize(
    "kwargs",
    [
        {"grid_size": 0},
        {"grid_size": -3},
        {"grid_size": 4, "offset_x": 4},
        {"grid_size": 4, "offset_y": -1},
    ],
)
def test_grid_config_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        GridConfig(**kwargs)


def test_output_frame_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        OutputFrame(3, 0, 2, 0)
    with pytest.raises(ValueError):
        OutputFrame(-1, 0, 2, 0)
