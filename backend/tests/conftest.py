"""Shared test fixtures."""

from __future__ import annotations

import base64

import pytest

from pixvix.engine.types import GridConfig, PixelBuffer, PixelColor
from pixvix.utils.image_io import buffer_to_png

RED = PixelColor(255, 0, 0, 255)
GREEN = PixelColor(0, 255, 0, 255)
BLUE = PixelColor(0, 0, 255, 255)
WHITE = PixelColor(255, 255, 255, 255)
GRAY = PixelColor(128, 128, 128, 255)
CLEAR = PixelColor(0, 0, 0, 0)


def make_buffer(rows: list[list[PixelColor]]) -> PixelBuffer:
    return PixelBuffer.from_pixels(rows)


def upscale(rows: list[list[PixelColor]], factor: int) -> list[list[PixelColor]]:
    """Blow each pixel up into a factor×factor block, like exported pixel art."""
    out = []
    for row in rows:
        wide = [c for c in row for _ in range(factor)]
        out.extend(list(wide) for _ in range(factor))
    return out


def to_data_url(rows: list[list[PixelColor]]) -> str:
    png = buffer_to_png(make_buffer(rows))
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


# 2×2 sprite at 4px per cell, with a transparent top-right cell.
SPRITE = [
    [RED, CLEAR],
    [GREEN, BLUE],
]


@pytest.fixture
def center_config() -> GridConfig:
    return GridConfig(grid_size=1)


@pytest.fixture
def sprite_rows() -> list[list[PixelColor]]:
    return upscale(SPRITE, 4)


@pytest.fixture
def sprite_data_url(sprite_rows) -> str:
    return to_data_url(sprite_rows)
