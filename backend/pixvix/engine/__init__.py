"""Pixel-art sampling, color grouping and export engine."""

from pixvix.engine.types import (
    CellBounds,
    ColorGroup,
    ColorGroupId,
    CropRegion,
    GridConfig,
    GridDimensions,
    GroupAdjustment,
    HSLColor,
    OutputFrame,
    PaletteEntry,
    PixelBuffer,
    PixelColor,
    Point,
    SampleMode,
    pixel_key,
)

__all__ = [
    "CellBounds",
    "ColorGroup",
    "ColorGroupId",
    "CropRegion",
    "GridConfig",
    "GridDimensions",
    "GroupAdjustment",
    "HSLColor",
    "OutputFrame",
    "PaletteEntry",
    "PixelBuffer",
    "PixelColor",
    "Point",
    "SampleMode",
    "pixel_key",
]
