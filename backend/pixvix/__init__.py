"""Pixvix — pixel art to SVG converter.

Library entry point: the sampling, grouping and export functions below
work on a decoded RGBA :class:`PixelBuffer` and need no web stack.
"""

__version__ = "0.1.0"

from pixvix.engine.color_groups import (
    create_default_adjustment,
    get_adjusted_color,
    group_colors_by_hue,
    has_active_adjustments,
    is_default_adjustment,
)
from pixvix.engine.color_space import (
    apply_adjustment_to_color,
    color_to_hex,
    color_to_rgba,
    hsl_to_rgb,
    rgb_to_hsl,
)
from pixvix.engine.grid_sampler import (
    extract_palette,
    get_cell_bounds,
    get_cell_center,
    get_grid_dimensions,
    get_minimal_bounding_frame,
    is_pixel_transparent,
    sample_grid,
)
from pixvix.engine.raster_emitter import generate_png, render_raster
from pixvix.engine.types import (
    ColorGroup,
    ColorGroupId,
    CropRegion,
    GridConfig,
    GroupAdjustment,
    HSLColor,
    OutputFrame,
    PaletteEntry,
    PixelBuffer,
    PixelColor,
    SampleMode,
    pixel_key,
)
from pixvix.engine.vector_emitter import generate_svg
from pixvix.utils.image_io import is_valid_image_file, load_data_url, load_pixel_buffer

__all__ = [
    "__version__",
    "apply_adjustment_to_color",
    "color_to_hex",
    "color_to_rgba",
    "create_default_adjustment",
    "extract_palette",
    "generate_png",
    "generate_svg",
    "get_adjusted_color",
    "get_cell_bounds",
    "get_cell_center",
    "get_grid_dimensions",
    "get_minimal_bounding_frame",
    "group_colors_by_hue",
    "has_active_adjustments",
    "hsl_to_rgb",
    "is_default_adjustment",
    "is_pixel_transparent",
    "is_valid_image_file",
    "load_data_url",
    "load_pixel_buffer",
    "pixel_key",
    "render_raster",
    "rgb_to_hsl",
    "sample_grid",
    "ColorGroup",
    "ColorGroupId",
    "CropRegion",
    "GridConfig",
    "GroupAdjustment",
    "HSLColor",
    "OutputFrame",
    "PaletteEntry",
    "PixelBuffer",
    "PixelColor",
    "SampleMode",
]
