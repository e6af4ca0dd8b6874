"""POST /api/analyze — sample the grid and report palette, groups and frame."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from fastapi import APIRouter, Depends, HTTPException

from pixvix.config import Settings
from pixvix.dependencies import get_settings
from pixvix.engine.color_groups import group_colors_by_hue
from pixvix.engine.color_space import color_to_rgba
from pixvix.engine.grid_sampler import (
    count_ignored_in_frame,
    extract_palette,
    get_minimal_bounding_frame,
    get_output_dimensions,
    sample_grid,
)
from pixvix.engine.raster_emitter import default_png_size
from pixvix.engine.types import (
    GridConfig,
    GridDimensions,
    OutputFrame,
    PaletteEntry,
    PixelBuffer,
    SampledGrid,
)
from pixvix.models.requests import AnalyzeRequest
from pixvix.models.responses import (
    AnalyzeResponse,
    ColorGroupModel,
    ColorModel,
    FrameModel,
    PaletteEntryModel,
)
from pixvix.utils.image_io import ImageDecodeError, crop_buffer, load_data_url

logger = logging.getLogger(__name__)

router = APIRouter()


@dataclass
class SampledImage:
    """Everything one request needs after decoding and sampling."""

    buffer: PixelBuffer
    config: GridConfig
    colors: SampledGrid
    dims: GridDimensions
    ignored: frozenset[str]
    frame: OutputFrame | None


def sample_request(req: AnalyzeRequest, settings: Settings) -> SampledImage:
    """Decode, crop and sample the request image. Decode failures -> HTTP 400."""
    try:
        buffer = load_data_url(req.image)
    except ImageDecodeError as e:
        logger.warning("Rejected image: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e

    if req.crop is not None:
        buffer = crop_buffer(buffer, req.crop.to_region())

    if req.grid is not None:
        config = req.grid.to_config()
    else:
        config = GridConfig(grid_size=settings.default_grid_size)
    colors = sample_grid(buffer, config)
    dims = GridDimensions(cols=len(colors[0]) if colors else 0, rows=len(colors))
    frame = req.frame.to_frame() if req.frame is not None else None
    return SampledImage(
        buffer=buffer,
        config=config,
        colors=colors,
        dims=dims,
        ignored=frozenset(req.ignored),
        frame=frame,
    )


def _entry_model(entry: PaletteEntry) -> PaletteEntryModel:
    c = entry.color
    return PaletteEntryModel(
        hex_code=entry.hex_code,
        rgba=color_to_rgba(c),
        color=ColorModel(r=c.r, g=c.g, b=c.b, a=c.a),
        count=entry.count,
    )


def _frame_model(frame: OutputFrame | None) -> FrameModel | None:
    if frame is None:
        return None
    return FrameModel(
        start_col=frame.start_col,
        start_row=frame.start_row,
        end_col=frame.end_col,
        end_row=frame.end_row,
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    req: AnalyzeRequest,
    settings: Settings = Depends(get_settings),
) -> AnalyzeResponse:
    start = time.perf_counter()

    sampled = sample_request(req, settings)
    palette = extract_palette(sampled.colors, sampled.ignored, sampled.frame)
    groups = group_colors_by_hue(palette)
    bounding = get_minimal_bounding_frame(
        sampled.dims.cols, sampled.dims.rows, sampled.ignored, sampled.colors
    )
    output = get_output_dimensions(sampled.colors, sampled.frame)

    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Analyzed %dx%d image: %dx%d cells, %d colors in %.1fms",
        sampled.buffer.width,
        sampled.buffer.height,
        sampled.dims.cols,
        sampled.dims.rows,
        len(palette),
        elapsed,
    )

    return AnalyzeResponse(
        width=sampled.buffer.width,
        height=sampled.buffer.height,
        cols=sampled.dims.cols,
        rows=sampled.dims.rows,
        output_cols=output.cols,
        output_rows=output.rows,
        palette=[_entry_model(e) for e in palette],
        color_groups=[
            ColorGroupModel(
                id=g.id.value,
                name=g.name,
                representative_hue=g.representative_hue,
                colors=[_entry_model(e) for e in g.colors],
            )
            for g in groups
        ],
        bounding_frame=_frame_model(bounding),
        ignored_in_frame=count_ignored_in_frame(sampled.ignored, sampled.frame),
        suggested_png_size=default_png_size(
            output.cols,
            output.rows,
            px_per_cell=settings.png_default_scale,
            min_width=settings.png_min_width,
        ),
        processing_time_ms=round(elapsed, 1),
    )
