"""POST /api/export/* — SVG and PNG downloads."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from pixvix.api.analyze import SampledImage, sample_request
from pixvix.config import Settings
from pixvix.dependencies import get_settings
from pixvix.engine.grid_sampler import get_minimal_bounding_frame, get_output_dimensions
from pixvix.engine.raster_emitter import generate_png, resolve_png_size
from pixvix.engine.types import GroupAdjustments, OutputFrame
from pixvix.engine.vector_emitter import generate_svg
from pixvix.models.requests import ExportRequest, PngExportRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export")


def _export_frame(req: ExportRequest, sampled: SampledImage) -> OutputFrame | None:
    if not req.auto_fit:
        return sampled.frame
    return get_minimal_bounding_frame(
        sampled.dims.cols, sampled.dims.rows, sampled.ignored, sampled.colors
    )


def _adjustments(req: ExportRequest) -> GroupAdjustments:
    return {gid: adj.to_adjustment() for gid, adj in req.adjustments.items()}


@router.post("/svg")
async def export_svg(
    req: ExportRequest,
    settings: Settings = Depends(get_settings),
) -> Response:
    sampled = sample_request(req, settings)
    frame = _export_frame(req, sampled)

    svg = generate_svg(
        sampled.colors,
        sampled.config,
        sampled.ignored,
        frame,
        _adjustments(req),
        title=req.title,
    )

    logger.info("SVG export: %d bytes", len(svg))
    return Response(
        content=svg,
        media_type="image/svg+xml",
        headers={"Content-Disposition": 'attachment; filename="pixvix-export.svg"'},
    )


@router.post("/png")
async def export_png(
    req: PngExportRequest,
    settings: Settings = Depends(get_settings),
) -> Response:
    sampled = sample_request(req, settings)
    frame = _export_frame(req, sampled)
    width, height = resolve_png_size(
        get_output_dimensions(sampled.colors, frame), req.width, req.height
    )
    if max(width, height) > settings.png_max_dimension:
        raise HTTPException(
            status_code=400,
            detail=f"PNG dimensions are limited to {settings.png_max_dimension}px",
        )

    png = generate_png(
        sampled.colors,
        sampled.ignored,
        frame,
        width=width,
        height=height,
        adjustments=_adjustments(req),
    )

    logger.info("PNG export: %d bytes", len(png))
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": 'attachment; filename="pixvix-export.png"'},
    )
