"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from pixvix.engine.types import (
    ColorGroupId,
    CropRegion,
    GridConfig,
    GroupAdjustment,
    OutputFrame,
    SampleMode,
)


class GridConfigModel(BaseModel):
    grid_size: int = Field(..., ge=1, description="Source pixels per grid cell")
    offset_x: int = Field(default=0, ge=0)
    offset_y: int = Field(default=0, ge=0)
    sample_mode: SampleMode = Field(default=SampleMode.CENTER)

    @model_validator(mode="after")
    def _offsets_within_cell(self) -> GridConfigModel:
        if self.offset_x >= self.grid_size or self.offset_y >= self.grid_size:
            raise ValueError("offsets must be smaller than grid_size")
        return self

    def to_config(self) -> GridConfig:
        return GridConfig(
            grid_size=self.grid_size,
            offset_x=self.offset_x,
            offset_y=self.offset_y,
            sample_mode=self.sample_mode,
        )


class CropRegionModel(BaseModel):
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)

    def to_region(self) -> CropRegion:
        return CropRegion(x=self.x, y=self.y, width=self.width, height=self.height)


class OutputFrameModel(BaseModel):
    start_col: int = Field(..., ge=0)
    start_row: int = Field(..., ge=0)
    end_col: int = Field(..., ge=0)
    end_row: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _ordered(self) -> OutputFrameModel:
        if self.start_col > self.end_col or self.start_row > self.end_row:
            raise ValueError("frame start must not be past its end")
        return self

    def to_frame(self) -> OutputFrame:
        return OutputFrame(
            start_col=self.start_col,
            start_row=self.start_row,
            end_col=self.end_col,
            end_row=self.end_row,
        )


class GroupAdjustmentModel(BaseModel):
    hue_shift: float = Field(default=0.0, ge=-180, le=180)
    saturation_scale: float = Field(default=1.0, ge=0, le=2)
    lightness_scale: float = Field(default=1.0, ge=0, le=2)

    def to_adjustment(self) -> GroupAdjustment:
        return GroupAdjustment(
            hue_shift=self.hue_shift,
            saturation_scale=self.saturation_scale,
            lightness_scale=self.lightness_scale,
        )


class AnalyzeRequest(BaseModel):
    image: str = Field(..., description="Image as a base64 data URL (or bare base64 PNG)")
    grid: GridConfigModel | None = Field(default=None, description="Defaults to settings.default_grid_size")
    crop: CropRegionModel | None = Field(default=None, description="Crop applied before sampling")
    ignored: list[str] = Field(
        default_factory=list,
        description='Cells marked transparent, as "{col}-{row}" keys',
    )
    frame: OutputFrameModel | None = None


class ExportRequest(AnalyzeRequest):
    adjustments: dict[ColorGroupId, GroupAdjustmentModel] = Field(default_factory=dict)
    auto_fit: bool = Field(default=False, description="Replace the frame with the minimal bounding frame")
    title: str = ""


class PngExportRequest(ExportRequest):
    width: int | None = Field(default=None, ge=1)
    height: int | None = Field(default=None, ge=1)
