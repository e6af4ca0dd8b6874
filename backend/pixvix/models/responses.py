"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    version: str


class ColorModel(BaseModel):
    r: int
    g: int
    b: int
    a: int


class PaletteEntryModel(BaseModel):
    hex_code: str
    rgba: str
    color: ColorModel
    count: int


class ColorGroupModel(BaseModel):
    id: str
    name: str
    representative_hue: float
    colors: list[PaletteEntryModel] = Field(default_factory=list)


class FrameModel(BaseModel):
    start_col: int
    start_row: int
    end_col: int
    end_row: int


class AnalyzeResponse(BaseModel):
    width: int
    height: int
    cols: int
    rows: int
    output_cols: int
    output_rows: int
    palette: list[PaletteEntryModel] = Field(default_factory=list)
    color_groups: list[ColorGroupModel] = Field(default_factory=list)
    bounding_frame: FrameModel | None = None
    ignored_in_frame: int = 0
    suggested_png_size: tuple[int, int] = (0, 0)
    processing_time_ms: float = 0.0
