"""Core value types shared by the sampler, grouper and emitters.

Cells and frames that may be missing are plain ``None``; callers check
for it explicitly.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Set
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

# Bytes per pixel in the decoded buffer contract (R, G, B, A).
_CHANNELS = 4


@dataclass(frozen=True)
class PixelColor:
    """RGBA color, 0-255 per channel. ``a == 0`` marks an originally transparent pixel."""

    r: int
    g: int
    b: int
    a: int = 255


@dataclass(frozen=True)
class HSLColor:
    h: float  # degrees [0, 360)
    s: float  # percent [0, 100]
    l: float  # percent [0, 100]


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class CellBounds:
    """Source-pixel window of a cell: [x1, x2) × [y1, y2), clamped to the image."""

    x1: int
    y1: int
    x2: int
    y2: int


@dataclass(frozen=True)
class GridDimensions:
    cols: int
    rows: int


class SampleMode(str, enum.Enum):
    CENTER = "center"
    AVERAGE = "average"


@dataclass(frozen=True)
class GridConfig:
    """Sampling lattice over the source buffer."""

    grid_size: int
    offset_x: int = 0
    offset_y: int = 0
    sample_mode: SampleMode = SampleMode.CENTER

    def __post_init__(self) -> None:
        if self.grid_size < 1:
            raise ValueError(f"grid_size must be >= 1, got {self.grid_size}")
        for name, value in (("offset_x", self.offset_x), ("offset_y", self.offset_y)):
            if not 0 <= value < self.grid_size:
                raise ValueError(
                    f"{name} must be in [0, {self.grid_size - 1}], got {value}"
                )
        # Accept plain strings ("center"/"average") from callers.
        object.__setattr__(self, "sample_mode", SampleMode(self.sample_mode))


@dataclass(frozen=True)
class OutputFrame:
    """Inclusive cell bounds restricting what gets emitted."""

    start_col: int
    start_row: int
    end_col: int
    end_row: int

    def __post_init__(self) -> None:
        if self.start_col < 0 or self.start_row < 0:
            raise ValueError("frame start must be non-negative")
        if self.start_col > self.end_col or self.start_row > self.end_row:
            raise ValueError(
                f"frame start ({self.start_col}, {self.start_row}) is past its end "
                f"({self.end_col}, {self.end_row})"
            )

    @property
    def cols(self) -> int:
        return self.end_col - self.start_col + 1

    @property
    def rows(self) -> int:
        return self.end_row - self.start_row + 1

    def contains(self, col: int, row: int) -> bool:
        return self.start_col <= col <= self.end_col and self.start_row <= row <= self.end_row


@dataclass(frozen=True)
class CropRegion:
    """Crop rectangle in source-image pixels."""

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class PaletteEntry:
    hex_code: str
    color: PixelColor
    count: int


class ColorGroupId(str, enum.Enum):
    REDS = "reds"
    ORANGES = "oranges"
    YELLOWS = "yellows"
    GREENS = "greens"
    CYANS = "cyans"
    BLUES = "blues"
    PURPLES = "purples"
    GRAYS = "grays"


@dataclass
class ColorGroup:
    """Palette entries sharing a hue range. Rebuilt from every palette snapshot."""

    id: ColorGroupId
    name: str
    colors: list[PaletteEntry] = field(default_factory=list)
    representative_hue: float = 0.0


@dataclass(frozen=True)
class GroupAdjustment:
    hue_shift: float = 0.0  # degrees, -180..180
    saturation_scale: float = 1.0  # 0..2
    lightness_scale: float = 1.0  # 0..2


GroupAdjustments = Mapping[ColorGroupId, GroupAdjustment]
SampledGrid = list[list[PixelColor | None]]
IgnoredSet = Set[str]


@dataclass
class PixelBuffer:
    """Decoded RGBA image: ``uint8`` array of shape (height, width, 4)."""

    data: NDArray[np.uint8]

    def __post_init__(self) -> None:
        if self.data.ndim != 3 or self.data.shape[2] != _CHANNELS:
            raise ValueError(f"expected an (H, W, 4) array, got shape {self.data.shape}")

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @classmethod
    def from_bytes(cls, width: int, height: int, raw: bytes | bytearray) -> PixelBuffer:
        """Wrap a flat row-major RGBA byte string (no row padding)."""
        expected = width * height * _CHANNELS
        if len(raw) != expected:
            raise ValueError(f"expected {expected} bytes for {width}x{height}, got {len(raw)}")
        arr = np.frombuffer(bytes(raw), dtype=np.uint8).reshape(height, width, _CHANNELS)
        return cls(data=arr)

    @classmethod
    def from_pixels(cls, rows: list[list[PixelColor]]) -> PixelBuffer:
        """Build a buffer from nested rows of colors (all rows the same length)."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        arr = np.zeros((height, width, _CHANNELS), dtype=np.uint8)
        for y, row in enumerate(rows):
            for x, c in enumerate(row):
                arr[y, x] = (c.r, c.g, c.b, c.a)
        return cls(data=arr)


def pixel_key(col: int, row: int) -> str:
    """IgnoredSet key for a cell."""
    return f"{col}-{row}"
