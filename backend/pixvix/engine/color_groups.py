"""Hue-range color groups and group-scoped adjustments.

Colors are bucketed by HSL hue; an adjustment applied to a bucket shifts
every member the same way, so differences inside the bucket survive.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pixvix.engine.color_space import apply_adjustment_to_color, rgb_to_hsl
from pixvix.engine.types import (
    ColorGroup,
    ColorGroupId,
    GroupAdjustment,
    GroupAdjustments,
    HSLColor,
    PaletteEntry,
    PixelColor,
)

# Below 12% saturation the hue is not meaningful -> grays.
GRAY_SATURATION_THRESHOLD = 12.0


@dataclass(frozen=True)
class ColorGroupDef:
    id: ColorGroupId
    name: str
    hue_min: float
    hue_max: float  # exclusive; hue_min > hue_max means the range wraps past 0
    representative_hue: float

    def contains(self, hue: float) -> bool:
        if self.hue_min > self.hue_max:
            return hue >= self.hue_min or hue < self.hue_max
        return self.hue_min <= hue < self.hue_max


COLOR_GROUP_DEFS: tuple[ColorGroupDef, ...] = (
    ColorGroupDef(ColorGroupId.REDS, "Reds", 345, 15, 0),
    ColorGroupDef(ColorGroupId.ORANGES, "Oranges", 15, 45, 30),
    ColorGroupDef(ColorGroupId.YELLOWS, "Yellows", 45, 75, 60),
    ColorGroupDef(ColorGroupId.GREENS, "Greens", 75, 165, 120),
    ColorGroupDef(ColorGroupId.CYANS, "Cyans", 165, 195, 180),
    ColorGroupDef(ColorGroupId.BLUES, "Blues", 195, 265, 220),
    ColorGroupDef(ColorGroupId.PURPLES, "Purples", 265, 345, 300),
)

_GRAYS_NAME = "Grays"
_GRAYS_HUE = 0.0

_IDENTITY = GroupAdjustment()


def classify(hsl: HSLColor) -> ColorGroupId:
    if hsl.s < GRAY_SATURATION_THRESHOLD:
        return ColorGroupId.GRAYS
    for group_def in COLOR_GROUP_DEFS:
        if group_def.contains(hsl.h):
            return group_def.id
    # Unreachable for hues in [0, 360)
    return ColorGroupId.GRAYS


def classify_color(color: PixelColor) -> ColorGroupId:
    return classify(rgb_to_hsl(color))


def group_colors_by_hue(palette: Iterable[PaletteEntry]) -> list[ColorGroup]:
    """Bucket palette entries; only non-empty groups, fixed order, grays last."""
    buckets: dict[ColorGroupId, list[PaletteEntry]] = {}
    for entry in palette:
        buckets.setdefault(classify_color(entry.color), []).append(entry)

    groups = [
        ColorGroup(
            id=group_def.id,
            name=group_def.name,
            colors=buckets[group_def.id],
            representative_hue=float(group_def.representative_hue),
        )
        for group_def in COLOR_GROUP_DEFS
        if buckets.get(group_def.id)
    ]

    grays = buckets.get(ColorGroupId.GRAYS)
    if grays:
        groups.append(
            ColorGroup(
                id=ColorGroupId.GRAYS,
                name=_GRAYS_NAME,
                colors=grays,
                representative_hue=_GRAYS_HUE,
            )
        )
    return groups


def create_default_adjustment() -> GroupAdjustment:
    return GroupAdjustment()


def is_default_adjustment(adjustment: GroupAdjustment) -> bool:
    return (
        adjustment.hue_shift == 0
        and adjustment.saturation_scale == 1
        and adjustment.lightness_scale == 1
    )


def get_adjusted_color(color: PixelColor, adjustments: GroupAdjustments) -> PixelColor:
    """Apply the color's group adjustment; unchanged when it is missing or identity.

    Called once per visible cell during export.
    """
    if not adjustments:
        return color
    adjustment = adjustments.get(classify_color(color), _IDENTITY)
    if is_default_adjustment(adjustment):
        return color
    return apply_adjustment_to_color(color, adjustment)


def has_active_adjustments(adjustments: GroupAdjustments) -> bool:
    return any(not is_default_adjustment(adj) for adj in adjustments.values())
