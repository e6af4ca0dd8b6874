"""RGB <-> HSL conversion, adjustment application and color formatting.

Leaf module: no engine imports besides the value types.
"""

from __future__ import annotations

import colorsys
import math

from pixvix.engine.types import GroupAdjustment, HSLColor, PixelColor

_HUE_DEGREES = 360.0
_PERCENT = 100.0
_CHANNEL_MAX = 255


def round_half_up(value: float) -> int:
    """Round .5 upward (127.5 -> 128). ``round()`` would bank to even."""
    return int(math.floor(value + 0.5))


def rgb_to_hsl(color: PixelColor) -> HSLColor:
    """RGB (0-255) to HSL in degrees and percent. Achromatic colors get h=0, s=0."""
    h, l, s = colorsys.rgb_to_hls(
        color.r / _CHANNEL_MAX, color.g / _CHANNEL_MAX, color.b / _CHANNEL_MAX
    )
    return HSLColor(h=h * _HUE_DEGREES, s=s * _PERCENT, l=l * _PERCENT)


def hsl_to_rgb(hsl: HSLColor) -> PixelColor:
    """Inverse of :func:`rgb_to_hsl`. Output alpha is always 255."""
    l = hsl.l / _PERCENT
    s = hsl.s / _PERCENT

    if s == 0:
        gray = round_half_up(l * _CHANNEL_MAX)
        return PixelColor(gray, gray, gray, _CHANNEL_MAX)

    r, g, b = colorsys.hls_to_rgb((hsl.h / _HUE_DEGREES) % 1.0, l, s)
    return PixelColor(
        r=round_half_up(r * _CHANNEL_MAX),
        g=round_half_up(g * _CHANNEL_MAX),
        b=round_half_up(b * _CHANNEL_MAX),
        a=_CHANNEL_MAX,
    )


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def apply_adjustment_to_color(color: PixelColor, adjustment: GroupAdjustment) -> PixelColor:
    """Shift hue (wrapping), scale saturation/lightness (clamping), convert back.

    The result is opaque; callers that care about alpha re-apply it.
    """
    hsl = rgb_to_hsl(color)
    hue = (hsl.h + adjustment.hue_shift) % _HUE_DEGREES
    sat = _clamp(hsl.s * adjustment.saturation_scale, 0.0, _PERCENT)
    light = _clamp(hsl.l * adjustment.lightness_scale, 0.0, _PERCENT)
    return hsl_to_rgb(HSLColor(h=hue, s=sat, l=light))


def color_to_hex(color: PixelColor) -> str:
    """``#rrggbb`` in lowercase; alpha is dropped."""
    return f"#{color.r:02x}{color.g:02x}{color.b:02x}"


def _format_alpha(alpha: int) -> str:
    value = alpha / _CHANNEL_MAX
    if value.is_integer():
        return str(int(value))
    return repr(value)


def color_to_rgba(color: PixelColor) -> str:
    """CSS ``rgba(r, g, b, a)`` with alpha scaled to 0-1."""
    return f"rgba({color.r}, {color.g}, {color.b}, {_format_alpha(color.a)})"
