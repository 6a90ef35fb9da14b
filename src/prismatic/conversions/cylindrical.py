"""
RGB <-> HSL/HSV edges.

Hue is expressed in sextants, [0, 6), rather than degrees.
"""

from __future__ import annotations

import math

from prismatic.core.data_types import HSL, HSV, RGB

HUE_SECTORS = 6.0

# Channel order per hue sector, indexing into (C + m, m, x + m)
_SECTOR_CHANNELS = (
    (0, 2, 1),
    (2, 0, 1),
    (1, 0, 2),
    (1, 2, 0),
    (2, 1, 0),
    (0, 1, 2),
)


def _hue(r: float, g: float, b: float, cmax: float, delta: float) -> float:
    if cmax == r:
        h = (g - b) / delta
    elif cmax == g:
        h = (b - r) / delta + 2.0
    else:
        h = (r - g) / delta + 4.0
    if h < 0.0:
        h += HUE_SECTORS
        if h >= HUE_SECTORS:
            h = 0.0
    return h


def _sector_to_rgb(h: float, chroma: float, m: float) -> RGB:
    """
    Finish a hue/chroma to RGB conversion.

    Wraps the hue into [0, 6), picks the channel permutation for its
    sector and builds the intermediate channel from the triangular wave
    ``1 - |(h mod 2) - 1|``.
    """
    h2 = 1.0 - abs((h % 2.0) - 1.0)
    # h % 6 can round up to exactly 6.0 for tiny negative hues
    sector = min(int(h % HUE_SECTORS), 5)

    channels = (chroma + m, m, chroma * h2 + m)
    i_r, i_g, i_b = _SECTOR_CHANNELS[sector]
    return RGB(channels[i_r], channels[i_g], channels[i_b])


# =============================================================================
# RGB <-> HSL
# =============================================================================

def rgb_to_hsl(value: RGB, flags: int = 0) -> HSL:
    """Convert RGB to HSL. Achromatic input gives H = S = 0."""
    r, g, b = value.r, value.g, value.b

    cmin = min(r, g, b)
    cmax = max(r, g, b)
    delta = cmax - cmin
    lightness = (cmax + cmin) * 0.5

    if math.fabs(delta) > 0.0:
        denom = cmax + cmin if lightness < 0.5 else 2.0 - cmax - cmin
        saturation = delta / denom if denom != 0.0 else 0.0
        return HSL(_hue(r, g, b, cmax, delta), saturation, lightness)

    return HSL(0.0, 0.0, lightness)


def hsl_to_rgb(value: HSL, flags: int = 0) -> RGB:
    """Convert HSL to RGB."""
    h, s, lightness = value.h, value.s, value.l

    if math.fabs(s) > 0.0:
        chroma = (1.0 - math.fabs(lightness * 2.0 - 1.0)) * s
        m = chroma * -0.5 + lightness
        return _sector_to_rgb(h, chroma, m)

    return RGB(lightness, lightness, lightness)


# =============================================================================
# RGB <-> HSV
# =============================================================================

def rgb_to_hsv(value: RGB, flags: int = 0) -> HSV:
    """Convert RGB to HSV. Achromatic input gives H = S = 0."""
    r, g, b = value.r, value.g, value.b

    cmin = min(r, g, b)
    cmax = max(r, g, b)
    delta = cmax - cmin

    if math.fabs(delta) > 0.0:
        saturation = delta / cmax if cmax != 0.0 else 0.0
        return HSV(_hue(r, g, b, cmax, delta), saturation, cmax)

    return HSV(0.0, 0.0, cmax)


def hsv_to_rgb(value: HSV, flags: int = 0) -> RGB:
    """Convert HSV to RGB."""
    h, s, v = value.h, value.s, value.v

    if math.fabs(s) > 0.0:
        chroma = v * s
        return _sector_to_rgb(h, chroma, v - chroma)

    return RGB(v, v, v)
