"""
Quantization and transfer-function edges between RGB8, RGB and Linear RGB.

Constants follow the sRGB standard, written as exact rationals where the
8-bit code values make that possible.
"""

from __future__ import annotations

import math

from prismatic.conversions.common import to_byte
from prismatic.core.data_types import RGB, RGB8, LinearRGB
from prismatic.exceptions import InvalidChannelError

# sRGB transfer function
SRGB_LINEAR_CUTOFF = 0.0031308
SRGB_ENCODED_CUTOFF = SRGB_LINEAR_CUTOFF * 12.92
SRGB_GAMMA = 2.4
INV_SRGB_GAMMA = 1.0 / SRGB_GAMMA

# First 8-bit code value on the power segment of the curve
RGB8_POWER_CUTOFF = 11


# =============================================================================
# RGB8 <-> RGB
# =============================================================================

def rgb8_to_rgb(value: RGB8, flags: int = 0) -> RGB:
    """Scale 8-bit codes to [0, 1]."""
    return RGB(
        value.r * (1.0 / 255.0),
        value.g * (1.0 / 255.0),
        value.b * (1.0 / 255.0),
    )


def rgb_to_rgb8(value: RGB, flags: int = 0) -> RGB8:
    """Scale to 8-bit codes, rounding half up and clamping to [0, 255]."""
    return RGB8(
        to_byte(value.r * 255.0 + 0.5),
        to_byte(value.g * 255.0 + 0.5),
        to_byte(value.b * 255.0 + 0.5),
    )


# =============================================================================
# RGB8 <-> Linear RGB
# =============================================================================

def _rgb8_to_linear(c: int) -> float:
    # 40/10761 = 1/(255*1.055), 11/211 = 0.055/1.055, 5/16473 = 1/(255*12.92)
    if c >= RGB8_POWER_CUTOFF:
        return math.pow(c * (40.0 / 10761.0) + (11.0 / 211.0), SRGB_GAMMA)
    return c * (5.0 / 16473.0)


def _linear_to_rgb8(c: float) -> int:
    if math.isnan(c):
        raise InvalidChannelError("Cannot quantize a NaN channel to 8 bits")
    if c <= 0.0:
        return 0
    if c <= SRGB_LINEAR_CUTOFF:
        return int(c * 3294.6 + 0.5)
    if c < 1.0:
        return int(math.pow(c, INV_SRGB_GAMMA) * 269.025 - (14.025 - 0.5))
    return 255


def rgb8_to_linear_rgb(value: RGB8, flags: int = 0) -> LinearRGB:
    """Decode 8-bit sRGB codes straight to linear light."""
    return LinearRGB(
        _rgb8_to_linear(value.r),
        _rgb8_to_linear(value.g),
        _rgb8_to_linear(value.b),
    )


def linear_rgb_to_rgb8(value: LinearRGB, flags: int = 0) -> RGB8:
    """Encode linear light straight to 8-bit sRGB codes."""
    return RGB8(
        _linear_to_rgb8(value.r),
        _linear_to_rgb8(value.g),
        _linear_to_rgb8(value.b),
    )


# =============================================================================
# RGB <-> Linear RGB
# =============================================================================

def _srgb_to_linear(c: float) -> float:
    if c > SRGB_ENCODED_CUTOFF:
        return math.pow(c * (1.0 / 1.055) + (0.055 / 1.055), SRGB_GAMMA)
    return c * (1.0 / 12.92)


def _linear_to_srgb(c: float) -> float:
    if c > SRGB_LINEAR_CUTOFF:
        return math.pow(c, INV_SRGB_GAMMA) * 1.055 - 0.055
    return c * 12.92


def rgb_to_linear_rgb(value: RGB, flags: int = 0) -> LinearRGB:
    """Apply the inverse sRGB transfer function."""
    return LinearRGB(
        _srgb_to_linear(value.r),
        _srgb_to_linear(value.g),
        _srgb_to_linear(value.b),
    )


def linear_rgb_to_rgb(value: LinearRGB, flags: int = 0) -> RGB:
    """Apply the sRGB transfer function."""
    return RGB(
        _linear_to_srgb(value.r),
        _linear_to_srgb(value.g),
        _linear_to_srgb(value.b),
    )
