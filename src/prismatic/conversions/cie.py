"""
CIE color space edges: XYZ, xyY, L*a*b*, L*u*v* and their polar forms.

All spaces use the D65 white point with Y normalized to 1. Constants are
exact rationals derived from the sRGB primaries and the white point
chromaticity (0.3127, 0.3290).
"""

from __future__ import annotations

import math

from prismatic.conversions.common import apply_matrix, frozen_matrix
from prismatic.core.data_types import (
    XYZ,
    LCHab,
    LCHuv,
    LinearRGB,
    LSHuv,
    Lab,
    Luv,
    xyY,
)

# D65 reference white and its reciprocals
REF_X = 31271.0 / 32902.0
REF_X_INV = 32902.0 / 31271.0
REF_Z = 35827.0 / 32902.0
REF_Z_INV = 32902.0 / 35827.0

# 13 * u'n and 13 * v'n of the reference white
REF_U13 = 813046.0 / 316141.0
REF_V13 = 1924767.0 / 316141.0

# (6/29)^3 and its image under the linear segment
CIE_EPSILON = 216.0 / 24389.0
CIE_KAPPA = 24389.0 / 27.0
CIE_DELTA = 6.0 / 29.0
LAB_L_CUTOFF = 8.0

# CIE_EPSILON scaled by the reference white for unnormalized X and Z
X_EPSILON = 3377268.0 / 401223439.0
Z_EPSILON = 3869316.0 / 401223439.0

ONE_THIRD = 1.0 / 3.0
TAU = 2.0 * math.pi

LINEAR_RGB_TO_XYZ = frozen_matrix([
    [5067776.0 / 12288897.0, 4394405.0 / 12288897.0, 4435075.0 / 24577794.0],
    [871024.0 / 4096299.0, 8788810.0 / 12288897.0, 887015.0 / 12288897.0],
    [79184.0 / 4096299.0, 4394405.0 / 36866691.0, 70074185.0 / 73733382.0],
])

XYZ_TO_LINEAR_RGB = frozen_matrix([
    [641589.0 / 197960.0, -608687.0 / 395920.0, -49353.0 / 98980.0],
    [-42591639.0 / 43944050.0, 82435961.0 / 43944050.0, 1826061.0 / 43944050.0],
    [49353.0 / 887015.0, -180961.0 / 887015.0, 49353.0 / 46685.0],
])

# Same matrices with the reference white folded in, so XYZ lands in [0, 1]
LINEAR_RGB_TO_NORMALIZED_XYZ = frozen_matrix([
    [10135552.0 / 23359437.0, 8788810.0 / 23359437.0, 4435075.0 / 23359437.0],
    [871024.0 / 4096299.0, 8788810.0 / 12288897.0, 887015.0 / 12288897.0],
    [158368.0 / 8920923.0, 8788810.0 / 80288307.0, 70074185.0 / 80288307.0],
])

NORMALIZED_XYZ_TO_LINEAR_RGB = frozen_matrix([
    [1219569.0 / 395920.0, -608687.0 / 395920.0, -107481.0 / 197960.0],
    [-80960619.0 / 87888100.0, 82435961.0 / 43944050.0, 3976797.0 / 87888100.0],
    [93813.0 / 1774030.0, -180961.0 / 887015.0, 107481.0 / 93370.0],
])


def _lab_f(t: float) -> float:
    """CIE forward companding for a normalized tristimulus value."""
    if t > CIE_EPSILON:
        return math.pow(t, ONE_THIRD)
    return t * (841.0 / 108.0) + (4.0 / 29.0)


def _lab_f_inv(t: float) -> float:
    """Inverse of ``_lab_f``."""
    if t > CIE_DELTA:
        return t * t * t
    return t * (108.0 / 841.0) - (432.0 / 24389.0)


def _lightness_to_y(lightness: float) -> float:
    if lightness > LAB_L_CUTOFF:
        y = lightness * (1.0 / 116.0) + (16.0 / 116.0)
        return y * y * y
    return lightness * (27.0 / 24389.0)


def _y_to_lightness(y: float) -> float:
    if y > CIE_EPSILON:
        return math.pow(y, ONE_THIRD) * 116.0 - 16.0
    return y * CIE_KAPPA


def _polar(a: float, b: float) -> tuple[float, float]:
    """Cartesian (a, b) to (magnitude, angle in [0, 2*pi))."""
    h = math.atan2(b, a)
    if h < 0.0:
        h += TAU
        if h >= TAU:
            h = 0.0
    return math.hypot(a, b), h


def _cartesian(c: float, h: float) -> tuple[float, float]:
    return math.cos(h) * c, math.sin(h) * c


# =============================================================================
# Linear RGB <-> XYZ
# =============================================================================

def linear_rgb_to_xyz(value: LinearRGB, flags: int = 0) -> XYZ:
    """Convert linear sRGB to XYZ."""
    return XYZ(*apply_matrix(LINEAR_RGB_TO_XYZ, value.r, value.g, value.b))


def xyz_to_linear_rgb(value: XYZ, flags: int = 0) -> LinearRGB:
    """Convert XYZ to linear sRGB."""
    return LinearRGB(*apply_matrix(XYZ_TO_LINEAR_RGB, value.x, value.y, value.z))


# =============================================================================
# Linear RGB <-> Lab (shortcut through normalized XYZ)
# =============================================================================

def linear_rgb_to_lab(value: LinearRGB, flags: int = 0) -> Lab:
    """Convert linear sRGB to Lab without materializing XYZ."""
    x, y, z = apply_matrix(LINEAR_RGB_TO_NORMALIZED_XYZ, value.r, value.g, value.b)
    fx, fy, fz = _lab_f(x), _lab_f(y), _lab_f(z)
    return Lab(fy * 116.0 - 16.0, (fx - fy) * 500.0, (fy - fz) * 200.0)


def lab_to_linear_rgb(value: Lab, flags: int = 0) -> LinearRGB:
    """Convert Lab to linear sRGB without materializing XYZ."""
    fy = value.l * (1.0 / 116.0) + (16.0 / 116.0)
    fx = value.a * (1.0 / 500.0) + fy
    fz = value.b * (-1.0 / 200.0) + fy

    x = _lab_f_inv(fx)
    y = _lightness_to_y(value.l)
    z = _lab_f_inv(fz)

    return LinearRGB(*apply_matrix(NORMALIZED_XYZ_TO_LINEAR_RGB, x, y, z))


# =============================================================================
# XYZ <-> xyY
# =============================================================================

def xyz_to_xyy(value: XYZ, flags: int = 0) -> xyY:
    """
    Convert XYZ to xyY.

    When X + Y + Z is zero, X and Y pass through unchanged as x and y.
    """
    total = value.x + value.y + value.z
    if math.fabs(total) > 0.0:
        return xyY(value.x / total, value.y / total, value.y)
    return xyY(value.x, value.y, value.y)


def xyy_to_xyz(value: xyY, flags: int = 0) -> XYZ:
    """Convert xyY to XYZ. A zero y chromaticity gives black."""
    if math.fabs(value.y) > 0.0:
        scale = value.Y / value.y
        return XYZ(value.x * scale, value.Y, (1.0 - value.x - value.y) * scale)
    return XYZ(0.0, 0.0, 0.0)


# =============================================================================
# XYZ <-> Lab
# =============================================================================

def xyz_to_lab(value: XYZ, flags: int = 0) -> Lab:
    """Convert XYZ to Lab."""
    x, y, z = value.x, value.y, value.z

    if x > X_EPSILON:
        fx = math.pow(x * REF_X_INV, ONE_THIRD)
    else:
        fx = x * (13835291.0 / 1688634.0) + (4.0 / 29.0)
    fy = _lab_f(y)
    if z > Z_EPSILON:
        fz = math.pow(z * REF_Z_INV, ONE_THIRD)
    else:
        fz = z * (13835291.0 / 1934658.0) + (4.0 / 29.0)

    return Lab(fy * 116.0 - 16.0, (fx - fy) * 500.0, (fy - fz) * 200.0)


def lab_to_xyz(value: Lab, flags: int = 0) -> XYZ:
    """Convert Lab to XYZ. L <= 8 uses the linear segment for Y."""
    fy = value.l * (1.0 / 116.0) + (16.0 / 116.0)
    fx = value.a * (1.0 / 500.0) + fy
    fz = value.b * (-1.0 / 200.0) + fy

    if fx > CIE_DELTA:
        x = fx * fx * fx * REF_X
    else:
        x = fx * (1688634.0 / 13835291.0) - (6754536.0 / 401223439.0)
    y = _lightness_to_y(value.l)
    if fz > CIE_DELTA:
        z = fz * fz * fz * REF_Z
    else:
        z = fz * (1934658.0 / 13835291.0) - (7738632.0 / 401223439.0)

    return XYZ(x, y, z)


# =============================================================================
# XYZ <-> Luv
# =============================================================================

def xyz_to_luv(value: XYZ, flags: int = 0) -> Luv:
    """Convert XYZ to Luv."""
    x, y = value.x, value.y
    lightness = _y_to_lightness(y)

    denom = x + y * 15.0 + value.z * 3.0
    if math.fabs(denom) > 0.0:
        scale = 1.0 / denom
        x *= scale
        y *= scale

    return Luv(
        lightness,
        (x * 52.0 - REF_U13) * lightness,
        (y * 117.0 - REF_V13) * lightness,
    )


def luv_to_xyz(value: Luv, flags: int = 0) -> XYZ:
    """Convert Luv to XYZ. L = 0 gives black."""
    lightness, u, v = value.l, value.u, value.v
    if lightness == 0.0:
        return XYZ(0.0, 0.0, 0.0)

    y = _lightness_to_y(lightness)

    a = lightness / (lightness * REF_U13 + u) * (52.0 / 3.0) - ONE_THIRD
    b = 5.0 * y
    c = (lightness / (lightness * REF_V13 + v) * 39.0 - 5.0) * y

    x = (c + b) / (a + ONE_THIRD)
    z = x * a - b

    return XYZ(x, y, z)


# =============================================================================
# Cartesian <-> polar
# =============================================================================

def lab_to_lchab(value: Lab, flags: int = 0) -> LCHab:
    """Convert Lab to LCHab."""
    chroma, hue = _polar(value.a, value.b)
    return LCHab(value.l, chroma, hue)


def lchab_to_lab(value: LCHab, flags: int = 0) -> Lab:
    """Convert LCHab to Lab."""
    a, b = _cartesian(value.c, value.h)
    return Lab(value.l, a, b)


def luv_to_lchuv(value: Luv, flags: int = 0) -> LCHuv:
    """Convert Luv to LCHuv."""
    chroma, hue = _polar(value.u, value.v)
    return LCHuv(value.l, chroma, hue)


def lchuv_to_luv(value: LCHuv, flags: int = 0) -> Luv:
    """Convert LCHuv to Luv."""
    u, v = _cartesian(value.c, value.h)
    return Luv(value.l, u, v)


def lchuv_to_lshuv(value: LCHuv, flags: int = 0) -> LSHuv:
    """Convert LCHuv to LSHuv. Saturation is C / L, or 0 at L = 0."""
    saturation = value.c / value.l if value.l != 0.0 else 0.0
    return LSHuv(value.l, saturation, value.h)


def lshuv_to_lchuv(value: LSHuv, flags: int = 0) -> LCHuv:
    """Convert LSHuv to LCHuv."""
    return LCHuv(value.l, value.s * value.l, value.h)
