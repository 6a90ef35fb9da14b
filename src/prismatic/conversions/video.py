"""
Broadcast color space edges: YUV, YCbCr, YDbDr and YIQ.

YUV and YCbCr follow the matrix standard selected by flag bits 0-1; YCbCr
also follows the range selected by flag bit 2. Matrix coefficients are the
exact rationals implied by each standard's luma weights and the
U_MAX = 0.436 / V_MAX = 0.615 chroma scaling.
"""

from __future__ import annotations

from prismatic.conversions.common import apply_matrix, frozen_matrix, to_byte
from prismatic.core.data_types import (
    RGB,
    YIQ,
    YUV,
    MatrixStandard,
    YCbCr,
    YDbDr,
    is_full_range,
    matrix_of,
)
from prismatic.exceptions import InvalidFlagsError

U_MAX = 0.436
V_MAX = 0.615

# Rows produce (Y, U, V) from (R, G, B)
RGB_TO_YUV = {
    MatrixStandard.REC601: frozen_matrix([
        [0.299, 0.587, 0.114],
        [-32591.0 / 221500.0, -63983.0 / 221500.0, U_MAX],
        [V_MAX, -72201.0 / 140200.0, -7011.0 / 70100.0],
    ]),
    MatrixStandard.REC709: frozen_matrix([
        [0.2126, 0.7152, 0.0722],
        [-115867.0 / 1159750.0, -194892.0 / 579875.0, U_MAX],
        [V_MAX, -54981.0 / 98425.0, -44403.0 / 787400.0],
    ]),
    MatrixStandard.SMPTE240M: frozen_matrix([
        [0.212, 0.701, 0.087],
        [-11554.0 / 114125.0, -76409.0 / 228250.0, U_MAX],
        [V_MAX, -86223.0 / 157600.0, -10701.0 / 157600.0],
    ]),
    MatrixStandard.FCC: frozen_matrix([
        [0.3, 0.59, 0.11],
        [-327.0 / 2225.0, -6431.0 / 22250.0, U_MAX],
        [V_MAX, -7257.0 / 14000.0, -1353.0 / 14000.0],
    ]),
}

# Rows produce (R, G, B) from (Y, U, V)
YUV_TO_RGB = {
    MatrixStandard.REC601: frozen_matrix([
        [1.0, 0.0, 701.0 / 615.0],
        [1.0, -25251.0 / 63983.0, -209599.0 / 361005.0],
        [1.0, 443.0 / 218.0, 0.0],
    ]),
    MatrixStandard.REC709: frozen_matrix([
        [1.0, 0.0, 3937.0 / 3075.0],
        [1.0, -1674679.0 / 7795680.0, -4185031.0 / 10996200.0],
        [1.0, 4639.0 / 2180.0, 0.0],
    ]),
    MatrixStandard.SMPTE240M: frozen_matrix([
        [1.0, 0.0, 788.0 / 615.0],
        [1.0, -79431.0 / 305636.0, -167056.0 / 431115.0],
        [1.0, 913.0 / 436.0, 0.0],
    ]),
    MatrixStandard.FCC: frozen_matrix([
        [1.0, 0.0, 140.0 / 123.0],
        [1.0, -4895.0 / 12862.0, -1400.0 / 2419.0],
        [1.0, 445.0 / 218.0, 0.0],
    ]),
}

RGB_TO_YDBDR = frozen_matrix([
    [299.0 / 1000.0, 587.0 / 1000.0, 57.0 / 500.0],
    [-398567.0 / 886000.0, -782471.0 / 886000.0, 1333.0 / 1000.0],
    [1333.0 / 1000.0, -782471.0 / 701000.0, -75981.0 / 350500.0],
])

YDBDR_TO_RGB = frozen_matrix([
    [1.0, 0.0, 701.0 / 1333.0],
    [1.0, -101004.0 / 782471.0, -209599.0 / 782471.0],
    [1.0, 886.0 / 1333.0, 0.0],
])

RGB_TO_YIQ = frozen_matrix([
    [0.299, 0.587, 0.114],
    [0.5957, -0.2744766323826577035751015648, -0.3212233676173422964248984352],
    [-0.2114956266791979792324116478, 0.5226, -0.3111043733208020207675883522],
])

YIQ_TO_RGB = frozen_matrix([
    [1.0, 9.563000521420394701478042310e-1, -6.209682015704038246103012680e-1],
    [1.0, -2.720883840788609953919979558e-1, 6.473748500336683799608873068e-1],
    [1.0, -1.107173983650687695430619869e0, -1.704732848247478907706673421e0],
])

YDBDR_TO_YIQ = frozen_matrix([
    [1.0, 0.0, 0.0],
    [0.0, -1.780759334211551067290090872e-1, 3.867911188667345780375729105e-1],
    [3.155443620884047221646914261e-30, -2.742395246410785275938007739e-1, -2.512094867865302853146089398e-1],
])

YIQ_TO_YDBDR = frozen_matrix([
    [1.0, 6.310887241768094443293828522e-30, 0.0],
    [0.0, -1.665759503618924038384894227e0, -2.564795583198520749405186986e0],
    [1.009741958682895110927012564e-28, 1.818470712561110718554954408e0, -1.180813998136017543802470171e0],
])

# YCbCr code value scaling. Forward offsets include the +0.5 rounding term.
FULL_Y_SCALE = 255.0
FULL_CB_SCALE = 31875.0 / 109.0
FULL_CR_SCALE = 8500.0 / 41.0
FULL_CHROMA_OFFSET = 128.0

STUDIO_Y_SCALE = 219.0
STUDIO_Y_OFFSET = 16.0
STUDIO_CB_SCALE = 28000.0 / 109.0
STUDIO_CR_SCALE = 22400.0 / 123.0
STUDIO_CHROMA_OFFSET = 128.0


# =============================================================================
# RGB <-> YUV
# =============================================================================

def rgb_to_yuv(value: RGB, flags: int = 0) -> YUV:
    """Convert RGB to YUV using the matrix selected by ``flags``."""
    matrix = matrix_of(flags)
    y, u, v = apply_matrix(RGB_TO_YUV[matrix], value.r, value.g, value.b)
    return YUV(y, u, v, matrix=matrix)


def yuv_to_rgb(value: YUV, flags: int = 0) -> RGB:
    """Convert YUV to RGB using the value's own matrix."""
    return RGB(*apply_matrix(YUV_TO_RGB[value.matrix], value.y, value.u, value.v))


def yuv_to_yuv(value: YUV, flags: int) -> YUV:
    """
    Re-express a YUV value under another matrix standard.

    Goes through RGB with the current matrix and back with the target one.

    Raises:
        InvalidFlagsError: If the target matrix equals the current one
    """
    target = matrix_of(flags)
    if value.matrix is target:
        raise InvalidFlagsError(f"YUV value already uses {target.name}")
    return rgb_to_yuv(yuv_to_rgb(value), flags)


# =============================================================================
# YUV <-> YCbCr
# =============================================================================

def yuv_to_ycbcr(value: YUV, flags: int = 0) -> YCbCr:
    """
    Quantize YUV to 8-bit YCbCr.

    Studio range maps luma to [16, 235] and chroma to [16, 240]; full range
    maps luma to [0, 255] and chroma to [1, 255]. Chroma is centred on 128
    in both ranges. The value is re-expressed under the target
    matrix first if needed.
    """
    matrix = matrix_of(flags)
    full_range = is_full_range(flags)
    if value.matrix is not matrix:
        value = yuv_to_yuv(value, flags)

    if full_range:
        y = value.y * FULL_Y_SCALE + 0.5
        cb = value.u * FULL_CB_SCALE + (FULL_CHROMA_OFFSET + 0.5)
        cr = value.v * FULL_CR_SCALE + (FULL_CHROMA_OFFSET + 0.5)
    else:
        y = value.y * STUDIO_Y_SCALE + (STUDIO_Y_OFFSET + 0.5)
        cb = value.u * STUDIO_CB_SCALE + (STUDIO_CHROMA_OFFSET + 0.5)
        cr = value.v * STUDIO_CR_SCALE + (STUDIO_CHROMA_OFFSET + 0.5)

    return YCbCr(to_byte(y), to_byte(cb), to_byte(cr), matrix=matrix, full_range=full_range)


def ycbcr_to_yuv(value: YCbCr, flags: int = 0) -> YUV:
    """
    Expand 8-bit YCbCr back to YUV.

    The rescale follows the value's own range. The result is re-expressed
    under the matrix selected by ``flags`` if it differs.
    """
    if value.full_range:
        y = value.y * (1.0 / FULL_Y_SCALE)
        u = (value.cb - FULL_CHROMA_OFFSET) * (109.0 / 31875.0)
        v = (value.cr - FULL_CHROMA_OFFSET) * (41.0 / 8500.0)
    else:
        y = (value.y - STUDIO_Y_OFFSET) * (1.0 / STUDIO_Y_SCALE)
        u = (value.cb - STUDIO_CHROMA_OFFSET) * (109.0 / 28000.0)
        v = (value.cr - STUDIO_CHROMA_OFFSET) * (123.0 / 22400.0)

    yuv = YUV(y, u, v, matrix=value.matrix)
    if yuv.matrix is not matrix_of(flags):
        yuv = yuv_to_yuv(yuv, flags)
    return yuv


def ycbcr_to_ycbcr(value: YCbCr, flags: int) -> YCbCr:
    """
    Re-express a YCbCr value under another matrix and/or range.

    Goes through YUV and back.

    Raises:
        InvalidFlagsError: If the target flags equal the current ones
    """
    if value.flags == flags:
        raise InvalidFlagsError(f"YCbCr value already has flags 0x{flags:02x}")
    return yuv_to_ycbcr(ycbcr_to_yuv(value, flags), flags)


# =============================================================================
# RGB <-> YDbDr, RGB <-> YIQ, YDbDr <-> YIQ
# =============================================================================

def rgb_to_ydbdr(value: RGB, flags: int = 0) -> YDbDr:
    """Convert RGB to YDbDr."""
    return YDbDr(*apply_matrix(RGB_TO_YDBDR, value.r, value.g, value.b))


def ydbdr_to_rgb(value: YDbDr, flags: int = 0) -> RGB:
    """Convert YDbDr to RGB."""
    return RGB(*apply_matrix(YDBDR_TO_RGB, value.y, value.db, value.dr))


def rgb_to_yiq(value: RGB, flags: int = 0) -> YIQ:
    """Convert RGB to YIQ."""
    return YIQ(*apply_matrix(RGB_TO_YIQ, value.r, value.g, value.b))


def yiq_to_rgb(value: YIQ, flags: int = 0) -> RGB:
    """Convert YIQ to RGB."""
    return RGB(*apply_matrix(YIQ_TO_RGB, value.y, value.i, value.q))


def ydbdr_to_yiq(value: YDbDr, flags: int = 0) -> YIQ:
    """Convert YDbDr to YIQ without going through RGB."""
    return YIQ(*apply_matrix(YDBDR_TO_YIQ, value.y, value.db, value.dr))


def yiq_to_ydbdr(value: YIQ, flags: int = 0) -> YDbDr:
    """Convert YIQ to YDbDr without going through RGB."""
    return YDbDr(*apply_matrix(YIQ_TO_YDBDR, value.y, value.i, value.q))
