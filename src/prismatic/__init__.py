"""
Prismatic - color space conversion routing.

Converts a single color value between any two of sixteen color spaces by
walking a fixed graph of closed-form conversions.
"""

__version__ = "0.1.0"

from prismatic.core.data_types import (
    HSL,
    HSV,
    MATRIX_MASK,
    RGB,
    RGB8,
    XYZ,
    YCBCR_FULL_RANGE,
    YIQ,
    YUV,
    Color,
    LCHab,
    LCHuv,
    LinearRGB,
    LSHuv,
    Lab,
    Luv,
    MatrixStandard,
    Payload,
    Space,
    YCbCr,
    YDbDr,
    extract_components,
    list_spaces,
    make_flags,
    space_from_name,
    space_name,
    xyY,
)
from prismatic.core.graph import convert, convert_value, route
from prismatic.exceptions import (
    InvalidChannelError,
    InvalidFlagsError,
    PayloadMismatchError,
    PrismaticError,
    RoutingError,
    UnknownSpaceError,
)

__all__ = [
    "__version__",
    # Routing
    "convert",
    "convert_value",
    "route",
    # Representation
    "Color",
    "Payload",
    "Space",
    "MatrixStandard",
    "MATRIX_MASK",
    "YCBCR_FULL_RANGE",
    "make_flags",
    "extract_components",
    "list_spaces",
    "space_from_name",
    "space_name",
    # Payloads
    "RGB8",
    "RGB",
    "LinearRGB",
    "HSL",
    "HSV",
    "YUV",
    "YCbCr",
    "YDbDr",
    "YIQ",
    "XYZ",
    "xyY",
    "Lab",
    "Luv",
    "LCHab",
    "LCHuv",
    "LSHuv",
    # Errors
    "PrismaticError",
    "UnknownSpaceError",
    "InvalidChannelError",
    "InvalidFlagsError",
    "PayloadMismatchError",
    "RoutingError",
]
