"""
Core data types for prismatic.

Provides the Space enum, the flags byte helpers, one frozen payload type per
color space, and the mutable Color container that the routing engine
converts in place.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from numbers import Integral
from types import MappingProxyType
from typing import ClassVar, Iterable, Mapping

from prismatic.exceptions import (
    InvalidChannelError,
    InvalidFlagsError,
    PayloadMismatchError,
    UnknownSpaceError,
)


class Space(str, Enum):
    """Supported color spaces. Each value is the space's display name."""

    RGB8 = "RGB8"
    RGB = "RGB"
    LINEAR_RGB = "Linear RGB"
    HSL = "HSL"
    HSV = "HSV"
    YUV = "YUV"
    YCBCR = "YCbCr"
    YDBDR = "YDbDr"
    YIQ = "YIQ"
    XYZ = "XYZ"
    XYY = "xyY"
    LAB = "Lab"
    LUV = "Luv"
    LCHAB = "LCHab"
    LCHUV = "LCHuv"
    LSHUV = "LSHuv"

    def __str__(self) -> str:
        return self.value


class MatrixStandard(IntEnum):
    """Luma/chroma weighting standards, stored in flag bits 0-1."""

    REC601 = 0
    REC709 = 1
    SMPTE240M = 2
    FCC = 3


MATRIX_MASK = 0x03
YCBCR_FULL_RANGE = 0x04

_FLAG_MASKS: Mapping[Space, int] = MappingProxyType({
    Space.YUV: MATRIX_MASK,
    Space.YCBCR: MATRIX_MASK | YCBCR_FULL_RANGE,
})


def flag_mask(space: Space) -> int:
    """Bits of the flags byte that are meaningful for ``space``."""
    return _FLAG_MASKS.get(space, 0)


def make_flags(matrix: MatrixStandard | int = MatrixStandard.REC601, full_range: bool = False) -> int:
    """Build a flags byte from a matrix standard and a YCbCr range choice."""
    flags = int(MatrixStandard(matrix))
    if full_range:
        flags |= YCBCR_FULL_RANGE
    return flags


def matrix_of(flags: int) -> MatrixStandard:
    """Matrix standard selected by a flags byte."""
    return MatrixStandard(flags & MATRIX_MASK)


def is_full_range(flags: int) -> bool:
    """Whether a flags byte selects full-range YCbCr."""
    return bool(flags & YCBCR_FULL_RANGE)


def check_flags(space: Space, flags: int) -> int:
    """
    Validate a flags byte for a color space.

    Args:
        space: Space the flags are paired with
        flags: Flags byte

    Returns:
        The flags as a plain int

    Raises:
        InvalidFlagsError: If flags is not a byte or carries bits that
            mean nothing for ``space``
    """
    if isinstance(flags, bool) or not isinstance(flags, Integral):
        raise InvalidFlagsError(f"Flags must be an integer, got {flags!r}")
    flags = int(flags)
    if not 0 <= flags <= 0xFF:
        raise InvalidFlagsError(f"Flags must fit in a byte, got {flags}")
    if flags & ~flag_mask(space):
        raise InvalidFlagsError(
            f"Flags 0x{flags:02x} carry bits not meaningful for {space.value}"
        )
    return flags


def _byte(name: str, value: object) -> int:
    """Validate one 8-bit channel."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidChannelError(f"Channel {name} must be an integer in [0, 255], got {value!r}")
    if not 0 <= value <= 255:
        raise InvalidChannelError(f"Channel {name} must be in [0, 255], got {value}")
    return int(value)


def _matrix(value: object) -> MatrixStandard:
    try:
        return MatrixStandard(value)
    except ValueError:
        raise InvalidFlagsError(f"Unknown matrix standard: {value!r}") from None


# =============================================================================
# Payloads
# =============================================================================

@dataclass(frozen=True)
class Payload:
    """
    Base class for the per-space channel values.

    Subclasses carry only the fields of their own space. ``CHANNELS`` lists
    those fields in canonical order.
    """

    space: ClassVar[Space]
    CHANNELS: ClassVar[tuple[str, str, str]]

    @property
    def flags(self) -> int:
        """Variant flags. Zero for every space without matrix or range variants."""
        return 0

    def components(self) -> tuple[float, float, float]:
        """Channel values as floats, in canonical order."""
        a, b, c = (float(getattr(self, name)) for name in self.CHANNELS)
        return (a, b, c)


@dataclass(frozen=True)
class RGB8(Payload):
    """8-bit sRGB."""

    r: int
    g: int
    b: int

    space: ClassVar[Space] = Space.RGB8
    CHANNELS: ClassVar[tuple[str, str, str]] = ("r", "g", "b")

    def __post_init__(self) -> None:
        for name in self.CHANNELS:
            object.__setattr__(self, name, _byte(name, getattr(self, name)))


@dataclass(frozen=True)
class RGB(Payload):
    """sRGB-encoded RGB, nominally in [0, 1]."""

    r: float
    g: float
    b: float

    space: ClassVar[Space] = Space.RGB
    CHANNELS: ClassVar[tuple[str, str, str]] = ("r", "g", "b")


@dataclass(frozen=True)
class LinearRGB(Payload):
    """Linear-light RGB with sRGB primaries."""

    r: float
    g: float
    b: float

    space: ClassVar[Space] = Space.LINEAR_RGB
    CHANNELS: ClassVar[tuple[str, str, str]] = ("r", "g", "b")


@dataclass(frozen=True)
class HSL(Payload):
    """Hue in [0, 6), saturation, lightness."""

    h: float
    s: float
    l: float  # noqa: E741

    space: ClassVar[Space] = Space.HSL
    CHANNELS: ClassVar[tuple[str, str, str]] = ("h", "s", "l")


@dataclass(frozen=True)
class HSV(Payload):
    """Hue in [0, 6), saturation, value."""

    h: float
    s: float
    v: float

    space: ClassVar[Space] = Space.HSV
    CHANNELS: ClassVar[tuple[str, str, str]] = ("h", "s", "v")


@dataclass(frozen=True)
class YUV(Payload):
    """
    Analog YUV.

    Y is in [0, 1], U in [-0.436, 0.436] and V in [-0.615, 0.615]. The
    matrix records which standard produced the value.
    """

    y: float
    u: float
    v: float
    matrix: MatrixStandard = MatrixStandard.REC601

    space: ClassVar[Space] = Space.YUV
    CHANNELS: ClassVar[tuple[str, str, str]] = ("y", "u", "v")

    def __post_init__(self) -> None:
        object.__setattr__(self, "matrix", _matrix(self.matrix))

    @property
    def flags(self) -> int:
        return int(self.matrix)


@dataclass(frozen=True)
class YCbCr(Payload):
    """8-bit digital YCbCr in studio or full range."""

    y: int
    cb: int
    cr: int
    matrix: MatrixStandard = MatrixStandard.REC601
    full_range: bool = False

    space: ClassVar[Space] = Space.YCBCR
    CHANNELS: ClassVar[tuple[str, str, str]] = ("y", "cb", "cr")

    def __post_init__(self) -> None:
        for name in self.CHANNELS:
            object.__setattr__(self, name, _byte(name, getattr(self, name)))
        object.__setattr__(self, "matrix", _matrix(self.matrix))
        object.__setattr__(self, "full_range", bool(self.full_range))

    @property
    def flags(self) -> int:
        return make_flags(self.matrix, self.full_range)


@dataclass(frozen=True)
class YDbDr(Payload):
    """SECAM YDbDr."""

    y: float
    db: float
    dr: float

    space: ClassVar[Space] = Space.YDBDR
    CHANNELS: ClassVar[tuple[str, str, str]] = ("y", "db", "dr")


@dataclass(frozen=True)
class YIQ(Payload):
    """NTSC YIQ."""

    y: float
    i: float
    q: float

    space: ClassVar[Space] = Space.YIQ
    CHANNELS: ClassVar[tuple[str, str, str]] = ("y", "i", "q")


@dataclass(frozen=True)
class XYZ(Payload):
    """CIE 1931 XYZ, D65, white has Y = 1."""

    x: float
    y: float
    z: float

    space: ClassVar[Space] = Space.XYZ
    CHANNELS: ClassVar[tuple[str, str, str]] = ("x", "y", "z")


@dataclass(frozen=True)
class xyY(Payload):  # noqa: N801
    """CIE xyY chromaticity plus luminance."""

    x: float
    y: float
    Y: float  # noqa: N815

    space: ClassVar[Space] = Space.XYY
    CHANNELS: ClassVar[tuple[str, str, str]] = ("x", "y", "Y")


@dataclass(frozen=True)
class Lab(Payload):
    """CIE L*a*b*, D65."""

    l: float  # noqa: E741
    a: float
    b: float

    space: ClassVar[Space] = Space.LAB
    CHANNELS: ClassVar[tuple[str, str, str]] = ("l", "a", "b")


@dataclass(frozen=True)
class Luv(Payload):
    """CIE L*u*v*, D65."""

    l: float  # noqa: E741
    u: float
    v: float

    space: ClassVar[Space] = Space.LUV
    CHANNELS: ClassVar[tuple[str, str, str]] = ("l", "u", "v")


@dataclass(frozen=True)
class LCHab(Payload):
    """Polar L*a*b*. Hue in radians, [0, 2*pi)."""

    l: float  # noqa: E741
    c: float
    h: float

    space: ClassVar[Space] = Space.LCHAB
    CHANNELS: ClassVar[tuple[str, str, str]] = ("l", "c", "h")


@dataclass(frozen=True)
class LCHuv(Payload):
    """Polar L*u*v*. Hue in radians, [0, 2*pi)."""

    l: float  # noqa: E741
    c: float
    h: float

    space: ClassVar[Space] = Space.LCHUV
    CHANNELS: ClassVar[tuple[str, str, str]] = ("l", "c", "h")


@dataclass(frozen=True)
class LSHuv(Payload):
    """Polar L*u*v* with saturation S = C / L in place of chroma."""

    l: float  # noqa: E741
    s: float
    h: float

    space: ClassVar[Space] = Space.LSHUV
    CHANNELS: ClassVar[tuple[str, str, str]] = ("l", "s", "h")


PAYLOAD_TYPES: Mapping[Space, type[Payload]] = MappingProxyType({
    cls.space: cls
    for cls in (
        RGB8, RGB, LinearRGB, HSL, HSV, YUV, YCbCr, YDbDr, YIQ,
        XYZ, xyY, Lab, Luv, LCHab, LCHuv, LSHuv,
    )
})


# =============================================================================
# Color container
# =============================================================================

class Color:
    """
    A single color value that the routing engine converts in place.

    The space and flags are always read from the current payload, so they
    can never disagree with it.

    Usage:
        color = Color(RGB8(255, 0, 0))
        convert(color, Space.LAB)
        L, a, b = color.components()
    """

    __slots__ = ("_value",)

    def __init__(self, value: Payload) -> None:
        self.value = value

    @property
    def value(self) -> Payload:
        """Current payload."""
        return self._value

    @value.setter
    def value(self, value: Payload) -> None:
        if not isinstance(value, Payload):
            raise PayloadMismatchError(
                f"Color value must be a payload, got {type(value).__name__}"
            )
        self._value = value

    @property
    def space(self) -> Space:
        """Space of the current payload."""
        return self._value.space

    @property
    def flags(self) -> int:
        """Flags of the current payload."""
        return self._value.flags

    def components(self) -> tuple[float, float, float]:
        """Channel values in canonical order."""
        return self._value.components()

    def copy(self) -> Color:
        """Create an independent color holding the same payload."""
        return Color(self._value)

    @classmethod
    def from_components(
        cls,
        space: Space | str,
        components: Iterable[float],
        flags: int = 0,
    ) -> Color:
        """
        Create a color from a raw channel triple.

        Args:
            space: Target space (enum member or name)
            components: Three channel values in canonical order
            flags: Variant flags, validated against ``space``

        Returns:
            New Color
        """
        space = space_from_name(space)
        flags = check_flags(space, flags)
        c0, c1, c2 = components

        if space is Space.YUV:
            payload: Payload = YUV(c0, c1, c2, matrix=matrix_of(flags))
        elif space is Space.YCBCR:
            payload = YCbCr(c0, c1, c2, matrix=matrix_of(flags), full_range=is_full_range(flags))
        else:
            payload = PAYLOAD_TYPES[space](c0, c1, c2)

        return cls(payload)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Color({self._value!r})"


# =============================================================================
# Names and extraction
# =============================================================================

def _normalize_name(name: str) -> str:
    return re.sub(r"[\s_\-]", "", name).lower()


_SPACE_LOOKUP: Mapping[str, Space] = MappingProxyType({
    **{_normalize_name(space.name): space for space in Space},
    **{_normalize_name(space.value): space for space in Space},
})


def space_from_name(space: Space | str) -> Space:
    """
    Resolve a space from an enum member or a name.

    Both display names ("Linear RGB") and member names ("LINEAR_RGB") are
    accepted; case, spaces, underscores and hyphens are ignored.

    Raises:
        UnknownSpaceError: If the name matches no space
    """
    if isinstance(space, Space):
        return space
    if isinstance(space, str):
        resolved = _SPACE_LOOKUP.get(_normalize_name(space))
        if resolved is not None:
            return resolved
    raise UnknownSpaceError(space)


def space_name(space: Space | str) -> str:
    """Stable human-readable name of a space."""
    return space_from_name(space).value


def list_spaces() -> list[str]:
    """Display names of all supported spaces, in enum order."""
    return [space.value for space in Space]


def extract_components(color: Color | Payload) -> tuple[float, float, float]:
    """
    Read a color's channels in its space's canonical order.

    Never mutates the color.
    """
    if isinstance(color, Color):
        return color.components()
    if isinstance(color, Payload):
        return color.components()
    raise PayloadMismatchError(f"Cannot extract components from {type(color).__name__}")
