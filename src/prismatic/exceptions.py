"""
Exceptions raised by prismatic.

Every error here is a contract violation by the caller or a defect in the
routing tables; none of them is meant to be retried.
"""

from __future__ import annotations


class PrismaticError(Exception):
    """Base exception for all prismatic errors."""


class UnknownSpaceError(PrismaticError, ValueError):
    """Raised when a color space tag or name cannot be resolved."""

    def __init__(self, space: object) -> None:
        super().__init__(f"Unknown color space: {space!r}")
        self.space = space


class InvalidFlagsError(PrismaticError, ValueError):
    """
    Raised when a flags byte does not fit the color space it is paired with.

    Also raised when a re-parameterization is requested that would not
    change the value's flags.
    """


class PayloadMismatchError(PrismaticError, TypeError):
    """Raised when a payload does not match the space an operation expects."""


class RoutingError(PrismaticError, RuntimeError):
    """
    Raised when the conversion tables cannot route a value.

    The tables are closed and total, so this always points at a defect in
    the tables themselves rather than at the input.
    """


class InvalidChannelError(PrismaticError, ValueError):
    """Raised when a channel value is NaN or outside its integer range."""
