"""Helpers shared by the edge modules."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from prismatic.exceptions import InvalidChannelError


def frozen_matrix(rows: Sequence[Sequence[float]]) -> NDArray[np.float64]:
    """Build a read-only 3x3 float64 matrix."""
    matrix = np.array(rows, dtype=np.float64)
    if matrix.shape != (3, 3):
        raise ValueError(f"Expected a 3x3 matrix, got shape {matrix.shape}")
    matrix.setflags(write=False)
    return matrix


def apply_matrix(
    matrix: NDArray[np.float64], a: float, b: float, c: float
) -> tuple[float, float, float]:
    """Multiply a 3x3 matrix by the column vector (a, b, c)."""
    x, y, z = matrix @ np.array((a, b, c), dtype=np.float64)
    return float(x), float(y), float(z)


def to_byte(c: float) -> int:
    """
    Clamp to [0, 255] and truncate. Callers add the 0.5 rounding offset.

    Raises:
        InvalidChannelError: If ``c`` is NaN
    """
    if np.isnan(c):
        raise InvalidChannelError("Cannot quantize a NaN channel to 8 bits")
    return int(np.clip(c, 0.0, 255.0))
