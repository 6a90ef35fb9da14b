"""Core representation model and routing engine."""

from prismatic.core.data_types import (
    Color,
    MatrixStandard,
    Payload,
    Space,
    extract_components,
    list_spaces,
    space_from_name,
    space_name,
)
from prismatic.core.graph import convert, convert_value, route, verify_routing

__all__ = [
    "Color",
    "MatrixStandard",
    "Payload",
    "Space",
    "extract_components",
    "list_spaces",
    "space_from_name",
    "space_name",
    "convert",
    "convert_value",
    "route",
    "verify_routing",
]
