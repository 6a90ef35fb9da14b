"""
Conversion routing engine.

Holds the sparse table of direct conversions between spaces and the
next-hop table that tells the engine which neighbour to move to when no
direct conversion exists. ``convert`` walks those tables one edge at a time,
replacing the color's payload on every hop.
"""

from __future__ import annotations

import logging
from collections import deque
from types import MappingProxyType
from typing import Callable, Mapping

from prismatic.conversions import cie, cylindrical, rgb, video
from prismatic.core.data_types import (
    Color,
    Payload,
    Space,
    check_flags,
    flag_mask,
    space_from_name,
)
from prismatic.exceptions import PayloadMismatchError, RoutingError

logger = logging.getLogger(__name__)

Edge = Callable[[Payload, int], Payload]

# Every shortest route is at most len(Space) - 1 hops; one more for a
# reparameterization within the target space.
MAX_HOPS = len(Space) + 1

_DIRECT: dict[tuple[Space, Space], Edge] = {
    # Quantization and transfer functions
    (Space.RGB8, Space.RGB): rgb.rgb8_to_rgb,
    (Space.RGB8, Space.LINEAR_RGB): rgb.rgb8_to_linear_rgb,
    (Space.RGB, Space.RGB8): rgb.rgb_to_rgb8,
    (Space.RGB, Space.LINEAR_RGB): rgb.rgb_to_linear_rgb,
    (Space.LINEAR_RGB, Space.RGB8): rgb.linear_rgb_to_rgb8,
    (Space.LINEAR_RGB, Space.RGB): rgb.linear_rgb_to_rgb,
    # Cylindrical
    (Space.RGB, Space.HSL): cylindrical.rgb_to_hsl,
    (Space.RGB, Space.HSV): cylindrical.rgb_to_hsv,
    (Space.HSL, Space.RGB): cylindrical.hsl_to_rgb,
    (Space.HSV, Space.RGB): cylindrical.hsv_to_rgb,
    # Broadcast
    (Space.RGB, Space.YUV): video.rgb_to_yuv,
    (Space.RGB, Space.YDBDR): video.rgb_to_ydbdr,
    (Space.RGB, Space.YIQ): video.rgb_to_yiq,
    (Space.YUV, Space.RGB): video.yuv_to_rgb,
    (Space.YUV, Space.YCBCR): video.yuv_to_ycbcr,
    (Space.YCBCR, Space.YUV): video.ycbcr_to_yuv,
    (Space.YDBDR, Space.RGB): video.ydbdr_to_rgb,
    (Space.YDBDR, Space.YIQ): video.ydbdr_to_yiq,
    (Space.YIQ, Space.RGB): video.yiq_to_rgb,
    (Space.YIQ, Space.YDBDR): video.yiq_to_ydbdr,
    # CIE
    (Space.LINEAR_RGB, Space.XYZ): cie.linear_rgb_to_xyz,
    (Space.LINEAR_RGB, Space.LAB): cie.linear_rgb_to_lab,
    (Space.XYZ, Space.LINEAR_RGB): cie.xyz_to_linear_rgb,
    (Space.XYZ, Space.XYY): cie.xyz_to_xyy,
    (Space.XYZ, Space.LAB): cie.xyz_to_lab,
    (Space.XYZ, Space.LUV): cie.xyz_to_luv,
    (Space.XYY, Space.XYZ): cie.xyy_to_xyz,
    (Space.LAB, Space.LINEAR_RGB): cie.lab_to_linear_rgb,
    (Space.LAB, Space.XYZ): cie.lab_to_xyz,
    (Space.LAB, Space.LCHAB): cie.lab_to_lchab,
    (Space.LUV, Space.XYZ): cie.luv_to_xyz,
    (Space.LUV, Space.LCHUV): cie.luv_to_lchuv,
    (Space.LCHAB, Space.LAB): cie.lchab_to_lab,
    (Space.LCHUV, Space.LUV): cie.lchuv_to_luv,
    (Space.LCHUV, Space.LSHUV): cie.lchuv_to_lshuv,
    (Space.LSHUV, Space.LCHUV): cie.lshuv_to_lchuv,
}

EDGES: Mapping[tuple[Space, Space], Edge] = MappingProxyType(_DIRECT)

REPARAMETERIZERS: Mapping[Space, Edge] = MappingProxyType({
    Space.YUV: video.yuv_to_yuv,
    Space.YCBCR: video.ycbcr_to_ycbcr,
})

_CIE_SPACES = (
    Space.XYZ, Space.XYY, Space.LAB, Space.LUV,
    Space.LCHAB, Space.LCHUV, Space.LSHUV,
)
_RGB_FAMILY = (
    Space.RGB8, Space.RGB, Space.HSL, Space.HSV,
    Space.YUV, Space.YCBCR, Space.YDBDR, Space.YIQ,
)


def _next_hops(
    source: Space,
    default: Space,
    overrides: Mapping[Space, Space] | None = None,
) -> Mapping[Space, Space]:
    """
    Build one row of the next-hop table.

    Every target without a direct edge from ``source`` goes through
    ``default`` unless ``overrides`` names another neighbour.
    """
    overrides = overrides or {}
    return MappingProxyType({
        target: overrides.get(target, default)
        for target in Space
        if target is not source and (source, target) not in _DIRECT
    })


PROXIES: Mapping[Space, Mapping[Space, Space]] = MappingProxyType({
    Space.RGB8: _next_hops(
        Space.RGB8, Space.RGB,
        {space: Space.LINEAR_RGB for space in _CIE_SPACES},
    ),
    Space.RGB: _next_hops(
        Space.RGB, Space.LINEAR_RGB,
        {Space.YCBCR: Space.YUV},
    ),
    Space.LINEAR_RGB: _next_hops(
        Space.LINEAR_RGB, Space.XYZ,
        {
            **{space: Space.RGB for space in _RGB_FAMILY},
            Space.LCHAB: Space.LAB,
        },
    ),
    Space.HSL: _next_hops(Space.HSL, Space.RGB),
    Space.HSV: _next_hops(Space.HSV, Space.RGB),
    Space.YUV: _next_hops(Space.YUV, Space.RGB),
    Space.YCBCR: _next_hops(Space.YCBCR, Space.YUV),
    Space.YDBDR: _next_hops(Space.YDBDR, Space.RGB),
    Space.YIQ: _next_hops(Space.YIQ, Space.RGB),
    Space.XYZ: _next_hops(
        Space.XYZ, Space.LINEAR_RGB,
        {Space.LCHAB: Space.LAB, Space.LCHUV: Space.LUV, Space.LSHUV: Space.LUV},
    ),
    Space.XYY: _next_hops(Space.XYY, Space.XYZ),
    Space.LAB: _next_hops(
        Space.LAB, Space.LINEAR_RGB,
        {space: Space.XYZ for space in (Space.XYY, Space.LUV, Space.LCHUV, Space.LSHUV)},
    ),
    Space.LUV: _next_hops(Space.LUV, Space.XYZ, {Space.LSHUV: Space.LCHUV}),
    Space.LCHAB: _next_hops(Space.LCHAB, Space.LAB),
    Space.LCHUV: _next_hops(Space.LCHUV, Space.LUV),
    Space.LSHUV: _next_hops(Space.LSHUV, Space.LCHUV),
})


def next_hop(source: Space, target: Space) -> Space:
    """
    Neighbour to move to when converting from ``source`` towards ``target``.

    Raises:
        RoutingError: If the tables hold neither a direct edge nor a proxy
    """
    if (source, target) in EDGES:
        return target
    hop = PROXIES.get(source, {}).get(target)
    if hop is None:
        raise RoutingError(f"No route from {source.value} to {target.value}")
    return hop


def _step(source: Space, target: Space) -> tuple[Space, Edge]:
    """Pick the next space and the edge that reaches it."""
    if source is target:
        edge = REPARAMETERIZERS.get(source)
        if edge is None:
            raise RoutingError(f"{source.value} has no variants to convert between")
        return source, edge
    hop = next_hop(source, target)
    edge = EDGES.get((source, hop))
    if edge is None:
        raise RoutingError(
            f"Next hop {hop.value} from {source.value} has no direct edge"
        )
    return hop, edge


def convert(color: Color, target_space: Space | str, target_flags: int = 0) -> None:
    """
    Convert a color in place to the target space and flags.

    Applies one edge per hop until the color's space and flags both match
    the target. A color that already matches is left untouched.

    Args:
        color: Color to convert; its value is replaced on every hop
        target_space: Target space (enum member or name)
        target_flags: Variant flags for the target space

    Raises:
        PayloadMismatchError: If ``color`` is not a Color
        UnknownSpaceError: If ``target_space`` does not name a space
        InvalidFlagsError: If ``target_flags`` is invalid for the target
        RoutingError: If the tables fail to converge
    """
    if not isinstance(color, Color):
        raise PayloadMismatchError(f"Expected a Color, got {type(color).__name__}")
    target = space_from_name(target_space)
    target_flags = check_flags(target, target_flags)

    logger.debug(
        "Converting %s (flags 0x%02x) to %s (flags 0x%02x)",
        color.space.value, color.flags, target.value, target_flags,
    )

    hops = 0
    while color.space is not target or color.flags != target_flags:
        if hops >= MAX_HOPS:
            raise RoutingError(
                f"Conversion to {target.value} did not converge in {MAX_HOPS} hops"
            )

        source = color.space
        hop, edge = _step(source, target)
        result = edge(color.value, target_flags)
        if not isinstance(result, Payload) or result.space is not hop:
            raise RoutingError(
                f"Edge {source.value} -> {hop.value} produced "
                f"{getattr(result, 'space', type(result).__name__)}"
            )

        color.value = result
        hops += 1
        logger.debug(
            "Hop %d: %s -> %s (flags 0x%02x)",
            hops, source.value, hop.value, result.flags,
        )


def convert_value(payload: Payload, target_space: Space | str, target_flags: int = 0) -> Payload:
    """Return ``payload`` converted to the target; the input is left as is."""
    color = Color(payload)
    convert(color, target_space, target_flags)
    return color.value


def route(
    source_space: Space | str,
    source_flags: int,
    target_space: Space | str,
    target_flags: int = 0,
) -> list[tuple[Space, int]]:
    """
    Plan the hops ``convert`` would take, without computing any values.

    Returns:
        (space, flags) after each hop, in order; empty when already there
    """
    space = space_from_name(source_space)
    flags = check_flags(space, source_flags)
    target = space_from_name(target_space)
    target_flags = check_flags(target, target_flags)

    hops: list[tuple[Space, int]] = []
    while space is not target or flags != target_flags:
        if len(hops) >= MAX_HOPS:
            raise RoutingError(
                f"Route to {target.value} did not converge in {MAX_HOPS} hops"
            )
        space, _ = _step(space, target)
        # Edges into a video space take their variant from the target flags
        flags = target_flags & flag_mask(space)
        hops.append((space, flags))
    return hops


def shortest_path_length(source: Space, target: Space) -> int:
    """
    Breadth-first hop count over the direct edges.

    Raises:
        RoutingError: If ``target`` is unreachable from ``source``
    """
    if source is target:
        return 0

    adjacency: dict[Space, list[Space]] = {space: [] for space in Space}
    for src, dst in EDGES:
        adjacency[src].append(dst)

    distance = {source: 0}
    queue = deque([source])
    while queue:
        current = queue.popleft()
        for neighbour in adjacency[current]:
            if neighbour in distance:
                continue
            distance[neighbour] = distance[current] + 1
            if neighbour is target:
                return distance[neighbour]
            queue.append(neighbour)

    raise RoutingError(f"{target.value} is unreachable from {source.value}")


def verify_routing() -> None:
    """
    Audit the edge and next-hop tables.

    Checks that every proxy names a neighbour with a direct edge, that
    every ordered pair of spaces is covered, and that following the tables
    reaches the target along a shortest path without revisiting a space.

    Raises:
        RoutingError: Listing every problem found
    """
    problems: list[str] = []

    for source, row in PROXIES.items():
        for target, hop in row.items():
            if (source, target) in EDGES:
                problems.append(
                    f"{source.value} -> {target.value} has both an edge and a proxy"
                )
            if (source, hop) not in EDGES:
                problems.append(
                    f"Proxy {source.value} -> {target.value} via {hop.value} has no edge"
                )

    for source in Space:
        for target in Space:
            if source is target:
                continue
            if (source, target) not in EDGES and target not in PROXIES.get(source, {}):
                problems.append(f"No edge or proxy for {source.value} -> {target.value}")
                continue

            visited = {source}
            current = source
            length = 0
            while current is not target:
                try:
                    current = next_hop(current, target)
                except RoutingError as exc:
                    problems.append(str(exc))
                    break
                length += 1
                if current in visited:
                    problems.append(
                        f"Route {source.value} -> {target.value} revisits {current.value}"
                    )
                    break
                visited.add(current)
            else:
                expected = shortest_path_length(source, target)
                if length != expected:
                    problems.append(
                        f"Route {source.value} -> {target.value} takes {length} hops, "
                        f"shortest is {expected}"
                    )

    if problems:
        raise RoutingError("Routing table audit failed:\n" + "\n".join(problems))
