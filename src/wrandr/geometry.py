"""World/map coordinate mapping and edge snapping for dragged outputs.

World coordinates are the compositor's pixels. Map coordinates are the
coarser grid the canvas draws on: one map unit is ``density`` world pixels.
The mapping is lossy, ``map_to_world(world_to_map(v)) == v`` only holds when
``v`` is a multiple of the density.
"""

from __future__ import annotations

from typing import Callable, Sequence

from .models import Output

# World pixels per map unit
DEFAULT_DENSITY = 7
LEGACY_DENSITY = 10
# Snap distance in map units
SNAP_TOLERANCE = 10

# (axis start, axis size) of an output in world pixels
Extent = Callable[[Output], tuple[int, int]]


def world_to_map(value: int, density: int = DEFAULT_DENSITY) -> int:
    """Integer division by *density*, truncating toward zero."""
    return int(value / density)


def map_to_world(value: float, density: int = DEFAULT_DENSITY) -> int:
    return round(value * density)


def layout_origin(
    outputs: Sequence[Output], margin: int, density: int = DEFAULT_DENSITY,
) -> tuple[int, int]:
    """Canvas position of the map origin keeping every output inside *margin*."""
    if not outputs:
        return margin, margin
    min_x = min(world_to_map(o.rect.x, density) for o in outputs)
    min_y = min(world_to_map(o.rect.y, density) for o in outputs)
    return margin - min(0, min_x), margin - min(0, min_y)


def extent_x(output: Output) -> tuple[int, int]:
    width, _ = output.apparent_size()
    return output.rect.x, int(width)


def extent_y(output: Output) -> tuple[int, int]:
    _, height = output.apparent_size()
    return output.rect.y, int(height)


def anchor_points(
    outputs: Sequence[Output], current: Output, extent: Extent,
) -> list[int]:
    """World positions *current* may snap to along one axis.

    For each other output: its start and end edge, and both edges shifted
    back by the size of *current* so its trailing edge can line up too.
    """
    _, size = extent(current)
    anchors: list[int] = []
    for other in outputs:
        if other.name == current.name:
            continue
        start, length = extent(other)
        end = start + length
        anchors += [start, end, start - size, end - size]
    return anchors


def find_anchor(
    pos: int,
    outputs: Sequence[Output],
    current: Output,
    extent: Extent,
    *,
    density: int = DEFAULT_DENSITY,
    tolerance: int = SNAP_TOLERANCE,
) -> int | None:
    """Return the world value of the anchor closest to map position *pos*.

    Only anchors strictly closer than *tolerance* map units qualify. Ties
    go to the earliest anchor. Returns None when nothing qualifies.
    """
    close = [
        a for a in anchor_points(outputs, current, extent)
        if abs(world_to_map(a, density) - pos) < tolerance
    ]
    if not close:
        return None
    # min() keeps the first of equally distant anchors
    return min(close, key=lambda a: abs(world_to_map(a, density) - pos))


def move_with_sticky_points(
    pos: int,
    outputs: Sequence[Output],
    current: Output,
    extent: Extent,
    *,
    density: int = DEFAULT_DENSITY,
    tolerance: int = SNAP_TOLERANCE,
) -> int:
    """Snap map position *pos* to a neighbouring edge, or return it unchanged."""
    anchor = find_anchor(
        pos, outputs, current, extent, density=density, tolerance=tolerance,
    )
    if anchor is None:
        return pos
    return world_to_map(anchor, density)
