from __future__ import annotations
from enum import Enum
from typing import Set
from ...core.latlng import LatLng, LatLngBounds


class HandleRegion(Enum):
    """Identifies each control handle of the overlay."""

    NORTH = "n"
    SOUTH = "s"
    EAST = "e"
    WEST = "w"
    NORTH_EAST = "ne"
    NORTH_WEST = "nw"
    SOUTH_EAST = "se"
    SOUTH_WEST = "sw"
    ROTATE = "rotate"


class HandleCategory(Enum):
    """Selects the visual style of a handle."""

    SCALE = "scale"
    SCALE_ORIGIN = "origin"
    ROTATE = "rotate"


SCALE_HANDLES: Set[HandleRegion] = {
    HandleRegion.NORTH,
    HandleRegion.SOUTH,
    HandleRegion.EAST,
    HandleRegion.WEST,
    HandleRegion.NORTH_EAST,
    HandleRegion.NORTH_WEST,
    HandleRegion.SOUTH_EAST,
    HandleRegion.SOUTH_WEST,
}

NORTH_HANDLES: Set[HandleRegion] = {
    HandleRegion.NORTH,
    HandleRegion.NORTH_EAST,
    HandleRegion.NORTH_WEST,
}

SOUTH_HANDLES: Set[HandleRegion] = {
    HandleRegion.SOUTH,
    HandleRegion.SOUTH_EAST,
    HandleRegion.SOUTH_WEST,
}

EAST_HANDLES: Set[HandleRegion] = {
    HandleRegion.EAST,
    HandleRegion.NORTH_EAST,
    HandleRegion.SOUTH_EAST,
}

WEST_HANDLES: Set[HandleRegion] = {
    HandleRegion.WEST,
    HandleRegion.NORTH_WEST,
    HandleRegion.SOUTH_WEST,
}

CORNER_HANDLES: Set[HandleRegion] = (NORTH_HANDLES | SOUTH_HANDLES) & (
    EAST_HANDLES | WEST_HANDLES
)

EDGE_HANDLES: Set[HandleRegion] = SCALE_HANDLES - CORNER_HANDLES


def resize_bounds(
    region: HandleRegion, bounds: LatLngBounds, coordinate: LatLng
) -> LatLngBounds:
    """
    Moves the bound(s) controlled by a scale handle to `coordinate`.

    Each moved bound is clamped against the opposite, fixed bound, so the
    result can collapse to zero width or height but never invert. Both
    `bounds` and `coordinate` must be in the rectangle's un-rotated frame.

    Returns:
        New bounds; the input is not modified.
    """
    south, west = bounds.south, bounds.west
    north, east = bounds.north, bounds.east

    if region in SOUTH_HANDLES:
        south = min(coordinate.lat, bounds.north)  # don't cross N
    elif region in NORTH_HANDLES:
        north = max(coordinate.lat, bounds.south)  # don't cross S
    if region in EAST_HANDLES:
        east = max(coordinate.lng, bounds.west)  # don't cross W
    elif region in WEST_HANDLES:
        west = min(coordinate.lng, bounds.east)  # don't cross E

    return LatLngBounds(LatLng(south, west), LatLng(north, east))
