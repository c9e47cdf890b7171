import pytest
from georect.core.latlng import LatLng, LatLngBounds
from georect.workbench.canvas.region import (
    CORNER_HANDLES,
    EDGE_HANDLES,
    SCALE_HANDLES,
    HandleRegion,
    resize_bounds,
)


@pytest.fixture
def bounds():
    return LatLngBounds(LatLng(0, 0), LatLng(1, 1))


def test_handle_groups():
    assert {r.value for r in CORNER_HANDLES} == {"ne", "nw", "se", "sw"}
    assert {r.value for r in EDGE_HANDLES} == {"n", "s", "e", "w"}
    assert HandleRegion.ROTATE not in SCALE_HANDLES
    assert len(SCALE_HANDLES) == 8


@pytest.mark.parametrize(
    "region, coordinate, expected",
    [
        # Edges move a single bound
        (HandleRegion.NORTH, LatLng(2, 5), ((0, 0), (2, 1))),
        (HandleRegion.SOUTH, LatLng(-1, 5), ((-1, 0), (1, 1))),
        (HandleRegion.EAST, LatLng(5, 3), ((0, 0), (1, 3))),
        (HandleRegion.WEST, LatLng(5, -2), ((0, -2), (1, 1))),
        # Corners move two
        (HandleRegion.NORTH_EAST, LatLng(2, 3), ((0, 0), (2, 3))),
        (HandleRegion.NORTH_WEST, LatLng(2, -1), ((0, -1), (2, 1))),
        (HandleRegion.SOUTH_EAST, LatLng(-0.5, 1.5), ((-0.5, 0), (1, 1.5))),
        (HandleRegion.SOUTH_WEST, LatLng(-1, -1), ((-1, -1), (1, 1))),
    ],
)
def test_resize_moves_controlled_bounds(bounds, region, coordinate, expected):
    result = resize_bounds(region, bounds, coordinate)
    sw, ne = expected
    assert result.south_west == LatLng(*sw)
    assert result.north_east == LatLng(*ne)


@pytest.mark.parametrize(
    "region, coordinate, expected",
    [
        (HandleRegion.NORTH, LatLng(-5, 0), ((0, 0), (0, 1))),
        (HandleRegion.SOUTH, LatLng(5, 0), ((1, 0), (1, 1))),
        (HandleRegion.EAST, LatLng(0, -5), ((0, 0), (1, 0))),
        (HandleRegion.WEST, LatLng(0, 5), ((0, 1), (1, 1))),
        (HandleRegion.NORTH_EAST, LatLng(-5, -5), ((0, 0), (0, 0))),
        (HandleRegion.SOUTH_WEST, LatLng(5, 5), ((1, 1), (1, 1))),
    ],
)
def test_resize_never_inverts(bounds, region, coordinate, expected):
    result = resize_bounds(region, bounds, coordinate)
    sw, ne = expected
    assert result.south_west == LatLng(*sw)
    assert result.north_east == LatLng(*ne)


def test_rotate_region_leaves_bounds(bounds):
    result = resize_bounds(HandleRegion.ROTATE, bounds, LatLng(9, 9))
    assert result == bounds


def test_resize_does_not_modify_input(bounds):
    resize_bounds(HandleRegion.NORTH_EAST, bounds, LatLng(3, 3))
    assert bounds == LatLngBounds(LatLng(0, 0), LatLng(1, 1))
