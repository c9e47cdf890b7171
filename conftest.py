import pytest
from georect.core.latlng import LatLng, LatLngBounds
from georect.core.projection import LonLat, SphericalMercator
from georect.core.shapes import Rectangle
from georect.workbench.canvas.interaction import RectangleTransformHandler
from georect.workbench.canvas.surface import HeadlessMap


@pytest.fixture
def flat_map():
    """A map whose projected space is plain lng/lat."""
    return HeadlessMap(LonLat())


@pytest.fixture
def mercator_map():
    return HeadlessMap(SphericalMercator(), scale=0.01)


@pytest.fixture
def rectangle():
    return Rectangle(LatLngBounds(LatLng(0, 0), LatLng(1, 1)))


@pytest.fixture
def handler(rectangle, flat_map):
    h = RectangleTransformHandler(rectangle, flat_map)
    h.enable()
    return h
