from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Iterator, List, Optional
from .events import Evented
from .latlng import LatLng, LatLngBounds, clone_lat_lngs


class PointTarget(ABC):
    """A geometry defined by a single coordinate."""

    @abstractmethod
    def get_lat_lng(self) -> LatLng:
        pass

    @abstractmethod
    def set_lat_lng(self, lat_lng: LatLng):
        pass


class RingTarget(ABC):
    """
    A geometry defined by a list of coordinates, which may nest one level
    deeper for polygons with holes.
    """

    @abstractmethod
    def get_lat_lngs(self) -> list:
        pass

    @abstractmethod
    def set_lat_lngs(self, lat_lngs: Iterable):
        pass


class Layer(Evented):
    """Base for anything a map surface can display."""

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.options: Dict[str, Any] = dict(options or {})

    def redraw(self):
        self.fire("redraw")


class Marker(Layer, PointTarget):
    def __init__(
        self, lat_lng: LatLng, options: Optional[Dict[str, Any]] = None
    ):
        super().__init__(options)
        self._lat_lng = LatLng(*lat_lng)

    def get_lat_lng(self) -> LatLng:
        return self._lat_lng

    def set_lat_lng(self, lat_lng: LatLng):
        self._lat_lng = LatLng(*lat_lng)
        self.redraw()


class Polyline(Layer, RingTarget):
    def __init__(
        self, lat_lngs: Iterable, options: Optional[Dict[str, Any]] = None
    ):
        super().__init__(options)
        self._lat_lngs: list = clone_lat_lngs(lat_lngs)

    def get_lat_lngs(self) -> list:
        return self._lat_lngs

    def set_lat_lngs(self, lat_lngs: Iterable):
        self._lat_lngs = clone_lat_lngs(lat_lngs)
        self.redraw()

    def get_bounds(self) -> LatLngBounds:
        return LatLngBounds.from_lat_lngs(self._lat_lngs)


class Polygon(Polyline):
    """A closed ring, or a list of rings where the first is the shell."""


class Rectangle(Polygon):
    """
    An axis-aligned rectangle that may be rotated afterwards. The ring is
    stored closed, as [sw, se, ne, nw, sw].
    """

    def __init__(
        self,
        bounds: LatLngBounds,
        options: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(self._bounds_to_ring(bounds), options)

    @staticmethod
    def _bounds_to_ring(bounds: LatLngBounds) -> List[LatLng]:
        sw, ne = bounds.south_west, bounds.north_east
        se, nw = bounds.south_east, bounds.north_west
        return [sw, se, ne, nw, sw]

    def set_bounds(self, bounds: LatLngBounds):
        self.set_lat_lngs(self._bounds_to_ring(bounds))


class LayerGroup(Layer):
    """A collection of layers transformed and displayed as one."""

    def __init__(self, layers: Iterable[Layer] = ()):
        super().__init__()
        self.layers: List[Layer] = list(layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(self.layers)

    def __len__(self) -> int:
        return len(self.layers)

    def add_layer(self, layer: Layer):
        if layer not in self.layers:
            self.layers.append(layer)

    def remove_layer(self, layer: Layer):
        if layer in self.layers:
            self.layers.remove(layer)
