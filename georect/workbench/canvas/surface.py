from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional
from ...core.events import Evented
from ...core.latlng import LatLng, Point
from ...core.projection import CoordinateProjector, SphericalMercator
from ...core.shapes import Layer


@dataclass(frozen=True)
class PointerEvent:
    """
    A pointer event as delivered by a map surface.

    Attributes:
        lat_lng: The geographic position of the pointer.
        layer_point: The pointer position in layer pixels (Y-down).
        target: The layer that received the event, if any.
    """

    lat_lng: LatLng
    layer_point: Point
    target: Any = None


class Dragging:
    """The map's own pan-by-drag behaviour, which gestures suspend."""

    def __init__(self):
        self._enabled = True

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self):
        self._enabled = True

    def disable(self):
        self._enabled = False


class MapSurface(Evented, ABC):
    """
    The surface that displays layers and delivers pointer events.

    Fires "pointermove" and "pointerup" with an `event` keyword carrying a
    PointerEvent. Layers fire "pointerdown" themselves.
    """

    def __init__(self, projector: Optional[CoordinateProjector] = None):
        super().__init__()
        self.projector: CoordinateProjector = (
            projector if projector is not None else SphericalMercator()
        )
        self.dragging = Dragging()

    @abstractmethod
    def lat_lng_to_layer_point(self, lat_lng: LatLng) -> Point:
        pass

    @abstractmethod
    def layer_point_to_lat_lng(self, point: Point) -> LatLng:
        pass

    @abstractmethod
    def add_layer(self, layer: Layer):
        pass

    @abstractmethod
    def remove_layer(self, layer: Layer):
        pass

    @abstractmethod
    def has_layer(self, layer: Layer) -> bool:
        pass


class HeadlessMap(MapSurface):
    """
    A map surface without a display. Layer points are the projected
    coordinates scaled by `scale`, with Y pointing down, relative to
    `pixel_origin`.

    Gestures can be driven with `press()`, `move()` and `release()`.
    """

    def __init__(
        self,
        projector: Optional[CoordinateProjector] = None,
        scale: float = 1.0,
        pixel_origin: Point = Point(0.0, 0.0),
    ):
        super().__init__(projector)
        self.scale = scale
        self.pixel_origin = pixel_origin
        self.layers: List[Layer] = []

    def lat_lng_to_layer_point(self, lat_lng: LatLng) -> Point:
        p = self.projector.project(lat_lng)
        return Point(
            p.x * self.scale - self.pixel_origin.x,
            -p.y * self.scale - self.pixel_origin.y,
        )

    def layer_point_to_lat_lng(self, point: Point) -> LatLng:
        return self.projector.unproject(
            Point(
                (point.x + self.pixel_origin.x) / self.scale,
                -(point.y + self.pixel_origin.y) / self.scale,
            )
        )

    def add_layer(self, layer: Layer):
        if layer in self.layers:
            return
        self.layers.append(layer)
        self.fire("layeradd", layer=layer)

    def remove_layer(self, layer: Layer):
        if layer not in self.layers:
            return
        self.layers.remove(layer)
        self.fire("layerremove", layer=layer)

    def has_layer(self, layer: Layer) -> bool:
        return layer in self.layers

    def pointer_event(
        self, lat_lng: LatLng, target: Any = None
    ) -> PointerEvent:
        lat_lng = LatLng(*lat_lng)
        return PointerEvent(
            lat_lng, self.lat_lng_to_layer_point(lat_lng), target
        )

    def press(self, target: Layer, lat_lng: LatLng) -> PointerEvent:
        event = self.pointer_event(lat_lng, target)
        target.fire("pointerdown", event=event)
        return event

    def move(self, lat_lng: LatLng) -> PointerEvent:
        event = self.pointer_event(lat_lng)
        self.fire("pointermove", event=event)
        return event

    def release(self, lat_lng: LatLng) -> PointerEvent:
        event = self.pointer_event(lat_lng)
        self.fire("pointerup", event=event)
        return event
