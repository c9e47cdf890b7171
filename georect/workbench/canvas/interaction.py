from __future__ import annotations
import math
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional
from ...config import TransformOptions
from ...core.geo.grid import GridCharacteristics, create_grid_feature
from ...core.geo.transform import GeometryTransformApplier
from ...core.latlng import LatLng, Point
from ...core.shapes import Polygon, Rectangle
from .overlays import ControlOverlay, ControlOverlayBuilder, Handle
from .region import HandleRegion, resize_bounds
from .surface import MapSurface, PointerEvent

logger = logging.getLogger(__name__)


class GestureKind(Enum):
    IDLE = auto()
    TRANSLATING = auto()
    ROTATING = auto()
    SCALING = auto()


# Prefix of the lifecycle events fired on the rectangle for each gesture.
_EVENT_PREFIXES = {
    GestureKind.TRANSLATING: "translate",
    GestureKind.ROTATING: "rotate",
    GestureKind.SCALING: "scale",
}


@dataclass
class GestureState:
    """The transient state of one pointer-down to pointer-up gesture."""

    kind: GestureKind = GestureKind.IDLE
    region: Optional[HandleRegion] = None
    last_lat_lng: Optional[LatLng] = None
    previous_point: Optional[Point] = None

    @property
    def active(self) -> bool:
        return self.kind != GestureKind.IDLE


class RectangleTransformHandler:
    """
    Lets the user translate, rotate and resize a rectangle on a map by
    dragging it or its control handles.

    The handler owns three pieces of state: the rectangle's ring (stored
    on the rectangle itself), the cumulative rotation `angle` in radians
    (counter-clockwise on the map) and the `anchor`, the corner that is
    the south-west one while the rectangle is un-rotated and the pivot of
    every rotation. The control overlay is rebuilt from these after every
    gesture step.

    Lifecycle events fired on the rectangle, each with `layer` set to the
    rectangle:

    - translatestart, translate (anchor=...), translateend
    - rotatestart, rotate, rotateend (all with rotation=...)
    - scalestart, scale (anchor=...), scaleend
    """

    def __init__(
        self,
        rectangle: Rectangle,
        map_surface: MapSurface,
        options: Optional[TransformOptions] = None,
        applier: Optional[GeometryTransformApplier] = None,
    ):
        self.rectangle = rectangle
        self.map = map_surface
        self.options = options or TransformOptions()
        self.applier = applier or GeometryTransformApplier(
            map_surface.projector
        )
        self.builder = ControlOverlayBuilder(self.applier, self.options)
        self.overlay: Optional[ControlOverlay] = None
        self.state = GestureState()
        self.grid = self._grid_from_options(self.options)

        self._enabled = False
        self._anchor: Optional[LatLng] = None
        self._angle: float = 0.0

    @staticmethod
    def _grid_from_options(options: TransformOptions) -> GridCharacteristics:
        return GridCharacteristics(
            options.ni, options.nj, options.dphi, options.dlambda
        )

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self, options: Optional[TransformOptions] = None):
        if options is not None:
            self.set_options(options)
        if self._enabled:
            return
        self._enabled = True
        self._add_hooks()

    def disable(self):
        if not self._enabled:
            return
        self._enabled = False
        self._remove_hooks()

    def set_options(self, options: TransformOptions):
        """
        Replaces the options, re-enabling the handler around the change
        if it is enabled.
        """
        enabled = self._enabled
        if enabled:
            self.disable()

        self.options = options
        self.builder = ControlOverlayBuilder(self.applier, options)
        grid = self._grid_from_options(options)
        if grid.is_complete():
            self.grid = grid
        logger.debug(f"Transform options replaced: {options.to_dict()}")

        if enabled:
            self.enable()
        return self

    @property
    def anchor(self) -> Optional[LatLng]:
        return self._anchor

    def set_anchor(self, lat_lng: LatLng):
        self._anchor = LatLng(*lat_lng)
        self._refresh_overlay()

    @property
    def angle(self) -> float:
        return self._angle

    def set_angle(self, angle: float):
        """
        Sets the recorded rotation. The rectangle itself is not rotated;
        use this to declare the rotation of an already rotated ring.
        """
        self._angle = angle
        self._refresh_overlay()

    def set_grid_characteristics(
        self, ni: int, nj: int, dphi: float, dlambda: float
    ):
        self.grid = GridCharacteristics(ni, nj, dphi, dlambda)
        self._refresh_overlay()

    def create_grid_feature(self) -> Optional[Polygon]:
        """
        Returns the geodesic footprint of the configured grid, pinned at the
        anchor and rotated with the rectangle, or None if the grid is
        incomplete or the handler has no anchor yet.
        """
        if self._anchor is None:
            return None
        feature = create_grid_feature(self._anchor, self.grid)
        if feature is not None and self._angle != 0:
            self.applier.rotate(feature, self._angle, self._anchor)
        return feature

    def _add_hooks(self):
        if self._anchor is None:
            self._anchor = self.rectangle.get_bounds().south_west

        if self._angle == 0 and self.options.angle:
            self._angle = self.options.angle
            self.applier.rotate(self.rectangle, self._angle, self._anchor)

        self._update_overlay()
        self.rectangle.on("pointerdown", self._on_translate_start)
        logger.debug(
            f"Transform enabled, anchor={self._anchor}, angle={self._angle}"
        )

    def _remove_hooks(self):
        if self.state.active:
            self._finish_gesture()
        self._hide_overlay()
        self.rectangle.off("pointerdown", self._on_translate_start)
        logger.debug("Transform disabled")

    def _refresh_overlay(self):
        if self._enabled:
            self._update_overlay()

    def _update_overlay(self):
        self._hide_overlay()
        assert self._anchor is not None
        overlay = self.builder.build(
            self.rectangle, self._angle, self._anchor, self.grid
        )
        for handle in overlay.scale_handles():
            handle.on("pointerdown", self._on_scale_start)
        overlay.rotate_handle.on("pointerdown", self._on_rotate_start)
        self.map.add_layer(overlay)
        self.overlay = overlay

    def _hide_overlay(self):
        if self.overlay is None:
            return
        for handle in self.overlay.handles.values():
            handle.off("pointerdown", self._on_scale_start)
            handle.off("pointerdown", self._on_rotate_start)
        self.map.remove_layer(self.overlay)
        self.overlay = None

    def _fire(self, suffix: str, kind: GestureKind, **data: Any):
        name = _EVENT_PREFIXES[kind] + suffix
        self.rectangle.fire(name, layer=self.rectangle, **data)

    def _event_data(self, kind: GestureKind) -> dict:
        if kind == GestureKind.ROTATING:
            return {"rotation": self._angle}
        return {"anchor": self._anchor}

    def _begin_gesture(
        self,
        kind: GestureKind,
        event: PointerEvent,
        region: Optional[HandleRegion] = None,
    ):
        if self.state.active:
            # The pointer-up of the previous gesture never arrived.
            logger.warning(
                f"Gesture {self.state.kind.name} still active when "
                f"{kind.name} started; finishing it"
            )
            self._finish_gesture()

        self.map.dragging.disable()
        self.state = GestureState(
            kind=kind,
            region=region,
            last_lat_lng=event.lat_lng,
            previous_point=event.layer_point,
        )
        self.map.on("pointermove", self._on_pointer_move)
        self.map.on("pointerup", self._on_pointer_up)
        logger.debug(f"Gesture {kind.name} started at {event.lat_lng}")
        self._fire("start", kind, **self._event_data(kind))

    def _finish_gesture(self):
        kind = self.state.kind
        self.map.off("pointermove", self._on_pointer_move)
        self.map.off("pointerup", self._on_pointer_up)
        self.state = GestureState()
        self.map.dragging.enable()
        logger.debug(f"Gesture {kind.name} finished")
        self._fire("end", kind, **self._event_data(kind))

    def _on_translate_start(self, sender, event: PointerEvent, **kwargs):
        self._begin_gesture(GestureKind.TRANSLATING, event)

    def _on_rotate_start(self, sender: Handle, event: PointerEvent, **kwargs):
        self._begin_gesture(GestureKind.ROTATING, event, sender.region)

    def _on_scale_start(self, sender: Handle, event: PointerEvent, **kwargs):
        self._begin_gesture(GestureKind.SCALING, event, sender.region)

    def _on_pointer_move(self, sender, event: PointerEvent, **kwargs):
        kind = self.state.kind
        if kind == GestureKind.TRANSLATING:
            self._translate(event)
        elif kind == GestureKind.ROTATING:
            self._rotate(event)
        elif kind == GestureKind.SCALING:
            self._scale(event)

    def _on_pointer_up(self, sender, **kwargs):
        if self.state.active:
            self._finish_gesture()

    def _translate(self, event: PointerEvent):
        coordinate = event.lat_lng
        last = self.state.last_lat_lng
        assert self._anchor is not None
        if last is not None:
            project = self.applier.projector.project
            delta = project(coordinate).subtract(project(last))

            self.applier.translate(self.rectangle, delta)
            self._anchor = self.applier.translate_point(self._anchor, delta)

            self._update_overlay()
            self.state.last_lat_lng = coordinate
        self._fire("", GestureKind.TRANSLATING, anchor=self._anchor)

    def _rotate(self, event: PointerEvent):
        pos = event.layer_point
        previous = self.state.previous_point
        assert self._anchor is not None
        self.map.dragging.disable()

        origin = self.map.lat_lng_to_layer_point(self._anchor)
        if previous is not None:
            # Layer points are Y-down, so a positive delta is clockwise.
            angle = math.atan2(
                pos.y - origin.y, pos.x - origin.x
            ) - math.atan2(previous.y - origin.y, previous.x - origin.x)
            self._angle -= angle
            self.state.previous_point = pos
            self.applier.rotate(self.rectangle, -angle, self._anchor)
            self._update_overlay()
        self._fire("", GestureKind.ROTATING, rotation=self._angle)

    def _scale(self, event: PointerEvent):
        region = self.state.region
        assert region is not None and self._anchor is not None
        coordinate = event.lat_lng
        angle, anchor = self._angle, self._anchor

        # Resize in the rectangle's own un-rotated frame
        if angle != 0:
            self.applier.rotate(self.rectangle, -angle, anchor)
            coordinate = self.applier.rotate_point(coordinate, -angle, anchor)

        bounds = resize_bounds(region, self.rectangle.get_bounds(), coordinate)
        self.rectangle.set_bounds(bounds)
        south_west = bounds.south_west

        # Rotate back about the old anchor to avoid crabbing
        if angle != 0:
            matrix = self.applier.rotation_matrix(angle, anchor)
            self.applier.apply(self.rectangle, matrix)
            south_west = self.applier.apply_to_point(south_west, matrix)

        self._anchor = south_west
        self._update_overlay()
        self._fire("", GestureKind.SCALING, anchor=self._anchor)
