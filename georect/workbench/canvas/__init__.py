from .interaction import GestureKind, GestureState, RectangleTransformHandler
from .overlays import (
    CircleHandle,
    ControlOverlay,
    ControlOverlayBuilder,
    GuideLine,
    Handle,
)
from .region import HandleCategory, HandleRegion, resize_bounds
from .surface import Dragging, HeadlessMap, MapSurface, PointerEvent

__all__ = [
    "CircleHandle",
    "ControlOverlay",
    "ControlOverlayBuilder",
    "Dragging",
    "GestureKind",
    "GestureState",
    "GuideLine",
    "Handle",
    "HandleCategory",
    "HandleRegion",
    "HeadlessMap",
    "MapSurface",
    "PointerEvent",
    "RectangleTransformHandler",
    "resize_bounds",
]
