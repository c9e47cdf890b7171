"""
Interactive translate, rotate and resize of rectangles on a projected map.
"""

from .config import HandleStyle, LineStyle, TransformOptions
from .core.latlng import LatLng, LatLngBounds, Point
from .core.matrix import AffineMatrix, DegenerateMatrixError
from .core.shapes import Rectangle
from .workbench.canvas.interaction import RectangleTransformHandler
from .workbench.canvas.surface import HeadlessMap, MapSurface, PointerEvent

__all__ = [
    "AffineMatrix",
    "DegenerateMatrixError",
    "HandleStyle",
    "HeadlessMap",
    "LatLng",
    "LatLngBounds",
    "LineStyle",
    "MapSurface",
    "Point",
    "PointerEvent",
    "Rectangle",
    "RectangleTransformHandler",
    "TransformOptions",
]
