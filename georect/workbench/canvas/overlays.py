from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Dict, Iterator, Optional
from ...config import HandleStyle, LineStyle, TransformOptions
from ...core.geo.grid import GridCharacteristics, create_grid_feature
from ...core.geo.transform import GeometryTransformApplier
from ...core.latlng import LatLng, Point, clone_lat_lngs
from ...core.shapes import LayerGroup, Marker, Polygon, Polyline, Rectangle
from .region import SCALE_HANDLES, HandleCategory, HandleRegion

if TYPE_CHECKING:
    from .surface import MapSurface

logger = logging.getLogger(__name__)


class Handle(Marker):
    """
    A control marker that starts a scale or rotate gesture when pressed.
    Subclasses decide how it looks.
    """

    def __init__(
        self,
        lat_lng: LatLng,
        region: HandleRegion,
        category: HandleCategory,
        style: HandleStyle,
        cursor: Optional[str] = None,
        class_name: Optional[str] = None,
    ):
        super().__init__(lat_lng, style.to_dict())
        self.region = region
        self.category = category
        self.style = style
        self.cursor = cursor
        self.class_name = class_name

    @property
    def id(self) -> str:
        return self.region.value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r}, {self.get_lat_lng()})"


class CircleHandle(Handle):
    """A round handle of `style.radius` pixels."""

    @property
    def radius(self) -> float:
        return self.style.radius

    def hit_test(self, map_surface: MapSurface, layer_point: Point) -> bool:
        """Checks whether a layer point falls inside the circle."""
        center = map_surface.lat_lng_to_layer_point(self.get_lat_lng())
        return center.distance_to(layer_point) <= self.radius


class GuideLine(Polyline):
    """The dashed line joining the rotate handle to the origin handle."""

    def __init__(self, start: LatLng, end: LatLng, style: LineStyle):
        super().__init__([start, end], style.to_dict())
        self.style = style


class ControlOverlay(LayerGroup):
    """
    The handles and guide line shown around a transformable rectangle.
    Derived entirely from the rectangle, angle and anchor; never edited
    on its own.
    """

    def __init__(
        self,
        handles: Dict[HandleRegion, Handle],
        guide_line: GuideLine,
        grid_feature: Optional[Polygon] = None,
    ):
        layers = [guide_line]
        layers.extend(handles.values())
        if grid_feature is not None:
            layers.append(grid_feature)
        super().__init__(layers)
        self.handles = handles
        self.guide_line = guide_line
        self.grid_feature = grid_feature

    def handle(self, region: HandleRegion) -> Handle:
        return self.handles[region]

    @property
    def rotate_handle(self) -> Handle:
        return self.handles[HandleRegion.ROTATE]

    @property
    def origin_handle(self) -> Handle:
        return self.handles[HandleRegion.SOUTH_WEST]

    def scale_handles(self) -> Iterator[Handle]:
        for region, handle in self.handles.items():
            if region in SCALE_HANDLES:
                yield handle


class ControlOverlayBuilder:
    """
    Lays out the control overlay for a possibly rotated rectangle.

    Handles are positioned on the rectangle's un-rotated extent and the
    finished group is then rotated rigidly into place, which keeps them
    on the rectangle's own axes however much rotation has accumulated.
    """

    def __init__(
        self, applier: GeometryTransformApplier, options: TransformOptions
    ):
        self.applier = applier
        self.options = options

    def build(
        self,
        rectangle: Rectangle,
        angle: float,
        anchor: LatLng,
        grid: Optional[GridCharacteristics] = None,
    ) -> ControlOverlay:
        # Rotate a copy of the geometry back to axis-aligned
        copy_rect = Polygon(clone_lat_lngs(rectangle.get_lat_lngs()))
        if angle != 0:
            self.applier.rotate(copy_rect, -angle, anchor)
        extent = copy_rect.get_bounds()

        tl, tr = extent.north_west, extent.north_east
        bl, br = extent.south_west, extent.south_east
        center = extent.center
        rotate_pos = LatLng(bl.lat, bl.lng - (center.lng - bl.lng))

        positions = {
            HandleRegion.NORTH_WEST: tl,
            HandleRegion.NORTH_EAST: tr,
            HandleRegion.SOUTH_WEST: bl,
            HandleRegion.SOUTH_EAST: br,
            HandleRegion.WEST: LatLng(center.lat, bl.lng),
            HandleRegion.NORTH: LatLng(tl.lat, center.lng),
            HandleRegion.EAST: LatLng(center.lat, br.lng),
            HandleRegion.SOUTH: LatLng(bl.lat, center.lng),
            HandleRegion.ROTATE: rotate_pos,
        }
        handles = {
            region: self.create_handle(lat_lng, region)
            for region, lat_lng in positions.items()
        }
        guide_line = GuideLine(rotate_pos, bl, self.options.rotate_line)

        grid_feature = None
        if self.options.show_grid_feature and grid is not None:
            grid_feature = create_grid_feature(bl, grid)

        overlay = ControlOverlay(handles, guide_line, grid_feature)

        # Rotate the whole group rigidly onto the real rectangle
        if angle != 0:
            self.applier.rotate(overlay, angle, anchor)

        logger.debug(f"Built control overlay on extent {extent}")
        return overlay

    def category_for(self, region: HandleRegion) -> HandleCategory:
        if region == HandleRegion.ROTATE:
            return HandleCategory.ROTATE
        if region == HandleRegion.SOUTH_WEST:
            return HandleCategory.SCALE_ORIGIN
        return HandleCategory.SCALE

    def style_for(self, category: HandleCategory) -> HandleStyle:
        if category == HandleCategory.ROTATE:
            return self.options.rotate_handle
        if category == HandleCategory.SCALE_ORIGIN:
            return self.options.scale_origin_handle
        return self.options.scale_handle

    def create_handle(self, lat_lng: LatLng, region: HandleRegion) -> Handle:
        category = self.category_for(region)
        style = self.style_for(category)
        cursor_name = self.options.cursors_by_type.get(region.value)
        class_name = None
        if cursor_name:
            class_name = f"{cursor_name}{self.options.cursor_class_suffix}"
        return self.options.handle_factory(
            lat_lng,
            region=region,
            category=category,
            style=style,
            cursor=cursor_name if style.set_cursor else None,
            class_name=class_name,
        )
