from __future__ import annotations
import math
from typing import Any, Iterable, List, NamedTuple, Optional, Union


class Point(NamedTuple):
    """A point in a flat, Euclidean (projected or pixel) space."""

    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def subtract(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)


class LatLng(NamedTuple):
    """A geographic coordinate in degrees."""

    lat: float
    lng: float

    def clone(self) -> LatLng:
        return LatLng(self.lat, self.lng)


# A coordinate list as stored by polylines and polygons. Polygons with
# holes nest one level deeper.
Ring = List[Union[LatLng, "Ring"]]


def is_coordinate(item: Any) -> bool:
    """True for a LatLng or a plain (lat, lng) pair of numbers."""
    if isinstance(item, LatLng):
        return True
    return (
        isinstance(item, (tuple, list))
        and len(item) == 2
        and all(isinstance(v, (int, float)) for v in item)
    )


def clone_lat_lngs(lat_lngs: Iterable) -> list:
    """
    Deep-clones a (possibly nested) list of coordinates. The result shares
    no list objects with the source; plain pairs become LatLngs.
    """
    cloned = []
    for item in lat_lngs:
        if is_coordinate(item):
            cloned.append(LatLng(*item))
        else:
            cloned.append(clone_lat_lngs(item))
    return cloned


def flatten_lat_lngs(lat_lngs: Iterable) -> List[LatLng]:
    flat: List[LatLng] = []
    for item in lat_lngs:
        if is_coordinate(item):
            flat.append(LatLng(*item))
        else:
            flat.extend(flatten_lat_lngs(item))
    return flat


class LatLngBounds:
    """
    An axis-aligned geographic extent, defined by its south-west and
    north-east corners.
    """

    def __init__(self, south_west: LatLng, north_east: LatLng):
        self.south_west = LatLng(
            min(south_west.lat, north_east.lat),
            min(south_west.lng, north_east.lng),
        )
        self.north_east = LatLng(
            max(south_west.lat, north_east.lat),
            max(south_west.lng, north_east.lng),
        )

    @classmethod
    def from_lat_lngs(cls, lat_lngs: Iterable) -> LatLngBounds:
        """
        Computes the bounds of a (possibly nested) coordinate list.

        Raises:
            ValueError: If the list holds no coordinates.
        """
        bounds: Optional[LatLngBounds] = None
        for lat_lng in flatten_lat_lngs(lat_lngs):
            if bounds is None:
                bounds = cls(lat_lng, lat_lng)
            else:
                bounds.extend(lat_lng)
        if bounds is None:
            raise ValueError("Cannot compute bounds of an empty ring.")
        return bounds

    def __eq__(self, other) -> bool:
        if not isinstance(other, LatLngBounds):
            return False
        return (
            self.south_west == other.south_west
            and self.north_east == other.north_east
        )

    def __repr__(self) -> str:
        return f"LatLngBounds({self.south_west}, {self.north_east})"

    def extend(self, lat_lng: LatLng) -> LatLngBounds:
        self.south_west = LatLng(
            min(self.south_west.lat, lat_lng.lat),
            min(self.south_west.lng, lat_lng.lng),
        )
        self.north_east = LatLng(
            max(self.north_east.lat, lat_lng.lat),
            max(self.north_east.lng, lat_lng.lng),
        )
        return self

    def contains(self, lat_lng: LatLng) -> bool:
        return (
            self.south <= lat_lng.lat <= self.north
            and self.west <= lat_lng.lng <= self.east
        )

    @property
    def north(self) -> float:
        return self.north_east.lat

    @property
    def south(self) -> float:
        return self.south_west.lat

    @property
    def east(self) -> float:
        return self.north_east.lng

    @property
    def west(self) -> float:
        return self.south_west.lng

    @property
    def north_west(self) -> LatLng:
        return LatLng(self.north, self.west)

    @property
    def south_east(self) -> LatLng:
        return LatLng(self.south, self.east)

    @property
    def center(self) -> LatLng:
        return LatLng(
            (self.south + self.north) / 2.0, (self.west + self.east) / 2.0
        )
