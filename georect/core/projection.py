"""
Projections between geographic coordinates and a flat space in which
affine math is valid.
"""
import math
from typing import Protocol, runtime_checkable
from .latlng import LatLng, Point


@runtime_checkable
class CoordinateProjector(Protocol):
    """
    Converts geographic coordinates to and from a locally flat, Euclidean
    coordinate space. X grows eastward and Y grows northward.
    """

    def project(self, lat_lng: LatLng) -> Point: ...

    def unproject(self, point: Point) -> LatLng: ...


class SphericalMercator:
    """
    The spherical Mercator projection used by web maps (EPSG:3857), in
    meters.
    """

    R = 6378137.0
    MAX_LATITUDE = 85.0511287798

    def project(self, lat_lng: LatLng) -> Point:
        d = math.pi / 180.0
        lat = max(min(self.MAX_LATITUDE, lat_lng.lat), -self.MAX_LATITUDE)
        sin = math.sin(lat * d)
        return Point(
            self.R * lat_lng.lng * d,
            self.R * math.log((1 + sin) / (1 - sin)) / 2.0,
        )

    def unproject(self, point: Point) -> LatLng:
        d = 180.0 / math.pi
        return LatLng(
            (2 * math.atan(math.exp(point.y / self.R)) - math.pi / 2) * d,
            point.x * d / self.R,
        )


class LonLat:
    """Uses longitude and latitude directly as x and y."""

    def project(self, lat_lng: LatLng) -> Point:
        return Point(lat_lng.lng, lat_lng.lat)

    def unproject(self, point: Point) -> LatLng:
        return LatLng(point.y, point.x)
