"""
Geodesic footprint of a regular lat/lng grid (ni x nj cells of
dlambda x dphi degrees) whose bottom-left corner sits at a given point.
"""
import math
from dataclasses import dataclass
from typing import Optional
from ..latlng import LatLng
from ..shapes import Polygon

EARTH_RADIUS_KM = 6371.0
TWO_PI_R = 2.0 * math.pi * EARTH_RADIUS_KM


@dataclass(frozen=True)
class GridCharacteristics:
    """Cell counts (ni along longitude, nj along latitude) and cell size."""

    ni: int = 0
    nj: int = 0
    dphi: float = 0.0
    dlambda: float = 0.0

    def is_complete(self) -> bool:
        return bool(self.ni and self.nj and self.dphi and self.dlambda)


def destination_point(
    lat_lng: LatLng, bearing: float, distance_km: float
) -> LatLng:
    """
    Great-circle destination from `lat_lng` after travelling
    `distance_km` on the initial `bearing` (degrees clockwise from north).
    """
    delta = distance_km / EARTH_RADIUS_KM
    theta = math.radians(bearing)
    phi1 = math.radians(lat_lng.lat)
    lambda1 = math.radians(lat_lng.lng)

    phi2 = math.asin(
        math.sin(phi1) * math.cos(delta)
        + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    )
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2),
    )
    return LatLng(math.degrees(phi2), math.degrees(lambda2))


def calc_dlambda_km(latitude: float, dlambda: float) -> float:
    """East-west length in km of `dlambda` degrees along a parallel."""
    lat_rad = math.radians(abs(latitude))
    return TWO_PI_R * math.cos(lat_rad) * (dlambda / 360.0)


def calc_dphi_km(dphi: float) -> float:
    """North-south length in km of `dphi` degrees along a meridian."""
    return TWO_PI_R * (dphi / 360.0)


def create_grid_feature(
    bottom_left: LatLng,
    grid: GridCharacteristics,
    options: Optional[dict] = None,
) -> Optional[Polygon]:
    """
    Builds the polygon covered by `grid` when its bottom-left corner is at
    `bottom_left`. The top edge is measured on its own parallel, so the
    footprint narrows towards the poles.

    Returns:
        The closed polygon [bl, tl, tr, br, bl], or None if any grid
        characteristic is zero.
    """
    if not grid.is_complete():
        return None

    width_bottom = grid.ni * calc_dlambda_km(bottom_left.lat, grid.dlambda)
    height = grid.nj * calc_dphi_km(grid.dphi)
    top_left = destination_point(bottom_left, 0, height)
    width_top = grid.ni * calc_dlambda_km(top_left.lat, grid.dlambda)
    top_right = destination_point(top_left, 90, width_top)
    bottom_right = destination_point(bottom_left, 90, width_bottom)
    return Polygon(
        [bottom_left, top_left, top_right, bottom_right, bottom_left],
        options,
    )
