"""
Geospatial helpers.

We keep a tiny geometry layer here so the policy and the stores can do distance
calculations without pulling in heavier GIS dependencies.

Viewport geometry is a coarse zoom-level proxy, not an exact bounding circle:
- the center is the arithmetic midpoint of two diagonal corners (not the geodesic midpoint),
- the radius is half the great-circle length of that diagonal.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import asin, cos, isfinite, nan, radians, sin, sqrt

EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle (haversine) distance in meters between two coordinates in degrees.

    No range validation is done; a NaN or infinite input yields NaN.
    """
    if not all(isfinite(v) for v in (lat1, lon1, lat2, lon2)):
        return nan

    phi1 = radians(lat1)
    phi2 = radians(lat2)
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)

    h = sin(dlat / 2) ** 2 + cos(phi1) * cos(phi2) * sin(dlon / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points.
    h = min(1.0, h)
    return 2 * EARTH_RADIUS_M * asin(sqrt(h))


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in meters between two points."""
    return distance_meters(a.lat, a.lon, b.lat, b.lon)


@dataclass(frozen=True)
class ViewportGeometry:
    """Center + radius summary of the visible map region."""

    center_lat: float
    center_lon: float
    radius_km: float

    def __post_init__(self) -> None:
        if self.radius_km < 0:
            raise ValueError(f"radius_km must be >= 0, got {self.radius_km}")

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(lat=self.center_lat, lon=self.center_lon)

    def contains(self, lat: float, lon: float) -> bool:
        """Return True if (lat, lon) lies within `radius_km` of the center."""
        return distance_meters(self.center_lat, self.center_lon, lat, lon) / 1000.0 <= self.radius_km


def _wrap_lon(lon: float) -> float:
    """Normalize a longitude (or longitude delta) into [-180, 180)."""
    return (lon + 180.0) % 360.0 - 180.0


def to_viewport_geometry(far_left: GeoPoint, near_right: GeoPoint) -> ViewportGeometry:
    """Convert two diagonal corners of the visible region into a `ViewportGeometry`."""
    center_lat = (far_left.lat + near_right.lat) / 2.0
    # Take the short way round, so a viewport spanning the antimeridian keeps its center inside.
    dlon = _wrap_lon(near_right.lon - far_left.lon)
    center_lon = _wrap_lon(far_left.lon + dlon / 2.0)
    diagonal_m = haversine_m(far_left, near_right)
    return ViewportGeometry(center_lat=center_lat, center_lon=center_lon, radius_km=diagonal_m / 2000.0)
