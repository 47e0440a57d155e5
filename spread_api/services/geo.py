"""Distance helpers for store discovery.

All distances are statute miles.
"""

import math

from spread_api.services.domain import BoundingBox, Point

EARTH_RADIUS_MI = 3959.0
MILES_PER_DEGREE_LAT = 69.0
KM_PER_MILE = 1.60934


def distance_miles(a: Point, b: Point) -> float:
    """Great-circle distance between two points (haversine)."""
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points.
    return 2 * EARTH_RADIUS_MI * math.asin(math.sqrt(min(1.0, h)))


def bounding_box(center: Point, radius_miles: float) -> BoundingBox:
    """Approximate box around `center` covering `radius_miles`.

    Longitude degrees shrink with cos(latitude); the box is a coarse
    prefilter and callers still apply `distance_miles` afterwards.
    """
    lat_delta = radius_miles / MILES_PER_DEGREE_LAT
    cos_lat = math.cos(math.radians(center.latitude))
    if cos_lat < 1e-9:
        # At the poles every longitude is within range.
        lon_delta = 180.0
    else:
        lon_delta = min(180.0, radius_miles / (MILES_PER_DEGREE_LAT * cos_lat))

    return BoundingBox(
        min_latitude=center.latitude - lat_delta,
        max_latitude=center.latitude + lat_delta,
        min_longitude=center.longitude - lon_delta,
        max_longitude=center.longitude + lon_delta,
    )


def miles_to_meters(miles: float) -> int:
    """Radius for Overpass `around:` filters."""
    return int(round(miles * KM_PER_MILE * 1000))
