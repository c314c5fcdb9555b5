"""
Purpose: Geodesic (great-circle) distance on a spherical Earth.
Used for the length of exported polylines.
"""

from __future__ import annotations

import math
from typing import Sequence

from .models import LatLon

#mean Earth radius (IUGG), km
EARTH_RADIUS_KM = 6371.0088


def haversine_km(a: LatLon, b: LatLon) -> float:
    """Great-circle distance in kilometres between two (lat, lon) points."""
    lat1, lon1 = map(math.radians, a)
    lat2, lon2 = map(math.radians, b)
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    x = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, x)))


def path_length_km(vertices: Sequence[LatLon]) -> float:
    """Sum of haversine distances over consecutive vertex pairs. 0.0 for fewer than 2 vertices."""
    total = 0.0
    for index in range(1, len(vertices)):
        total += haversine_km(vertices[index - 1], vertices[index])
    return total
