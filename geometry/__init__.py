#Marks geometry as a package.
#Pure planar / spherical helpers used by the geofence check and the exporters.
#No state, no routing calls.

from .models import LatLon, LonLat, Point
from .predicates import segments_intersect, point_in_polygon, point_on_segment
from .distance import haversine_km, path_length_km, EARTH_RADIUS_KM

__all__ = [
    "LatLon",
    "LonLat",
    "Point",
    "segments_intersect",
    "point_in_polygon",
    "point_on_segment",
    "haversine_km",
    "path_length_km",
    "EARTH_RADIUS_KM",
]
