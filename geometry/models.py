"""
Purpose: Coordinate aliases shared by every package.
What it does:
- LatLon: (lat, lon) - waypoints, route paths, polyline vertices
- LonLat: (lon, lat) - geofence rings (GeoJSON order)
- Point: planar (x, y) as seen by the predicates, x = lon, y = lat

Rule: No logic here. The order of a tuple is fixed by the alias it is declared with.
"""

from typing import Tuple

LatLon = Tuple[float, float]
LonLat = Tuple[float, float]
Point = Tuple[float, float]
