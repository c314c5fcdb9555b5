#Purpose: Route vs geofence crossing check.
#Tells the session which committed geofences a computed route enters.
#A route "intersects" a fence when:
#any route segment touches any ring edge, or
#any route vertex lies inside the ring (covers a route entirely inside the fence)
#Route paths are (lat, lon); rings are (lon, lat). Everything is compared as (lon, lat).

from typing import List, Sequence, Tuple

from geometry.models import LatLon, LonLat
from geometry.predicates import point_in_polygon, segments_intersect
from shapes.models import GeofencePolygon

BBox = Tuple[float, float, float, float]


def _bbox(points: Sequence[LonLat]) -> BBox:
    xs = [x for x, _ in points]
    ys = [y for _, y in points]
    return min(xs), min(ys), max(xs), max(ys)


def _bboxes_overlap(a: BBox, b: BBox) -> bool:
    return a[0] <= b[2] and b[0] <= a[2] and a[1] <= b[3] and b[1] <= a[3]


def intersects(route_path: Sequence[LatLon], fence: GeofencePolygon) -> bool:
    """
    True if the route crosses, touches or lies inside the fence.
    An empty route never intersects.
    """
    if not route_path:
        return False

    points: List[LonLat] = [(lon, lat) for lat, lon in route_path]
    ring = fence.ring

    #cheap reject: disjoint bounding boxes cannot share a point
    if not _bboxes_overlap(_bbox(points), _bbox(ring)):
        return False

    for index in range(1, len(points)):
        a, b = points[index - 1], points[index]
        for edge in range(1, len(ring)):
            if segments_intersect(a, b, ring[edge - 1], ring[edge]):
                return True

    return any(point_in_polygon(point, ring) for point in points)


def check_all(route_path: Sequence[LatLon], fences: Sequence[GeofencePolygon]) -> List[GeofencePolygon]:
    """
    Every fence the route intersects, in input order. Does not stop at the first hit.
    """
    if not route_path or not fences:
        return []
    return [fence for fence in fences if intersects(route_path, fence)]
