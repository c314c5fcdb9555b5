"""
Purpose: Planar geometric predicates.
What it does:
- segments_intersect: cross-product determinant test, inclusive parameter range [0, 1]
- point_on_segment: collinear + projection within the segment
- point_in_polygon: ray-casting parity, boundary-inclusive

Coordinates are treated as unprojected planar (x, y). Callers decide which
axis is lon and which is lat; both arguments of a call must use the same order.
"""

from __future__ import annotations

import math
from typing import Sequence

from .models import Point

#relative tolerance: a cross product counts as zero when it is below
#EPSILON times the product of the two vector lengths (sine of the angle)
EPSILON = 1e-12


def _cross(ax: float, ay: float, bx: float, by: float) -> float:
    return ax * by - ay * bx


def _norm(x: float, y: float) -> float:
    return math.hypot(x, y)


def _is_degenerate(a: Point, b: Point) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def point_on_segment(point: Point, a: Point, b: Point) -> bool:
    """
    True if point lies on the closed segment a-b.
    A zero-length segment only contains the identical point.
    """
    if _is_degenerate(a, b):
        return point[0] == a[0] and point[1] == a[1]

    abx, aby = b[0] - a[0], b[1] - a[1]
    apx, apy = point[0] - a[0], point[1] - a[1]
    if abs(_cross(abx, aby, apx, apy)) > EPSILON * _norm(abx, aby) * _norm(apx, apy):
        return False

    #collinear: the projection must fall within a-b
    ab_dot_ab = abx * abx + aby * aby
    ab_dot_ap = abx * apx + aby * apy
    return -EPSILON * ab_dot_ab <= ab_dot_ap <= (1.0 + EPSILON) * ab_dot_ab


def segments_intersect(p1: Point, p2: Point, q1: Point, q2: Point) -> bool:
    """
    Do segments p1-p2 and q1-q2 share at least one point?

    Solves p1 + t*r = q1 + u*s with r = p2 - p1, s = q2 - q1 and accepts
    0 <= t <= 1 and 0 <= u <= 1. Touching endpoints count as intersecting,
    and so do collinear segments that overlap.

    Zero-length segments only intersect an identical zero-length segment.
    """
    p_degenerate = _is_degenerate(p1, p2)
    q_degenerate = _is_degenerate(q1, q2)
    if p_degenerate or q_degenerate:
        return p_degenerate and q_degenerate and _is_degenerate(p1, q1)

    rx, ry = p2[0] - p1[0], p2[1] - p1[1]
    sx, sy = q2[0] - q1[0], q2[1] - q1[1]
    qpx, qpy = q1[0] - p1[0], q1[1] - p1[1]

    denominator = _cross(rx, ry, sx, sy)
    qp_cross_r = _cross(qpx, qpy, rx, ry)
    r_len = _norm(rx, ry)

    if abs(denominator) <= EPSILON * r_len * _norm(sx, sy):
        #parallel: only collinear ones can touch
        if abs(qp_cross_r) > EPSILON * r_len * _norm(qpx, qpy):
            return False

        #project q onto r and check the intervals overlap
        r_dot_r = rx * rx + ry * ry
        t0 = (qpx * rx + qpy * ry) / r_dot_r
        t1 = t0 + (sx * rx + sy * ry) / r_dot_r
        low, high = min(t0, t1), max(t0, t1)
        return high >= 0.0 and low <= 1.0

    t = _cross(qpx, qpy, sx, sy) / denominator
    u = qp_cross_r / denominator
    return 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0


def point_in_polygon(point: Point, ring: Sequence[Point]) -> bool:
    """
    Ray-casting parity test (horizontal ray towards +x).

    Boundary convention: a point lying exactly on an edge or a vertex is
    INSIDE. This is decided before the parity count, because the parity
    count alone is inconsistent on edges.

    The ring may be open or closed; the closing edge is implied.
    """
    count = len(ring)
    if count < 3:
        return False

    x, y = point
    inside = False

    for index in range(count):
        a = ring[index]
        b = ring[(index + 1) % count]

        if point_on_segment(point, a, b):
            return True

        ax, ay = a
        bx, by = b
        #edge straddles the ray's horizontal line (half-open so shared vertices count once)
        if (ay > y) != (by > y):
            x_at_y = ax + (y - ay) * (bx - ax) / (by - ay)
            if x < x_at_y:
                inside = not inside

    return inside
