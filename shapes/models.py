"""
Purpose: Domain models for drawn shapes and the features they become.
What it does:
- DrawnShape = PolygonShape | PolylineShape, tagged by a ShapeKind enum.
  The draw tool builds the right variant; nothing downstream inspects
  geometry to guess what a shape is.
- GeofencePolygon: committed polygon, ring in (lon, lat), always closed
- PolylineFeature: committed polyline, vertices in (lat, lon), with its geodesic length

Defines enums/constants:
- ShapeKind = POLYGON | POLYLINE

Rule: No export sequencing, no id generation. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple, Union

from geometry.models import LatLon, LonLat


class ShapeKind(Enum):
    POLYGON = "POLYGON"
    POLYLINE = "POLYLINE"


@dataclass(frozen=True)
class PolygonShape:
    """
    A finished polygon from the draw tool, vertices in (lat, lon) as the map reports them.
    The ring may be open; it is closed when committed.
    """
    vertices: Tuple[LatLon, ...]
    kind: ShapeKind = field(default=ShapeKind.POLYGON, init=False)

    def __post_init__(self):
        distinct = set(self.vertices)
        if len(distinct) < 3:
            raise ValueError(f"A polygon needs at least 3 distinct vertices, got {len(distinct)}")


@dataclass(frozen=True)
class PolylineShape:
    """
    A finished polyline from the draw tool, vertices in (lat, lon).
    """
    vertices: Tuple[LatLon, ...]
    kind: ShapeKind = field(default=ShapeKind.POLYLINE, init=False)

    def __post_init__(self):
        if len(self.vertices) < 2:
            raise ValueError(f"A polyline needs at least 2 vertices, got {len(self.vertices)}")


DrawnShape = Union[PolygonShape, PolylineShape]


def close_ring(ring: Tuple[LonLat, ...]) -> Tuple[LonLat, ...]:
    """Append the first vertex if the ring is open."""
    if ring and ring[0] != ring[-1]:
        return ring + (ring[0],)
    return ring


@dataclass(frozen=True)
class GeofencePolygon:
    """
    A committed geofence. ring is (lon, lat), first == last.
    Simple (non self-intersecting) rings are assumed, not validated.
    """
    id: str
    name: str
    ring: Tuple[LonLat, ...]

    def __post_init__(self):
        if len(self.ring) < 4:
            raise ValueError(f"A closed ring needs at least 4 positions, got {len(self.ring)}")
        if self.ring[0] != self.ring[-1]:
            raise ValueError(f"Geofence {self.id} ring is not closed")

    @classmethod
    def from_shape(cls, fence_id: str, name: str, shape: PolygonShape) -> GeofencePolygon:
        ring = tuple((lon, lat) for lat, lon in shape.vertices)
        return cls(id=fence_id, name=name, ring=close_ring(ring))

    def to_feature(self) -> Dict[str, Any]:
        return {
            "type": "Feature",
            "properties": {
                "id": self.id,
                "name": self.name,
            },
            "geometry": {
                "type": "Polygon",
                "coordinates": [[list(position) for position in self.ring]],
            },
        }


@dataclass(frozen=True)
class PolylineFeature:
    """
    A committed polyline. vertices are (lat, lon) and are exported in that order.
    """
    id: str
    name: str
    length_km: float
    vertices: Tuple[LatLon, ...]

    def to_feature(self, length_decimals: int = 3) -> Dict[str, Any]:
        return {
            "type": "Feature",
            "properties": {
                "id": self.id,
                "name": self.name,
                "length": round(self.length_km, length_decimals),
                "length_units": "km",
            },
            "geometry": {
                "type": "LineString",
                "coordinates": [list(vertex) for vertex in self.vertices],
            },
        }
