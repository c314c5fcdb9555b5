"""
Purpose: Turn drawn shapes into committed features (the "save" step).
What it does:
- export_geofences: PolygonShape -> GeofencePolygon, appended to the collection
- export_polylines: PolylineShape -> PolylineFeature (+ geodesic length), appended
- to_feature_collection: the GeoJSON-shaped FeatureCollection a host can download

Naming: "Geofence {n}" / "Polyline {n}" where n continues from the size of the
collection. Collections are append-only; nothing is deduplicated or rewritten.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence

from geometry.distance import path_length_km

from .ids import IdGenerator
from .models import DrawnShape, GeofencePolygon, PolygonShape, PolylineFeature, PolylineShape, ShapeKind

GEOFENCE_ID_PREFIX = "geofence"
POLYLINE_ID_PREFIX = "polyline"
GEOFENCE_NAME = "Geofence {n}"
POLYLINE_NAME = "Polyline {n}"


def export_geofences(
        shapes: Iterable[DrawnShape],
        collection: List[GeofencePolygon],
        ids: IdGenerator,
) -> List[GeofencePolygon]:
    """
    Commit every polygon in shapes (other variants are skipped).

    Args:
        shapes: drawn shapes, any variant
        collection: the session's geofence list, appended to in place
        ids: id source

    Returns:
        the new geofences, in input order ([] when there were no polygons)
    """
    polygons: List[PolygonShape] = [shape for shape in shapes if shape.kind is ShapeKind.POLYGON]
    existing = len(collection)

    created = [
        GeofencePolygon.from_shape(
            fence_id=ids.next_id(GEOFENCE_ID_PREFIX),
            name=GEOFENCE_NAME.format(n=existing + position),
            shape=polygon,
        )
        for position, polygon in enumerate(polygons, start=1)
    ]

    collection.extend(created)
    return created


def export_polylines(
        shapes: Iterable[DrawnShape],
        collection: List[PolylineFeature],
        ids: IdGenerator,
) -> List[PolylineFeature]:
    """
    Commit every polyline in shapes, computing its geodesic length in km.
    Same id / name sequencing as export_geofences, scoped to the polyline collection.
    """
    polylines: List[PolylineShape] = [shape for shape in shapes if shape.kind is ShapeKind.POLYLINE]
    existing = len(collection)

    created = [
        PolylineFeature(
            id=ids.next_id(POLYLINE_ID_PREFIX),
            name=POLYLINE_NAME.format(n=existing + position),
            length_km=path_length_km(polyline.vertices),
            vertices=tuple(polyline.vertices),
        )
        for position, polyline in enumerate(polylines, start=1)
    ]

    collection.extend(created)
    return created


def to_feature_collection(features: Sequence[Any]) -> Dict[str, Any]:
    """Wrap committed features (anything with .to_feature()) in a FeatureCollection."""
    return {
        "type": "FeatureCollection",
        "features": [feature.to_feature() for feature in features],
    }
