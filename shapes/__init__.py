"""
Shapes domain package.

Public API:
- Drawn shapes (from the draw tool): PolygonShape, PolylineShape, DrawnShape
- Committed features: GeofencePolygon, PolylineFeature
- Export: export_geofences, export_polylines, to_feature_collection
- Id generation: CounterIdGenerator, UuidIdGenerator
"""
from .models import DrawnShape, PolygonShape, PolylineShape, GeofencePolygon, PolylineFeature
from .ids import IdGenerator, CounterIdGenerator, UuidIdGenerator
from .export import export_geofences, export_polylines, to_feature_collection

__all__ = ["DrawnShape",
           "PolygonShape",
           "PolylineShape",
           "GeofencePolygon",
           "PolylineFeature",
           "IdGenerator",
           "CounterIdGenerator",
           "UuidIdGenerator",
           "export_geofences",
           "export_polylines",
           "to_feature_collection",
           ]
