"""
Purpose: The single owned aggregate holding all mutable state of one map session.
What it does:
- interaction mode, waypoints, current route
- drawn shapes not yet saved, committed geofences and polylines
- the id generator and the animation handle (both survive a clear)

Rule: Session holds state and applies the replace / append-only rules.
Deciding what a command does lives in commands.py.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from animation.scheduler import AnimationScheduler
from routing.route_service import Route
from shapes.ids import CounterIdGenerator, IdGenerator
from shapes.models import DrawnShape, GeofencePolygon, PolylineFeature, ShapeKind

from .models import InteractionState, Role, Waypoint


@dataclass
class Session:
    ids: IdGenerator = field(default_factory=CounterIdGenerator)
    animation: AnimationScheduler = field(default_factory=AnimationScheduler)

    interaction: InteractionState = field(default_factory=InteractionState)
    waypoints: Dict[Role, Waypoint] = field(default_factory=dict)
    route: Optional[Route] = None

    pending_shapes: List[DrawnShape] = field(default_factory=list)
    geofences: List[GeofencePolygon] = field(default_factory=list)
    polylines: List[PolylineFeature] = field(default_factory=list)

    def waypoint(self, role: Role) -> Optional[Waypoint]:
        return self.waypoints.get(role)

    def place(self, waypoint: Waypoint) -> None:
        #supersedes the previous waypoint of the same role
        self.waypoints[waypoint.role] = waypoint

    def add_shape(self, shape: DrawnShape) -> None:
        self.pending_shapes.append(shape)

    def take_pending(self, kind: ShapeKind) -> List[DrawnShape]:
        """Remove and return the unsaved shapes of one kind, in drawing order."""
        taken = [shape for shape in self.pending_shapes if shape.kind is kind]
        self.pending_shapes = [shape for shape in self.pending_shapes if shape.kind is not kind]
        return taken

    def reset(self) -> None:
        """Back to the initial configuration. Ids keep counting so they stay unique."""
        self.animation.stop()
        self.interaction = InteractionState()
        self.waypoints = {}
        self.route = None
        self.pending_shapes = []
        self.geofences = []
        self.polylines = []
