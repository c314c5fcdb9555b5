"""
Session package: the interactive state of one map session and the commands a
host UI calls on it.

Public API:
- Models: Role, Waypoint, InteractionState
- Aggregate: Session
- Command boundary: RouteManager, CommandResult, CommandStatus, ErrorKind, RouteReport
"""
from .models import Role, Waypoint, InteractionState
from .errors import SessionError, MissingWaypoint, EmptyShapeSet, NoRouteToAnimate, InvalidPosition
from .session import Session
from .commands import RouteManager, CommandResult, CommandStatus, ErrorKind, RouteReport, PREDEFINED_ROUTE_POLYLINE

__all__ = ["Role",
           "Waypoint",
           "InteractionState",
           "SessionError",
           "MissingWaypoint",
           "EmptyShapeSet",
           "NoRouteToAnimate",
           "InvalidPosition",
           "Session",
           "RouteManager",
           "CommandResult",
           "CommandStatus",
           "ErrorKind",
           "RouteReport",
           "PREDEFINED_ROUTE_POLYLINE",
           ]
