"""
Purpose: Host-facing command surface (the "glue").
What it does:
Receives UI events (button presses, map clicks, finished drawings), applies them
to the Session, calls the routing service and the geofence check, and hands back
a CommandResult the host can show to the user.

Rule: No command raises a domain failure. Every MissingWaypoint, routing error,
bad polyline or empty save comes back as a typed CommandResult, and a failed
command leaves the session exactly as it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from animation.scheduler import AnimationUnavailable
from geometry.models import LatLon
from routing.errors import MalformedResponse, RouteUnavailable, StaleRouteResult, TransportError
from routing.geofence import check_all
from routing.polyline import DEFAULT_PRECISION, MalformedPolyline, decode
from routing.route_service import AsyncOSRMService, Route, RouteRequester, RoutingService
from shapes.export import export_geofences, export_polylines, to_feature_collection
from shapes.models import DrawnShape, GeofencePolygon, ShapeKind

from . import state_machine
from .errors import EmptyShapeSet, InvalidPosition, MissingWaypoint, NoRouteToAnimate
from .models import Role
from .session import Session

logger = logging.getLogger(__name__)

# Waypoints behind the "predefined route" button of the map demo
PREDEFINED_ROUTE_POLYLINE = "kgg`CxvmqOxMiGvU|T`MgGqaEomKlaA}Jhs@jV"


class CommandStatus(str, Enum):
    OK = "ok"
    NOTICE = "notice"          # nothing to do, not an error (e.g. empty save)
    FAILED = "failed"
    SUPERSEDED = "superseded"  # a newer request made this result irrelevant


class ErrorKind(str, Enum):
    MISSING_WAYPOINT = "missing_waypoint"
    ROUTE_UNAVAILABLE = "route_unavailable"
    TRANSPORT_ERROR = "transport_error"
    MALFORMED_RESPONSE = "malformed_response"
    MALFORMED_POLYLINE = "malformed_polyline"
    EMPTY_SHAPE_SET = "empty_shape_set"
    NO_ROUTE = "no_route"
    INVALID_POSITION = "invalid_position"
    ANIMATION_UNAVAILABLE = "animation_unavailable"


_ERROR_KINDS = {
    MissingWaypoint: ErrorKind.MISSING_WAYPOINT,
    RouteUnavailable: ErrorKind.ROUTE_UNAVAILABLE,
    TransportError: ErrorKind.TRANSPORT_ERROR,
    MalformedResponse: ErrorKind.MALFORMED_RESPONSE,
    MalformedPolyline: ErrorKind.MALFORMED_POLYLINE,
    EmptyShapeSet: ErrorKind.EMPTY_SHAPE_SET,
    NoRouteToAnimate: ErrorKind.NO_ROUTE,
    InvalidPosition: ErrorKind.INVALID_POSITION,
    AnimationUnavailable: ErrorKind.ANIMATION_UNAVAILABLE,
}

_HANDLED = tuple(_ERROR_KINDS)


@dataclass(frozen=True)
class CommandResult:
    status: CommandStatus
    payload: Any = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is CommandStatus.OK

    @classmethod
    def success(cls, payload: Any = None, message: str = "") -> CommandResult:
        return cls(status=CommandStatus.OK, payload=payload, message=message)

    @classmethod
    def from_error(cls, error: Exception) -> CommandResult:
        kind = next(kind for error_type, kind in _ERROR_KINDS.items() if isinstance(error, error_type))
        status = CommandStatus.NOTICE if kind is ErrorKind.EMPTY_SHAPE_SET else CommandStatus.FAILED
        return cls(status=status, error=kind, message=str(error))


@dataclass(frozen=True)
class RouteReport:
    """
    Payload of a successful route command: the new route and every geofence it crosses.
    """
    route: Route
    crossed: List[GeofencePolygon]

    @property
    def warnings(self) -> List[str]:
        return [f"Warning! Route crosses {fence.name}" for fence in self.crossed]


class RouteManager:
    """
    One map session: Session state + routing adapter + animation.
    """

    def __init__(
            self,
            service: Optional[RoutingService] = None,
            session: Optional[Session] = None,
            precision: Optional[int] = None,
    ):
        if service is None:
            service = AsyncOSRMService()
        if precision is None:
            precision = (
                service.client.policy.polyline_precision
                if isinstance(service, AsyncOSRMService) else DEFAULT_PRECISION
            )
        self.session = session or Session()
        self.requester = RouteRequester(service, precision=precision)

    #----------------
    # Endpoint placement
    #----------------
    def select_role(self, role: Role) -> CommandResult:
        role = Role(role)
        self.session.interaction = state_machine.select_role(self.session.interaction, role)
        return CommandResult.success(
            payload=self.session.interaction,
            message=f"Click the map to set the {role.value} point",
        )

    def consume_click(self, position: LatLon) -> CommandResult:
        """Map click. Places the pending waypoint, or does nothing when idle."""
        try:
            interaction, waypoint = state_machine.consume_click(self.session.interaction, position)
        except InvalidPosition as e:
            return CommandResult.from_error(e)
        self.session.interaction = interaction
        if waypoint is None:
            return CommandResult.success(payload=None)

        self.session.place(waypoint)
        logger.debug("Placed %s waypoint at %s", waypoint.role.value, waypoint.position)
        return CommandResult.success(payload=waypoint)

    #----------------
    # Drawing
    #----------------
    def add_drawn_shape(self, shape: DrawnShape) -> CommandResult:
        """Finished drawing from the draw tool; kept until a save commits it."""
        self.session.add_shape(shape)
        return CommandResult.success(payload=shape)

    #----------------
    # Routing
    #----------------
    async def calculate_route(self) -> CommandResult:
        start = self.session.waypoint(Role.START)
        end = self.session.waypoint(Role.END)
        if start is None or end is None:
            return CommandResult.from_error(MissingWaypoint("Both the start and the end point must be set"))

        try:
            route = await self.requester.request_route(start.position, end.position)
        except StaleRouteResult as e:
            return CommandResult(status=CommandStatus.SUPERSEDED, message=str(e))
        except _HANDLED as e:
            return CommandResult.from_error(e)

        return self._apply_route(route)

    async def load_predefined_route(self, encoded: str = PREDEFINED_ROUTE_POLYLINE) -> CommandResult:
        """Route through the vertices of an encoded polyline, snapped to roads by the service."""
        try:
            vertices = decode(encoded)
            if len(vertices) < 2:
                raise MalformedPolyline(f"a route needs at least 2 points, polyline has {len(vertices)}")
        except MalformedPolyline as e:
            return CommandResult.from_error(e)

        try:
            route = await self.requester.request_predefined_route(encoded)
        except StaleRouteResult as e:
            return CommandResult(status=CommandStatus.SUPERSEDED, message=str(e))
        except _HANDLED as e:
            return CommandResult.from_error(e)

        return self._apply_route(route)

    def _apply_route(self, route: Route) -> CommandResult:
        self.session.route = route
        crossed = check_all(route.path, self.session.geofences)
        report = RouteReport(route=route, crossed=crossed)
        for warning in report.warnings:
            logger.warning(warning)
        return CommandResult.success(payload=report)

    def clear_route(self) -> CommandResult:
        #any in-flight request must not bring the route back
        self.requester.invalidate()
        self.session.animation.stop()
        self.session.route = None
        return CommandResult.success()

    #----------------
    # Export
    #----------------
    def save_geofences(self) -> CommandResult:
        shapes = self.session.take_pending(ShapeKind.POLYGON)
        created = export_geofences(shapes, self.session.geofences, self.session.ids)
        if not created:
            logger.warning("No polygons to save as geofences")
            return CommandResult.from_error(EmptyShapeSet("No polygons to save"))

        logger.info("%d geofence(s) saved", len(created))
        return CommandResult.success(
            payload=to_feature_collection(created),
            message=f"{len(created)} geofence(s) saved",
        )

    def save_polylines(self) -> CommandResult:
        shapes = self.session.take_pending(ShapeKind.POLYLINE)
        created = export_polylines(shapes, self.session.polylines, self.session.ids)
        if not created:
            logger.warning("No polylines to save")
            return CommandResult.from_error(EmptyShapeSet("No polylines to save"))

        logger.info("%d polyline(s) saved", len(created))
        return CommandResult.success(
            payload=to_feature_collection(created),
            message=f"{len(created)} polyline(s) saved",
        )

    def geofence_collection(self) -> Dict[str, Any]:
        return to_feature_collection(self.session.geofences)

    def polyline_collection(self) -> Dict[str, Any]:
        return to_feature_collection(self.session.polylines)

    #----------------
    # Session
    #----------------
    def clear_all(self) -> CommandResult:
        self.requester.invalidate()
        self.session.reset()
        logger.info("Session cleared")
        return CommandResult.success(message="All elements have been removed")

    #----------------
    # Animation
    #----------------
    def start_route_animation(self, path: Optional[Sequence[LatLon]] = None) -> CommandResult:
        """
        Animate path, or the current route when no path is given.
        Any running animation is cancelled first.
        """
        if path is None and self.session.route is not None:
            path = self.session.route.path
        if path is None or len(path) < 2:
            return CommandResult.from_error(NoRouteToAnimate("No route to animate"))

        try:
            animation = self.session.animation.start(path)
        except AnimationUnavailable as e:
            logger.error("Route animation not started: %s", e)
            return CommandResult.from_error(e)
        return CommandResult.success(payload=animation)

    def stop_route_animation(self) -> CommandResult:
        stopped = self.session.animation.stop()
        return CommandResult.success(payload=stopped)
