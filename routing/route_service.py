#Purpose: Route computation for the session layer.
#Turns "start + end" (or an encoded polyline) into a Route the map can display
#and the geofence check can consume.
#Responsibilities:
#call the routing service (async, one authoritative request at a time)
#map service status / transport failures / bad payloads to typed errors
#decode the geometry (encoded polyline, GeoJSON LineString or raw [lat, lon] list)

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, List, Mapping, Optional, Protocol, Sequence, Tuple

import requests

from .errors import MalformedResponse, RouteUnavailable, RoutingError, StaleRouteResult, TransportError
from .osrm_client import OSRMClient
from .polyline import DEFAULT_PRECISION, MalformedPolyline, decode

logger = logging.getLogger(__name__)

LatLon = Tuple[float, float]


class RoutingService(Protocol):
    """
    What the session needs from a routing backend.
    Both calls return the raw JSON body (OSRM shaped: "code" + "routes").
    """

    async def route(self, waypoints: Sequence[LatLon]) -> Mapping[str, Any]:
        ...

    async def route_encoded(self, encoded: str) -> Mapping[str, Any]:
        ...


class AsyncOSRMService:
    """
    Runs the blocking OSRMClient calls in a worker thread so the event loop
    keeps processing UI events while a request is in flight.
    """

    def __init__(self, client: Optional[OSRMClient] = None):
        self.client = client or OSRMClient()

    async def route(self, waypoints: Sequence[LatLon]) -> Mapping[str, Any]:
        return await asyncio.to_thread(self.client.fetch_route, list(waypoints))

    async def route_encoded(self, encoded: str) -> Mapping[str, Any]:
        return await asyncio.to_thread(self.client.fetch_encoded_route, encoded)


@dataclass(frozen=True)
class Route:
    """
    A road-following path, (lat, lon) order, at least two points.
    Replaced wholesale on recomputation, never edited.
    """
    path: Tuple[LatLon, ...]
    distance_m: Optional[float] = None
    duration_s: Optional[float] = None

    def __post_init__(self):
        if len(self.path) < 2:
            raise ValueError(f"A route needs at least 2 points, got {len(self.path)}")


def _parse_geometry(geometry: Any, precision: int) -> List[LatLon]:
    # encoded polyline
    if isinstance(geometry, str):
        try:
            return decode(geometry, precision=precision)
        except MalformedPolyline as e:
            raise MalformedResponse(f"route geometry is not a valid polyline: {e}") from e

    # GeoJSON LineString, coordinates are [lon, lat]
    if isinstance(geometry, Mapping):
        coordinates = geometry.get("coordinates")
        if geometry.get("type") != "LineString" or not isinstance(coordinates, list):
            raise MalformedResponse(f"unsupported geometry object: {geometry.get('type')!r}")
        try:
            return [(float(lat), float(lon)) for lon, lat in coordinates]
        except (TypeError, ValueError) as e:
            raise MalformedResponse(f"bad GeoJSON coordinates: {e}") from e

    # raw [[lat, lon], ...]
    if isinstance(geometry, list):
        try:
            return [(float(lat), float(lon)) for lat, lon in geometry]
        except (TypeError, ValueError) as e:
            raise MalformedResponse(f"bad coordinate list: {e}") from e

    raise MalformedResponse(f"route has no usable geometry (got {type(geometry).__name__})")


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise MalformedResponse(f"expected a number, got {value!r}") from e


def parse_route_payload(payload: Any, precision: int = DEFAULT_PRECISION) -> Route:
    """
    Validate a routing-service body and build the Route of its first alternative.

    Raises:
        RouteUnavailable: status code is not "Ok", or no route was returned
        MalformedResponse: anything structurally wrong with the body
    """
    if not isinstance(payload, Mapping):
        raise MalformedResponse(f"expected a JSON object, got {type(payload).__name__}")

    code = payload.get("code")
    if code is None:
        raise MalformedResponse("response has no status code")
    if code != "Ok":
        raise RouteUnavailable(f"{code}: {payload.get('message', 'no route found')}")

    routes = payload.get("routes")
    if not isinstance(routes, list):
        raise MalformedResponse("response has no 'routes' list")
    if not routes:
        raise RouteUnavailable("service returned no routes")

    first = routes[0] #only the first alternative is used
    if not isinstance(first, Mapping):
        raise MalformedResponse("route entry is not an object")

    path = _parse_geometry(first.get("geometry"), precision)
    if len(path) < 2:
        raise MalformedResponse(f"route geometry has {len(path)} point(s), need at least 2")

    return Route(
        path=tuple(path),
        distance_m=_optional_float(first.get("distance")),
        duration_s=_optional_float(first.get("duration")),
    )


class RouteRequester:
    """
    Adapter between the session and a RoutingService.

    Only the most recent request is authoritative: every request takes a ticket
    from a monotonically increasing counter, and a completion whose ticket is
    no longer current raises StaleRouteResult instead of returning. Requests
    are not queued.
    """

    def __init__(self, service: RoutingService, precision: int = DEFAULT_PRECISION):
        self.service = service
        self.precision = precision
        self._sequence = 0

    @property
    def sequence(self) -> int:
        return self._sequence

    def invalidate(self) -> None:
        """Make any in-flight request stale (used when the route is cleared)."""
        self._sequence += 1

    async def request_route(self, start: LatLon, end: LatLon) -> Route:
        return await self._run(self.service.route([start, end]), f"{start} -> {end}")

    async def request_predefined_route(self, encoded: str) -> Route:
        return await self._run(self.service.route_encoded(encoded), f"polyline({encoded})")

    async def _run(self, call: Awaitable[Mapping[str, Any]], label: str) -> Route:
        self._sequence += 1
        ticket = self._sequence

        try:
            payload = await call
            route = parse_route_payload(payload, precision=self.precision)
        except RoutingError as e:
            self._ensure_current(ticket, label)
            logger.error("Route request %s failed: %s", label, e)
            raise
        except (OSError, asyncio.TimeoutError, requests.exceptions.RequestException) as e:
            self._ensure_current(ticket, label)
            logger.error("Route request %s failed in transport: %s", label, e)
            raise TransportError(str(e)) from e

        self._ensure_current(ticket, label)
        logger.info("Route %s: %d points, %s m", label, len(route.path), route.distance_m)
        return route

    def _ensure_current(self, ticket: int, label: str) -> None:
        if ticket != self._sequence:
            logger.warning("Discarding stale route result for %s (ticket %d, current %d)", label, ticket, self._sequence)
            raise StaleRouteResult(f"request {ticket} superseded by {self._sequence}")
