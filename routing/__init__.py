#Marks routing as a package.
#Re-exports the public API (codec, OSRM client, route adapter, geofence check)
#so other modules import from routing without knowing internal file names.
#No business logic.

from .polyline import encode, decode, MalformedPolyline
from .errors import RoutingError, RouteUnavailable, TransportError, MalformedResponse, StaleRouteResult
from .policy import RoutingPolicy, default_routing_policy
from .osrm_client import OSRMClient
from .route_service import Route, RouteRequester, RoutingService, AsyncOSRMService, parse_route_payload
from .geofence import intersects, check_all

__all__ = [
           "encode",
           "decode",
           "MalformedPolyline",
           "RoutingError",
           "RouteUnavailable",
           "TransportError",
           "MalformedResponse",
           "StaleRouteResult",
           "RoutingPolicy",
           "default_routing_policy",
           "OSRMClient",
           "Route",
           "RouteRequester",
           "RoutingService",
           "AsyncOSRMService",
           "parse_route_payload",
           "intersects",
           "check_all",
             ]
