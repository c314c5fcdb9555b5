#Purpose: Failure types of the routing layer.
#Every failure of a routing request maps to exactly one of these,
#so the command boundary can report it without inspecting messages.


class RoutingError(Exception):
    """Base class for routing failures."""
    pass


class RouteUnavailable(RoutingError):
    """The service answered but reported no route between the waypoints."""
    pass


class TransportError(RoutingError):
    """The service could not be reached (connection, timeout, HTTP error)."""
    pass


class MalformedResponse(RoutingError):
    """The payload could not be parsed, or its geometry could not be decoded."""
    pass


class StaleRouteResult(RoutingError):
    """A newer request (or a clear) superseded this one; its result must be ignored."""
    pass
