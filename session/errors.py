#Purpose: Failure types raised by session commands before they are turned into CommandResults.


class SessionError(Exception):
    """Base class for session-level failures."""
    pass


class MissingWaypoint(SessionError):
    """A route was requested while the start or end waypoint is unset."""
    pass


class EmptyShapeSet(SessionError):
    """A save was requested with no drawn shape of the right kind. Reported as a notice."""
    pass


class NoRouteToAnimate(SessionError):
    """Animation was requested with neither a path nor a current route."""
    pass


class InvalidPosition(SessionError, ValueError):
    """A map click carried a non-finite coordinate."""
    pass
