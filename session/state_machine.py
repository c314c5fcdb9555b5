from dataclasses import replace
from typing import Optional, Tuple

from geometry.models import LatLon
from .models import InteractionState, Role, Waypoint


def select_role(state: InteractionState, role: Role) -> InteractionState:
    """
    Called when the user presses "start point" / "end point".
    Always legal: Idle or AwaitingPoint(any) -> AwaitingPoint(role).
    A previous pending selection is simply overwritten.
    """
    return replace(state, pending_role=role)


def consume_click(state: InteractionState, position: LatLon) -> Tuple[InteractionState, Optional[Waypoint]]:
    """
    Called for every map click.

    AwaitingPoint(role) -> Idle, and the click becomes Waypoint(role, position).
    Idle -> Idle with no waypoint: the click is ignored, not an error.

    The caller stores the returned waypoint, replacing any previous one for that role.
    """
    if state.pending_role is None:
        return state, None

    waypoint = Waypoint(role=state.pending_role, position=(float(position[0]), float(position[1])))
    return replace(state, pending_role=None), waypoint
