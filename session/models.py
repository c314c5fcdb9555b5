"""
Purpose: Domain models for the interactive session.
What it does:
- Role = START | END (which route endpoint a click places)
- Waypoint: a placed endpoint, position in (lat, lon)
- InteractionState: the only "mode" of the session, the role waiting for a map click

Rule: No transitions here (see state_machine.py). Models only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from geometry.models import LatLon

from .errors import InvalidPosition


class Role(str, Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True)
class Waypoint:
    """
    A user-placed route endpoint. At most one per role exists at a time.
    """
    role: Role
    position: LatLon

    def __post_init__(self):
        lat, lon = self.position
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise InvalidPosition(f"Waypoint position must be finite, got {self.position}")


@dataclass(frozen=True)
class InteractionState:
    """
    Idle when pending_role is None, otherwise waiting for the click that places pending_role.
    """
    pending_role: Optional[Role] = None

    @property
    def idle(self) -> bool:
        return self.pending_role is None
