"""
Purpose: Central configuration for talking to the routing service.
What it does:

Stores the tunables of the OSRM /route call:

OSRM_BASE_URL = https://router.project-osrm.org
OSRM_PROFILE = driving
OSRM_TIMEOUT = 5

Rule: No logic here: just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Read overrides from environment
# Example in .env:
# OSRM_BASE_URL=http://localhost:5000
load_dotenv()

DEFAULT_BASE_URL = "https://router.project-osrm.org"

GEOMETRY_FORMATS = ("polyline", "polyline6", "geojson")


@dataclass(frozen=True)
class RoutingPolicy:
    """
    Central configuration for route requests.
    """

    base_url: str = DEFAULT_BASE_URL

    # driving, walking, cycling
    profile: str = "driving"

    # seconds to wait for OSRM before giving up
    timeout_s: float = 5.0

    # full = every vertex of the road-following path, not a simplified one
    overview: str = "full"

    # how the service should send the geometry back
    geometries: str = "polyline"

    @property
    def polyline_precision(self) -> int:
        return 6 if self.geometries == "polyline6" else 5

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if not self.base_url:
            raise ValueError("OSRM base URL not set. Please set OSRM_BASE_URL in the .env file.")

        if not self.profile:
            raise ValueError("profile must not be empty")

        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")

        if self.geometries not in GEOMETRY_FORMATS:
            raise ValueError(f"geometries must be one of {GEOMETRY_FORMATS}, got {self.geometries!r}")


def default_routing_policy() -> RoutingPolicy:
    """
    Policy built from the environment (.env), validated.
    """
    p = RoutingPolicy(
        base_url=os.getenv("OSRM_BASE_URL", DEFAULT_BASE_URL),
        profile=os.getenv("OSRM_PROFILE", "driving"),
        timeout_s=float(os.getenv("OSRM_TIMEOUT", "5")),
    )
    p.validate()
    return p
