#Purpose: The OSRM “adapter/client”.
#Sole responsibility: talk to OSRM via HTTP and hand back the decoded JSON body.
#Encapsulates OSRM-specific details:
#coordinate formatting (lon,lat) and the polyline(...) form
#URL construction (/route)
#timeouts and transport error mapping
#It should not contain geofence rules or route parsing (see route_service.py).

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests

from .errors import MalformedResponse, TransportError
from .policy import RoutingPolicy, default_routing_policy

logger = logging.getLogger(__name__)

# Internal coordinate type: (lat, lon)
LatLon = Tuple[float, float]


class OSRMClient:
    """
    OSRM Adapter / Client

    Sole responsibility:
    - Talk to OSRM via HTTP
    - Convert internal (lat, lon) → OSRM (lon,lat)
    - Return the response body as a dict, whatever its "code"

    """
    def __init__(self, policy: Optional[RoutingPolicy] = None):
        self.policy = policy or default_routing_policy()
        self.policy.validate()
        self.base_url = self.policy.base_url.rstrip("/")
        self.timeout = self.policy.timeout_s #the time to wait for a response from OSRM before giving up
        self.profile = self.policy.profile #the mode of transportation (driving, walking, cycling)

    #----------------
    # Internal helper methods for coordinate formatting, URL construction, error handling
    #----------------
    def format_coordinates(self, coords: List[LatLon]) -> str:
        """Convert list of (lat, lon) to OSRM format 'lon,lat;lon,lat;...'"""
        return ';'.join([f"{lon},{lat}" for lat, lon in coords])

    def format_encoded(self, encoded: str) -> str:
        """Wrap an encoded polyline in the OSRM 'polyline(...)' coordinate form."""
        return f"polyline({quote(encoded, safe='')})"

    def route_params(self) -> Dict[str, str]:
        return {
            "overview": self.policy.overview,
            "geometries": self.policy.geometries,
        }

    def _get(self, url: str) -> Dict[str, Any]:
        logger.debug("OSRM GET %s", url)
        try:
            response = requests.get(url, params=self.route_params(), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"OSRM request failed: {e}") from e

        # OSRM answers NoRoute / InvalidQuery with a 4xx *and* a JSON body carrying the code,
        # so only fall back to the HTTP status when there is no JSON to read.
        try:
            data = response.json()
        except ValueError as e:
            if response.status_code >= 400:
                raise TransportError(f"OSRM HTTP error {response.status_code}") from e
            raise MalformedResponse(f"OSRM returned a non-JSON body: {e}") from e

        if not isinstance(data, dict):
            raise MalformedResponse(f"OSRM returned {type(data).__name__}, expected an object")
        return data

    #----------------
    # Public methods
    #----------------
    def fetch_route(self, coordinates: List[LatLon]) -> Dict[str, Any]:
        """
        calls the OSRM /route endpoint with the given (lat, lon) waypoints and
        returns the JSON body:
            {
                "code": "Ok" | "NoRoute" | ...,
                "routes": [{"geometry": ..., "distance": float, "duration": float}, ...],
            }
        """
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required to compute a route.")

        url = f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates(coordinates)}"
        return self._get(url)

    def fetch_encoded_route(self, encoded: str) -> Dict[str, Any]:
        """
        Same as fetch_route, but the waypoints are given as one encoded polyline.
        OSRM snaps every vertex to the road network and routes through them in order.
        """
        url = f"{self.base_url}/route/v1/{self.profile}/{self.format_encoded(encoded)}"
        return self._get(url)
