import asyncio

import pytest

from routing.errors import MalformedResponse, RouteUnavailable, StaleRouteResult, TransportError
from routing.polyline import encode
from routing.route_service import AsyncOSRMService, Route, RouteRequester, parse_route_payload

PATH = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]


def ok_payload(geometry, distance=1234.5, duration=99.0):
    return {"code": "Ok", "routes": [{"geometry": geometry, "distance": distance, "duration": duration}]}


class FakeRoutingService:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    async def route(self, waypoints):
        self.calls.append(list(waypoints))
        if self.error is not None:
            raise self.error
        return self.payload

    async def route_encoded(self, encoded):
        self.calls.append(encoded)
        if self.error is not None:
            raise self.error
        return self.payload


# --- payload parsing ---

def test_parse_encoded_polyline_geometry():
    route = parse_route_payload(ok_payload(encode(PATH)))

    assert route.path == tuple(PATH)
    assert route.distance_m == 1234.5
    assert route.duration_s == 99.0


def test_parse_geojson_geometry_swaps_to_lat_lon():
    geometry = {"type": "LineString", "coordinates": [[-120.2, 38.5], [-120.95, 40.7]]}
    route = parse_route_payload(ok_payload(geometry))

    assert route.path == ((38.5, -120.2), (40.7, -120.95))


def test_parse_raw_coordinate_list():
    route = parse_route_payload(ok_payload([[38.5, -120.2], [40.7, -120.95]], distance=None, duration=None))

    assert route.path == ((38.5, -120.2), (40.7, -120.95))
    assert route.distance_m is None


def test_parse_polyline6_geometry():
    route = parse_route_payload(ok_payload(encode(PATH, precision=6)), precision=6)
    assert route.path == tuple(PATH)


@pytest.mark.parametrize("payload", [
    {"code": "NoRoute", "message": "Impossible route between points"},
    {"code": "InvalidQuery"},
    {"code": "Ok", "routes": []},
])
def test_non_success_is_route_unavailable(payload):
    with pytest.raises(RouteUnavailable):
        parse_route_payload(payload)


@pytest.mark.parametrize("payload", [
    "not an object",
    {"routes": []},
    {"code": "Ok"},
    {"code": "Ok", "routes": ["nope"]},
    ok_payload("_p~iF~ps|"),
    ok_payload(encode(PATH[:1])),
    ok_payload({"type": "Point", "coordinates": [1, 2]}),
    ok_payload([[1.0], [2.0]]),
    ok_payload(encode(PATH), distance="far"),
    ok_payload(None),
])
def test_broken_payload_is_malformed(payload):
    with pytest.raises(MalformedResponse):
        parse_route_payload(payload)


def test_route_needs_two_points():
    with pytest.raises(ValueError):
        Route(path=((1.0, 1.0),))


# --- requester ---

def test_request_route_sends_both_waypoints():
    service = FakeRoutingService(payload=ok_payload(encode(PATH)))
    requester = RouteRequester(service)

    route = asyncio.run(requester.request_route((1.0, 2.0), (3.0, 4.0)))

    assert service.calls == [[(1.0, 2.0), (3.0, 4.0)]]
    assert len(route.path) == 3


def test_request_predefined_route_sends_encoded_string():
    service = FakeRoutingService(payload=ok_payload(encode(PATH)))
    requester = RouteRequester(service)

    asyncio.run(requester.request_predefined_route("abc"))

    assert service.calls == ["abc"]


def test_transport_failures_become_transport_error():
    requester = RouteRequester(FakeRoutingService(error=ConnectionError("refused")))

    with pytest.raises(TransportError):
        asyncio.run(requester.request_route((1.0, 2.0), (3.0, 4.0)))


def test_routing_errors_from_the_service_pass_through():
    requester = RouteRequester(FakeRoutingService(error=RouteUnavailable("NoRoute")))

    with pytest.raises(RouteUnavailable):
        asyncio.run(requester.request_route((1.0, 2.0), (3.0, 4.0)))


def test_invalidate_makes_in_flight_request_stale():
    gate = {}

    class SlowService(FakeRoutingService):
        async def route(self, waypoints):
            gate["event"] = asyncio.Event()
            await gate["event"].wait()
            return ok_payload(encode(PATH))

    requester = RouteRequester(SlowService())

    async def scenario():
        task = asyncio.create_task(requester.request_route((1.0, 2.0), (3.0, 4.0)))
        await asyncio.sleep(0)
        requester.invalidate()
        gate["event"].set()
        return await task

    with pytest.raises(StaleRouteResult):
        asyncio.run(scenario())


def test_async_osrm_service_runs_client_calls():
    class FakeClient:
        def __init__(self):
            self.calls = []

        def fetch_route(self, coordinates):
            self.calls.append(coordinates)
            return ok_payload(encode(PATH))

        def fetch_encoded_route(self, encoded):
            self.calls.append(encoded)
            return ok_payload(encode(PATH))

    client = FakeClient()
    service = AsyncOSRMService(client)

    payload = asyncio.run(service.route(((1.0, 2.0), (3.0, 4.0))))
    asyncio.run(service.route_encoded("xyz"))

    assert payload["code"] == "Ok"
    assert client.calls == [[(1.0, 2.0), (3.0, 4.0)], "xyz"]
