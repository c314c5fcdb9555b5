import asyncio

from routing.geofence import check_all
from routing.osrm_client import OSRMClient
from routing.route_service import AsyncOSRMService, RouteRequester
from shapes.ids import CounterIdGenerator
from shapes.export import export_geofences
from shapes.models import PolygonShape


def main():
    requester = RouteRequester(AsyncOSRMService(OSRMClient()))

    start = (52.517037, 13.388860)   # (lat, lon)
    end = (52.529407, 13.397634)     # (lat, lon)

    fences = []
    export_geofences(
        [
            # around the midpoint of the trip
            PolygonShape(vertices=((52.525, 13.390), (52.525, 13.396), (52.521, 13.396), (52.521, 13.390))),
            # far away, must never be reported
            PolygonShape(vertices=((48.0, 2.0), (48.0, 2.1), (47.9, 2.1), (47.9, 2.0))),
        ],
        fences,
        CounterIdGenerator(),
    )

    route = asyncio.run(requester.request_route(start, end))
    crossed = check_all(route.path, fences)

    print(f"\nRoute: {len(route.path)} points, {route.distance_m:.1f} m, {route.duration_s:.1f} s")
    print(f"Crossed {len(crossed)} of {len(fences)} geofences:\n")
    for fence in crossed:
        print(f"{fence.id}: {fence.name}")

if __name__ == "__main__":
    main()
