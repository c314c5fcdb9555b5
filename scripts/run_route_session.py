import asyncio
import json
import logging

from animation.scheduler import DEMO_ANIMATION_PATH
from routing.route_service import AsyncOSRMService
from session.commands import CommandStatus, RouteManager
from session.models import Role
from shapes.models import PolygonShape, PolylineShape

# Cancún, where the map demo opens
START = (21.1619, -86.8515)
END = (21.1350, -86.7460)

# a block straddling the straight line between START and END
GEOFENCE = PolygonShape(vertices=(
    (21.160, -86.820),
    (21.160, -86.800),
    (21.140, -86.800),
    (21.140, -86.820),
))

SURVEY_LINE = PolylineShape(vertices=(
    (21.150385, -86.861966),
    (21.155000, -86.850000),
    (21.161000, -86.845000),
))


def report(label, result):
    status = "OK" if result.ok else result.status.value.upper()
    detail = f" ({result.error.value})" if result.error else ""
    print(f"[{status}] {label}{detail} {result.message}")


async def run_session():
    print("=== STARTING ROUTE SESSION DEMO ===")
    manager = RouteManager(service=AsyncOSRMService())

    # 1. Place both endpoints
    manager.select_role(Role.START)
    report("start point", manager.consume_click(START))
    manager.select_role(Role.END)
    report("end point", manager.consume_click(END))

    # 2. Draw + save a geofence, then a polyline
    manager.add_drawn_shape(GEOFENCE)
    manager.add_drawn_shape(SURVEY_LINE)
    geofences = manager.save_geofences()
    report("save geofences", geofences)
    polylines = manager.save_polylines()
    report("save polylines", polylines)
    print(json.dumps(polylines.payload, indent=2))

    # 3. Route + geofence check
    result = await manager.calculate_route()
    report("calculate route", result)
    if result.ok:
        route = result.payload.route
        print(f"  {len(route.path)} points, {route.distance_m} m, {route.duration_s} s")
        for warning in result.payload.warnings:
            print(f"  {warning}")

    # 4. Predefined route (the demo polyline)
    predefined = await manager.load_predefined_route()
    report("predefined route", predefined)

    # 5. A couple of seconds of playback
    report("start animation", manager.start_route_animation(DEMO_ANIMATION_PATH))
    await asyncio.sleep(2)
    animation = manager.session.animation.animation
    print(f"  dash offset after 2s: {animation.offset}")
    report("stop animation", manager.stop_route_animation())

    # 6. Empty save is only a notice
    again = manager.save_geofences()
    assert again.status is CommandStatus.NOTICE

    report("clear all", manager.clear_all())
    print("\n=== SESSION COMPLETE ===")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(run_session())
