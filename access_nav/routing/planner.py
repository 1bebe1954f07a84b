"""Route generation: selection, assembly, metrics and narration in one call."""

import logging
import random
from typing import Sequence

from access_nav.models import Place, RouteProfile, RouteResult, RouteStep
from access_nav.routing.assembler import JITTER_DEGREES, assemble_route
from access_nav.routing.metrics import route_metrics
from access_nav.routing.narrator import ARRIVAL_INSTRUCTION, narrate_route
from access_nav.routing.selector import select_waypoints
from access_nav.utils.formatting import format_distance, format_duration
from access_nav.utils.geo import GeoPoint, interpolate

logger = logging.getLogger(__name__)

FALLBACK_SEGMENTS = 10


def generate_route(
    origin: GeoPoint,
    destination: GeoPoint,
    places: Sequence[Place] = (),
    profile: RouteProfile | str = RouteProfile.WHEELCHAIR,
    rng: random.Random | None = None,
    jitter: float = JITTER_DEGREES,
) -> RouteResult:
    """
    Generate an accessible walking route between two points.

    Args:
        origin: Start (lat, lon)
        destination: End (lat, lon)
        places: Candidate accessible places already fetched for the area
        profile: Travel profile; only affects which places are preferred
        rng: Random source for the smoothing jitter
        jitter: Jitter magnitude in degrees; 0 makes the route deterministic

    Returns:
        RouteResult with polyline, distance (m), duration (s) and steps
    """
    logger.debug("Generating %s route from %s to %s", profile, origin, destination)

    waypoints = select_waypoints(origin, destination, places, profile)
    logger.debug("Selected %d waypoints", len(waypoints))

    route = assemble_route(origin, destination, waypoints, rng=rng, jitter=jitter)
    distance, duration = route_metrics(route)
    steps = narrate_route(route, places)

    logger.info(
        "Route generated: %d points, %.0fm, %d steps",
        len(route), distance, len(steps),
    )

    return RouteResult(route=route, distance=distance, duration=duration, steps=steps)


def fallback_route(origin: GeoPoint, destination: GeoPoint) -> RouteResult:
    """Straight line route used when nothing better can be produced."""
    route = [origin]
    route.extend(
        interpolate(origin, destination, i / FALLBACK_SEGMENTS)
        for i in range(1, FALLBACK_SEGMENTS)
    )
    route.append(destination)

    distance, duration = route_metrics(route)

    return RouteResult(
        route=route,
        distance=distance,
        duration=duration,
        steps=[
            RouteStep(
                instruction="Head toward your destination",
                distance=format_distance(distance),
                duration=format_duration(duration),
            ),
            RouteStep(instruction=ARRIVAL_INSTRUCTION, distance="0 m", duration="0 min"),
        ],
    )
