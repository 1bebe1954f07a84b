"""Turn-by-turn instructions for a generated polyline.

The polyline is sampled every `STRIDE` vertices. A sample becomes a
checkpoint when the heading to the next sample differs from the last
announced heading by more than `TURN_THRESHOLD_DEGREES`, or when a known
accessible place lies within `PLACE_RADIUS_M` of it. Each checkpoint yields
one instruction covering the stretch walked since the previous checkpoint.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

from access_nav.models import Place, RouteStep
from access_nav.routing.metrics import walking_time
from access_nav.utils.formatting import format_distance, format_duration
from access_nav.utils.geo import (
    GeoPoint,
    compass_direction,
    distance_between,
    heading,
    heading_difference,
    path_length,
    turn_direction,
)

STRIDE = 5
TURN_THRESHOLD_DEGREES = 30
PLACE_RADIUS_M = 100

ARRIVAL_INSTRUCTION = "Arrive at your destination"


@dataclass
class Checkpoint:
    index: int
    direction: str | None = None
    place: Place | None = None


def find_nearby_place(point: GeoPoint, places: Iterable[Place], max_distance: float = PLACE_RADIUS_M) -> Place | None:
    """First place within max_distance meters of point, if any."""
    for place in places:
        if distance_between(point, place.point) <= max_distance:
            return place
    return None


def _step(instruction: str, meters: float, is_accessible: bool = True) -> RouteStep:
    return RouteStep(
        instruction=instruction,
        distance=format_distance(meters),
        duration=format_duration(walking_time(meters)),
        is_accessible=is_accessible,
    )


def find_checkpoints(route: Sequence[GeoPoint], places: Sequence[Place] = ()) -> list[Checkpoint]:
    """Scan the polyline for turns and nearby places, in route order."""
    last = len(route) - 1
    if last < 0:
        return []

    checkpoints = []
    last_heading = heading(route[0], route[min(STRIDE, last)])

    for i in range(STRIDE, len(route) - STRIDE, STRIDE):
        current_heading = heading(route[i], route[min(i + STRIDE, last)])

        if heading_difference(last_heading, current_heading) > TURN_THRESHOLD_DEGREES:
            relative = (current_heading - last_heading) % 360
            checkpoints.append(Checkpoint(index=i, direction=turn_direction(relative)))
            last_heading = current_heading

        nearby = find_nearby_place(route[i], places)
        if nearby is not None:
            checkpoints.append(Checkpoint(index=i, place=nearby))

    return checkpoints


def narrate_route(route: Sequence[GeoPoint], places: Sequence[Place] = ()) -> list[RouteStep]:
    """
    Generate the instruction list for a route.

    Always starts with a "Head <direction>" step and ends with the arrival
    step, even when the route is too short to contain any checkpoints.
    """
    if not route:
        return [_step(ARRIVAL_INSTRUCTION, 0)]

    first_leg_end = route[min(STRIDE, len(route) - 1)]
    steps = [
        _step(
            f"Head {compass_direction(heading(route[0], first_leg_end))} on your route",
            distance_between(route[0], first_leg_end),
        )
    ]

    last_index = 0
    for checkpoint in find_checkpoints(route, places):
        meters = path_length(route[last_index:checkpoint.index + 1])

        if checkpoint.place is not None:
            place = checkpoint.place
            features = ", ".join(place.accessibility_features)
            steps.append(_step(
                f"Continue past {place.name}. Note: {features} available.",
                meters,
                is_accessible=len(place.accessibility_features) > 0,
            ))
        else:
            steps.append(_step(f"Turn {checkpoint.direction} and continue straight", meters))

        last_index = checkpoint.index

    steps.append(_step(ARRIVAL_INSTRUCTION, path_length(route[last_index:])))
    return steps
