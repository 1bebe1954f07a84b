"""Waypoint selection: accessible places that lie roughly on the way."""

import logging
from typing import Iterable

from access_nav.models import Place, RouteProfile
from access_nav.utils.geo import GeoPoint, distance_between

logger = logging.getLogger(__name__)

# Via-place path may be at most 20% longer than the direct path
MAX_DETOUR_RATIO = 1.2
MAX_WAYPOINTS = 5


def detour_length(origin: GeoPoint, destination: GeoPoint, place: Place) -> float:
    """Length in meters of origin -> place -> destination."""
    return distance_between(origin, place.point) + distance_between(place.point, destination)


def is_on_the_way(origin: GeoPoint, destination: GeoPoint, place: Place) -> bool:
    direct = distance_between(origin, destination)
    return detour_length(origin, destination, place) <= direct * MAX_DETOUR_RATIO


def select_waypoints(
    origin: GeoPoint,
    destination: GeoPoint,
    places: Iterable[Place],
    profile: RouteProfile | str = RouteProfile.WHEELCHAIR,
    limit: int = MAX_WAYPOINTS,
) -> list[Place]:
    """
    Pick the best accessible places to route through.

    Candidates outside the detour band are dropped. The rest are ranked by
    number of accessibility features, then (wheelchair profile only) by
    having a ramp, then by how little they lengthen the trip.

    Returns:
        At most `limit` places, best first
    """
    direct = distance_between(origin, destination)
    wants_ramp = profile == RouteProfile.WHEELCHAIR

    ranked = []
    for place in places:
        via = detour_length(origin, destination, place)
        if via > direct * MAX_DETOUR_RATIO:
            continue
        ramp_rank = 0 if wants_ramp and place.has_feature("ramp") else 1
        ranked.append(((-len(place.accessibility_features), ramp_rank, via - direct), place))

    logger.debug("%d places lie within the detour band", len(ranked))

    ranked.sort(key=lambda item: item[0])
    return [place for _, place in ranked[:limit]]
