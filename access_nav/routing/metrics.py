"""Route distance and walking time."""

from typing import Sequence

from access_nav.utils.geo import GeoPoint, path_length

# Assumed constant walking speed in m/s
WALKING_SPEED_MPS = 1.4


def walking_time(meters: float) -> float:
    """Seconds needed to walk the given distance."""
    return meters / WALKING_SPEED_MPS


def route_metrics(route: Sequence[GeoPoint]) -> tuple[float, float]:
    """Return (distance in meters, duration in seconds) along the polyline."""
    distance = path_length(route)
    return distance, walking_time(distance)
