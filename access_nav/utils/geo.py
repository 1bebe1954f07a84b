"""Geospatial utility functions."""

from math import radians, sin, cos, sqrt, atan2, degrees
from typing import Sequence

GeoPoint = tuple[float, float]

EARTH_RADIUS_M = 6_371_000

COMPASS_POINTS = [
    "north", "northeast", "east", "southeast",
    "south", "southwest", "west", "northwest",
]


def haversine_distance(
    lat1: float, lon1: float,
    lat2: float, lon2: float,
) -> float:
    """
    Calculate the great-circle distance between two points on Earth.

    Args:
        lat1, lon1: First point coordinates in degrees
        lat2, lon2: Second point coordinates in degrees

    Returns:
        Distance in meters
    """
    lat1_rad, lat2_rad = radians(lat1), radians(lat2)

    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)

    a = sin(dlat/2)**2 + cos(lat1_rad) * cos(lat2_rad) * sin(dlon/2)**2
    c = 2 * atan2(sqrt(a), sqrt(1-a))

    return EARTH_RADIUS_M * c


def distance_between(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance in meters between two (lat, lon) points."""
    return haversine_distance(a[0], a[1], b[0], b[1])


def path_length(points: Sequence[GeoPoint]) -> float:
    """Sum of segment distances along a polyline, in meters."""
    return sum(
        distance_between(points[i - 1], points[i])
        for i in range(1, len(points))
    )


def heading(origin: GeoPoint, target: GeoPoint) -> float:
    """
    Heading from origin to target in degrees (0-360, clockwise from north).

    Uses raw latitude/longitude deltas rather than a great-circle bearing,
    which is plenty for the short legs of a walking route. Coincident
    points give 0 (north).
    """
    angle = degrees(atan2(target[1] - origin[1], target[0] - origin[0]))
    if angle < 0:
        angle += 360
    return angle


def heading_difference(first: float, second: float) -> float:
    """Absolute difference between two headings, wrapped to 0-180."""
    diff = abs(first - second)
    return 360 - diff if diff > 180 else diff


def compass_direction(angle: float) -> str:
    """Name of the nearest of the eight compass points."""
    return COMPASS_POINTS[int((angle % 360) / 45 + 0.5) % 8]


def turn_direction(relative_angle: float) -> str:
    """
    Describe a turn given the clockwise change of heading in degrees.

    0-180 turns right, 180-360 turns left.
    """
    if relative_angle < 45:
        return "slightly right"
    if relative_angle < 90:
        return "right"
    if relative_angle < 135:
        return "sharp right"
    if relative_angle < 225:
        return "around"
    if relative_angle < 270:
        return "sharp left"
    if relative_angle < 315:
        return "left"
    return "slightly left"


def interpolate(a: GeoPoint, b: GeoPoint, fraction: float) -> GeoPoint:
    """Linear interpolation between two points in degree space."""
    return (
        a[0] + (b[0] - a[0]) * fraction,
        a[1] + (b[1] - a[1]) * fraction,
    )
