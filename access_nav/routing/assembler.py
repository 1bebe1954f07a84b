"""Turn selected waypoints into a drawable polyline."""

import random
from typing import Sequence

from access_nav.models import Place
from access_nav.utils.geo import GeoPoint, distance_between, interpolate

# Extra points inserted between consecutive vertices
SMOOTHING_POINTS = 4
# Cosmetic perturbation of smoothing points, in degrees
JITTER_DEGREES = 0.00025


def order_waypoints(origin: GeoPoint, waypoints: Sequence[Place]) -> list[Place]:
    """
    Order waypoints greedily: always walk to the nearest unvisited one.

    Cheap and not optimal, but there are never more than a handful.
    """
    remaining = list(waypoints)
    ordered = []
    current = origin

    while remaining:
        closest_index = 0
        closest_distance = float("inf")
        for index, place in enumerate(remaining):
            distance = distance_between(current, place.point)
            if distance < closest_distance:
                closest_distance = distance
                closest_index = index

        nearest = remaining.pop(closest_index)
        ordered.append(nearest)
        current = nearest.point

    return ordered


def smooth_route(
    vertices: Sequence[GeoPoint],
    rng: random.Random | None = None,
    jitter: float = JITTER_DEGREES,
    points_per_segment: int = SMOOTHING_POINTS,
) -> list[GeoPoint]:
    """
    Insert slightly jittered intermediate points between each vertex pair.

    The original vertices are passed through untouched.
    """
    if not vertices:
        return []

    rng = rng or random.Random()
    smoothed = [vertices[0]]

    for start, end in zip(vertices, vertices[1:]):
        for k in range(1, points_per_segment + 1):
            lat, lng = interpolate(start, end, k / (points_per_segment + 1))
            if jitter:
                lat += rng.uniform(-jitter, jitter)
                lng += rng.uniform(-jitter, jitter)
            smoothed.append((lat, lng))
        smoothed.append(end)

    return smoothed


def assemble_route(
    origin: GeoPoint,
    destination: GeoPoint,
    waypoints: Sequence[Place] = (),
    rng: random.Random | None = None,
    jitter: float = JITTER_DEGREES,
) -> list[GeoPoint]:
    """Build origin -> waypoints (nearest first) -> destination, smoothed."""
    vertices = [origin]
    vertices.extend(place.point for place in order_waypoints(origin, waypoints))
    vertices.append(destination)
    return smooth_route(vertices, rng=rng, jitter=jitter)
