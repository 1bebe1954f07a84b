"""Utility functions for accessible routing."""

from .geo import haversine_distance, distance_between, heading
from .formatting import format_distance, format_duration

__all__ = [
    "haversine_distance",
    "distance_between",
    "heading",
    "format_distance",
    "format_duration",
]
