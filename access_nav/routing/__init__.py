"""Accessible route generation."""

from .selector import select_waypoints
from .assembler import assemble_route, order_waypoints, smooth_route
from .metrics import route_metrics
from .narrator import narrate_route
from .planner import generate_route, fallback_route

__all__ = [
    "select_waypoints",
    "assemble_route",
    "order_waypoints",
    "smooth_route",
    "route_metrics",
    "narrate_route",
    "generate_route",
    "fallback_route",
]
