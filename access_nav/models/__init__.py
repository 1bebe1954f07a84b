"""Data models for accessible routing."""

from .request import RouteRequest, RouteProfile, UserPreferences
from .response import (
    Place,
    PlaceType,
    RouteStep,
    RouteResult,
)

__all__ = [
    "RouteRequest",
    "RouteProfile",
    "UserPreferences",
    "Place",
    "PlaceType",
    "RouteStep",
    "RouteResult",
]
