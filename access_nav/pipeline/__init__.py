"""Route planning pipeline, place search and request parsing."""

from .route_pipeline import RoutePlanningPipeline, RoutePlanResult, fetch_route
from .place_search import PlaceSearchResult, find_nearby, find_places
from .intent_parser import parse_route_request

__all__ = [
    "RoutePlanningPipeline",
    "RoutePlanResult",
    "fetch_route",
    "PlaceSearchResult",
    "find_nearby",
    "find_places",
    "parse_route_request",
]
