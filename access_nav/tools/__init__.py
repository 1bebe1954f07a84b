"""Clients for map data, geocoding and route export."""

from .poi import (
    fetch_accessible_places,
    search_places,
    filter_places,
    rank_nearby,
)
from .geocoding import geocode_location, resolve_location
from .export import create_gpx_track, save_gpx_file

__all__ = [
    "fetch_accessible_places",
    "search_places",
    "filter_places",
    "rank_nearby",
    "geocode_location",
    "resolve_location",
    "create_gpx_track",
    "save_gpx_file",
]
