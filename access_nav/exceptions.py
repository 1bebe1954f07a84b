"""Errors raised by the map data and geocoding clients."""


class AccessNavError(Exception):
    """Base error for map data and geocoding lookups."""


class OverpassError(AccessNavError):
    """The Overpass API could not answer a query."""


class GeocodingError(AccessNavError):
    """A place name could not be resolved to coordinates."""
