"""Place name lookup using Nominatim (OpenStreetMap) - no API key required."""

import logging
import re

import httpx

from access_nav.config import settings
from access_nav.exceptions import GeocodingError
from access_nav.utils.geo import GeoPoint

logger = logging.getLogger(__name__)

COORDINATES_RE = re.compile(r'^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$')

USER_AGENT = "AccessNav-Route-Planner/1.0"


def parse_coordinates(text: str) -> GeoPoint | None:
    """Parse 'lat,lng' text; None if it isn't a valid coordinate pair."""
    match = COORDINATES_RE.match(text)
    if not match:
        return None
    lat, lng = float(match.group(1)), float(match.group(2))
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        return None
    return (lat, lng)


async def geocode_location(
    location_name: str,
    client: httpx.AsyncClient | None = None,
) -> tuple[GeoPoint, str]:
    """
    Convert a place name or address to coordinates.

    Returns:
        ((lat, lng), display name)

    Raises:
        GeocodingError: if the lookup fails or finds nothing
    """
    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await geocode_location(location_name, own_client)

    try:
        response = await client.get(
            f"{settings.nominatim_url}/search",
            params={
                "q": location_name,
                "format": "json",
                "limit": 1,
            },
            headers={
                "User-Agent": USER_AGENT
            },
            timeout=30.0,
        )
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        raise GeocodingError(f"Geocoding failed for {location_name!r}: {e}") from e

    if not data:
        raise GeocodingError(f"Could not find location: {location_name}")

    result = data[0]
    logger.debug("Geocoded %r to %s,%s", location_name, result["lat"], result["lon"])

    return (
        (float(result["lat"]), float(result["lon"])),
        result.get("display_name", location_name)[:50],
    )


async def resolve_location(
    location: GeoPoint | str,
    client: httpx.AsyncClient | None = None,
) -> tuple[GeoPoint, str]:
    """Accept coordinates, 'lat,lng' text or a place name."""
    if not isinstance(location, str):
        return (location[0], location[1]), f"{location[0]:.5f},{location[1]:.5f}"

    coords = parse_coordinates(location)
    if coords is not None:
        return coords, location.strip()

    return await geocode_location(location, client)
