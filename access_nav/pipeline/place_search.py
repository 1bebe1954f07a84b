"""Place search and nearby listings around a location."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

import httpx

from access_nav.exceptions import AccessNavError
from access_nav.models import Place, PlaceType
from access_nav.tools.geocoding import resolve_location
from access_nav.tools.poi import fetch_accessible_places, filter_places, rank_nearby, search_places
from access_nav.utils.geo import GeoPoint

logger = logging.getLogger(__name__)

NEARBY_MAX_DISTANCE_KM = 5


@dataclass
class PlaceSearchResult:
    """Places found around a resolved location, nearest first."""
    success: bool
    error: Optional[str] = None

    location_name: str = ""
    location: Optional[GeoPoint] = None
    query: str = ""
    places: list[Place] = field(default_factory=list)

    def format_summary(self) -> str:
        if not self.success:
            return f"❌ Place search failed: {self.error}"

        title = f'Results for "{self.query}"' if self.query else "Accessible places nearby"
        lines = [f"## 📍 {title} near {self.location_name}", ""]

        if not self.places:
            lines.append("No accessible places found.")
            return "\n".join(lines)

        for number, place in enumerate(self.places, start=1):
            features = ", ".join(place.accessibility_features) or "no features listed"
            lines.append(
                f"{number}. **{place.name}** ({place.place_type.value}, {place.distance_text}): {features}"
            )
        return "\n".join(lines)


async def find_places(
    query: str,
    near: GeoPoint | str,
    client: httpx.AsyncClient | None = None,
    place_type: PlaceType | str | None = None,
    features: Iterable[str] = (),
) -> PlaceSearchResult:
    """Search places by name around `near` and filter by type and features."""
    result = PlaceSearchResult(success=False, query=query)
    try:
        result.location, result.location_name = await resolve_location(near, client)
    except AccessNavError as e:
        result.error = str(e)
        return result

    lat, lng = result.location
    places = await search_places(query, lat, lng, client=client)
    result.places = rank_nearby(filter_places(places, place_type=place_type, features=features), lat, lng)
    logger.info("Search %r found %d places", query, len(result.places))

    result.success = True
    return result


async def find_nearby(
    near: GeoPoint | str,
    client: httpx.AsyncClient | None = None,
    max_distance_km: float = NEARBY_MAX_DISTANCE_KM,
    place_type: PlaceType | str | None = None,
    features: Iterable[str] = (),
) -> PlaceSearchResult:
    """List accessible places within `max_distance_km` of `near`, nearest first."""
    result = PlaceSearchResult(success=False)
    try:
        result.location, result.location_name = await resolve_location(near, client)
    except AccessNavError as e:
        result.error = str(e)
        return result

    lat, lng = result.location
    places = await fetch_accessible_places(lat, lng, client=client)
    result.places = rank_nearby(
        filter_places(places, place_type=place_type, features=features),
        lat,
        lng,
        max_distance_km=max_distance_km,
    )

    result.success = True
    return result
