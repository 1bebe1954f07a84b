"""Accessible places from the OpenStreetMap Overpass API."""

import asyncio
import logging
from typing import Iterable

import httpx

from access_nav.config import settings
from access_nav.exceptions import OverpassError
from access_nav.models import Place, PlaceType
from access_nav.utils.formatting import format_km_away
from access_nav.utils.geo import haversine_distance

logger = logging.getLogger(__name__)

# (tag, value) -> feature label, in display order
FEATURE_TAGS = [
    ("wheelchair", "yes", "Wheelchair Access"),
    ("wheelchair", "limited", "Limited Wheelchair Access"),
    ("wheelchair_toilet", "yes", "Accessible Washroom"),
    ("tactile_paving", "yes", "Tactile Paving"),
    ("handrail", "yes", "Handrails"),
    ("ramp", "yes", "Ramp"),
    ("elevator", "yes", "Elevator"),
]

AMENITY_TYPES = {
    "restaurant": PlaceType.RESTAURANT,
    "cafe": PlaceType.RESTAURANT,
    "hospital": PlaceType.HOSPITAL,
    "clinic": PlaceType.HOSPITAL,
    "doctors": PlaceType.HOSPITAL,
    "school": PlaceType.EDUCATION,
    "university": PlaceType.EDUCATION,
    "college": PlaceType.EDUCATION,
    "bus_station": PlaceType.TRANSPORT,
    "train_station": PlaceType.TRANSPORT,
}


def _accessible_places_query(lat: float, lng: float, radius_m: float) -> str:
    around = f"(around:{radius_m:.0f},{lat},{lng})"
    selectors = [
        'node["wheelchair"="yes"]',
        'node["wheelchair"="limited"]',
        'node["tactile_paving"="yes"]',
        'node["amenity"]',
        'way["wheelchair"="yes"]',
        'way["wheelchair"="limited"]',
        'node["shop"]',
    ]
    return f"""
    [out:json][timeout:60];
    (
        {' '.join(selector + around + ';' for selector in selectors)}
    );
    out body;
    >;
    out skel qt;
    """


def _search_query(text: str, lat: float, lng: float, radius_m: float) -> str:
    around = f"(around:{radius_m:.0f},{lat},{lng})"
    pattern = text.replace("\\", "\\\\").replace('"', '\\"')
    return f"""
    [out:json][timeout:60];
    (
        node["name"~"{pattern}", i]{around};
        way["name"~"{pattern}", i]{around};
        relation["name"~"{pattern}", i]{around};
    );
    out body;
    >;
    out skel qt;
    """


async def query_overpass(
    query: str,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
    max_retries: int | None = None,
    backoff: float = 5.0,
) -> dict:
    """
    POST a query to Overpass and return the decoded JSON.

    Retries on 429/504, sleeping backoff * attempt seconds in between.

    Raises:
        OverpassError: on other error statuses, transport errors or
            when retries are exhausted
    """
    timeout = timeout if timeout is not None else settings.overpass_timeout
    max_retries = max_retries if max_retries is not None else settings.overpass_max_retries

    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await query_overpass(query, own_client, timeout, max_retries, backoff)

    for attempt in range(max_retries):
        if attempt > 0:
            await asyncio.sleep(backoff * attempt)
        try:
            response = await client.post(
                settings.overpass_url,
                data={"data": query},
                headers={"Accept": "application/json"},
                timeout=timeout,
            )
        except httpx.TimeoutException as e:
            raise OverpassError("Overpass API request timed out") from e
        except httpx.HTTPError as e:
            raise OverpassError(f"Overpass API request failed: {e}") from e

        if response.status_code == 200:
            try:
                return response.json()
            except ValueError as e:
                raise OverpassError("Overpass API returned invalid JSON") from e
        if response.status_code in (429, 504):
            logger.info("Overpass busy (%d), attempt %d/%d", response.status_code, attempt + 1, max_retries)
            continue
        raise OverpassError(f"Overpass API error: {response.status_code} {response.reason_phrase}")

    raise OverpassError("Overpass API busy, max retries exceeded")


def place_from_element(element: dict) -> Place | None:
    """Convert an Overpass element into a Place; None if it has no position or tags."""
    tags = element.get("tags")
    lat = element.get("lat")
    lon = element.get("lon")
    if not tags or lat is None or lon is None:
        return None

    features = [label for tag, value, label in FEATURE_TAGS if tags.get(tag) == value]

    place_type = AMENITY_TYPES.get(tags.get("amenity"), PlaceType.OTHER)
    if place_type is PlaceType.OTHER and tags.get("shop"):
        place_type = PlaceType.SHOPPING

    street = tags.get("addr:street")
    if street:
        address = f"{tags.get('addr:housenumber', '')} {street}, {tags.get('addr:city', '')}".strip()
    else:
        address = "Address not available"

    rating = None
    if tags.get("wheelchair") == "yes":
        rating = 4.5
    elif tags.get("wheelchair") == "limited":
        rating = 3.5

    return Place(
        id=element["id"],
        name=tags.get("name", f"Place {element['id']}"),
        lat=lat,
        lng=lon,
        address=address,
        place_type=place_type,
        accessibility_features=features,
        phone=tags.get("phone"),
        website=tags.get("website"),
        rating=rating,
    )


def places_from_response(data: dict) -> list[Place]:
    places = []
    for element in data.get("elements", []):
        place = place_from_element(element)
        if place is not None:
            places.append(place)
    return places


async def fetch_accessible_places(
    lat: float,
    lng: float,
    radius_m: float | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[Place]:
    """
    Fetch places with accessibility information around a location.

    Falls back to sample places around the location when Overpass fails.
    """
    radius_m = radius_m or settings.nearby_radius_m
    logger.info("Fetching accessible places within %.0fm of %.5f,%.5f", radius_m, lat, lng)

    try:
        data = await query_overpass(_accessible_places_query(lat, lng, radius_m), client)
    except OverpassError as e:
        logger.warning("%s; using fallback places", e)
        return fallback_places(lat, lng)

    places = places_from_response(data)
    logger.info("Received %d places from Overpass", len(places))
    return places


async def search_places(
    text: str,
    lat: float,
    lng: float,
    radius_m: float | None = None,
    client: httpx.AsyncClient | None = None,
    cached: Iterable[Place] | None = None,
) -> list[Place]:
    """
    Search places by name near a location.

    When Overpass fails, previously loaded places are filtered by substring;
    without any, a small set of sample results is returned.
    """
    radius_m = radius_m or settings.search_radius_m

    try:
        data = await query_overpass(_search_query(text, lat, lng, radius_m), client)
    except OverpassError as e:
        logger.warning("Search failed: %s", e)
        if cached is not None:
            return filter_places(cached, text)
        return fallback_search_results(text, lat, lng)

    return places_from_response(data)


def filter_places(
    places: Iterable[Place],
    text: str = "",
    place_type: PlaceType | str | None = None,
    features: Iterable[str] = (),
) -> list[Place]:
    """
    Client-side filtering of already loaded places.

    text matches name, address or type as a case-insensitive substring;
    features keeps places offering any of the given labels.
    """
    needle = text.lower().strip()
    wanted = set(features)
    matches = []

    for place in places:
        if needle and not (
            needle in place.name.lower()
            or needle in place.address.lower()
            or needle in place.place_type.value
        ):
            continue
        if place_type and place.place_type != place_type:
            continue
        if wanted and not wanted.intersection(place.accessibility_features):
            continue
        matches.append(place)

    return matches


def rank_nearby(
    places: Iterable[Place],
    lat: float,
    lng: float,
    max_distance_km: float | None = None,
) -> list[Place]:
    """Annotate places with their distance from (lat, lng) and sort nearest first."""
    annotated = []
    for place in places:
        dist_km = haversine_distance(lat, lng, place.lat, place.lng) / 1000
        if max_distance_km is not None and dist_km > max_distance_km:
            continue
        annotated.append(place.model_copy(update={
            "distance_km": dist_km,
            "distance_text": format_km_away(dist_km),
        }))

    annotated.sort(key=lambda p: p.distance_km)
    return annotated


def fallback_places(lat: float, lng: float) -> list[Place]:
    """Sample places around a location, used when Overpass is unavailable."""
    return [
        Place(
            id=1001, name="Accessible Restaurant",
            lat=lat + 0.002, lng=lng + 0.003, address="123 Main Street",
            place_type=PlaceType.RESTAURANT,
            accessibility_features=["Wheelchair Access", "Ramp", "Accessible Washroom"],
            rating=4.5,
        ),
        Place(
            id=1002, name="Community Hospital",
            lat=lat - 0.001, lng=lng + 0.002, address="456 Health Avenue",
            place_type=PlaceType.HOSPITAL,
            accessibility_features=["Elevator", "Wheelchair Access", "Handrails"],
            rating=4.2,
        ),
        Place(
            id=1003, name="Inclusive Learning Center",
            lat=lat + 0.003, lng=lng - 0.001, address="789 Education Road",
            place_type=PlaceType.EDUCATION,
            accessibility_features=["Ramp", "Elevator", "Tactile Paving"],
            rating=4.0,
        ),
        Place(
            id=1004, name="Accessible Shopping Mall",
            lat=lat - 0.002, lng=lng - 0.002, address="101 Retail Boulevard",
            place_type=PlaceType.SHOPPING,
            accessibility_features=["Wheelchair Access", "Elevator", "Accessible Washroom"],
            rating=4.3,
        ),
        Place(
            id=1005, name="Central Transit Hub",
            lat=lat + 0.001, lng=lng + 0.001, address="202 Transport Street",
            place_type=PlaceType.TRANSPORT,
            accessibility_features=["Ramp", "Elevator", "Tactile Paving", "Wheelchair Access"],
            rating=3.9,
        ),
    ]


def fallback_search_results(text: str, lat: float, lng: float) -> list[Place]:
    """Keyword-driven sample search results."""
    query = text.lower()
    results = []

    if any(word in query for word in ("restaurant", "food", "eat")):
        results.append(Place(
            id=2001, name="Accessible Dining",
            lat=lat + 0.002, lng=lng + 0.001, address="123 Food Street",
            place_type=PlaceType.RESTAURANT,
            accessibility_features=["Wheelchair Access", "Ramp", "Accessible Washroom"],
            rating=4.3,
        ))

    if any(word in query for word in ("hospital", "doctor", "medical")):
        results.append(Place(
            id=2002, name="Community Medical Center",
            lat=lat - 0.001, lng=lng + 0.003, address="456 Health Boulevard",
            place_type=PlaceType.HOSPITAL,
            accessibility_features=["Elevator", "Wheelchair Access", "Handrails"],
            rating=4.5,
        ))

    if any(word in query for word in ("school", "college", "university")):
        results.append(Place(
            id=2003, name="Accessible Learning Institute",
            lat=lat + 0.003, lng=lng - 0.002, address="789 Education Avenue",
            place_type=PlaceType.EDUCATION,
            accessibility_features=["Ramp", "Elevator", "Tactile Paving"],
            rating=4.1,
        ))

    if not results:
        results.append(Place(
            id=2004, name=f'Search result for "{text}"',
            lat=lat + 0.002, lng=lng - 0.001, address="123 Main Street",
            place_type=PlaceType.OTHER,
            accessibility_features=["Wheelchair Access"],
            rating=3.8,
        ))

    return results
