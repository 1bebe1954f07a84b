"""Shared fixtures."""

import httpx
import pytest

from access_nav.models import Place, PlaceType

ORIGIN = (13.0400, 80.2300)
DESTINATION = (13.0500, 80.2200)


def make_place(place_id, lat, lng, features=(), name=None, place_type=PlaceType.OTHER):
    return Place(
        id=place_id,
        name=name or f"Place {place_id}",
        lat=lat,
        lng=lng,
        place_type=place_type,
        accessibility_features=list(features),
    )


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by handler(request)."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def origin():
    return ORIGIN


@pytest.fixture
def destination():
    return DESTINATION


@pytest.fixture
def overpass_payload():
    return {
        "version": 0.6,
        "generator": "Overpass API",
        "elements": [
            {
                "type": "node",
                "id": 101,
                "lat": 13.0450,
                "lon": 80.2250,
                "tags": {
                    "name": "Ramp Cafe",
                    "amenity": "cafe",
                    "wheelchair": "yes",
                    "ramp": "yes",
                    "addr:housenumber": "12",
                    "addr:street": "Beach Road",
                    "addr:city": "Chennai",
                    "phone": "+91 44 1234",
                },
            },
            {"type": "node", "id": 102, "lat": 13.0, "lon": 80.0},
            {"type": "way", "id": 103, "nodes": [1, 2], "tags": {"wheelchair": "yes"}},
            {
                "type": "node",
                "id": 104,
                "lat": 13.0460,
                "lon": 80.2240,
                "tags": {"shop": "supermarket", "wheelchair": "limited", "elevator": "yes"},
            },
        ],
    }
