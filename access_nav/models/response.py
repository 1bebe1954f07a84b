"""Output models: places and generated routes."""

import json
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from access_nav.utils.geo import GeoPoint


class PlaceType(str, Enum):
    """Categories for points of interest."""
    RESTAURANT = "restaurant"
    HOSPITAL = "hospital"
    EDUCATION = "education"
    TRANSPORT = "transport"
    SHOPPING = "shopping"
    OTHER = "other"


class Place(BaseModel):
    """A point of interest annotated with accessibility features."""

    id: int
    name: str
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    address: str = "Address not available"
    place_type: PlaceType = PlaceType.OTHER
    accessibility_features: list[str] = Field(default_factory=list)
    phone: str | None = None
    website: str | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    distance_km: float | None = Field(
        default=None,
        description="Distance from the user's location in km"
    )
    distance_text: str | None = None

    @field_validator("accessibility_features", mode="before")
    @classmethod
    def _parse_features(cls, value):
        # Stored rows keep the list as a JSON string
        if value is None:
            return []
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return []
            if text.startswith("["):
                return json.loads(text)
            return [part.strip() for part in text.split(",") if part.strip()]
        return value

    @property
    def point(self) -> GeoPoint:
        return (self.lat, self.lng)

    def has_feature(self, fragment: str) -> bool:
        """Case-insensitive substring match against the feature labels."""
        fragment = fragment.lower()
        return any(fragment in feature.lower() for feature in self.accessibility_features)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1005,
                "name": "Central Transit Hub",
                "lat": 13.0410,
                "lng": 80.2310,
                "address": "202 Transport Street",
                "place_type": "transport",
                "accessibility_features": ["Ramp", "Elevator", "Tactile Paving"],
                "rating": 3.9
            }
        }
    )


class RouteStep(BaseModel):
    """A single narrated instruction along the route."""

    instruction: str
    distance: str
    duration: str
    is_accessible: bool = True

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "instruction": "Turn right and continue straight",
                "distance": "350 m",
                "duration": "4 min",
                "is_accessible": True
            }
        },
    )


class RouteResult(BaseModel):
    """Complete generated route."""

    route: list[GeoPoint] = Field(default_factory=list)
    distance: float = Field(default=0, ge=0, description="Total distance in meters")
    duration: float = Field(default=0, ge=0, description="Total duration in seconds")
    steps: list[RouteStep] = Field(default_factory=list)

    @property
    def origin(self) -> GeoPoint | None:
        return self.route[0] if self.route else None

    @property
    def destination(self) -> GeoPoint | None:
        return self.route[-1] if self.route else None
