"""Input models for route requests."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class RouteProfile(str, Enum):
    """Travel preference used to bias waypoint ranking."""
    WHEELCHAIR = "wheelchair"
    VISUAL_AIDS = "foot-with-visual-aids"
    ACCESSIBLE = "accessible"
    NO_STEPS = "foot-no-steps"


class UserPreferences(BaseModel):
    """Stored accessibility preferences of a user."""

    mobility_aid: str | None = None
    visual_needs: bool = False
    hearing_needs: bool = False
    cognitive_needs: bool = False
    preferred_route_type: str | None = Field(
        default=None,
        description="'mostAccessible' or 'fewestSteps'"
    )

    def to_profile(self) -> RouteProfile:
        """Pick the routing profile that best fits these preferences."""
        if self.mobility_aid:
            return RouteProfile.WHEELCHAIR
        if self.visual_needs:
            return RouteProfile.VISUAL_AIDS
        if self.preferred_route_type == "mostAccessible":
            return RouteProfile.ACCESSIBLE
        if self.preferred_route_type == "fewestSteps":
            return RouteProfile.NO_STEPS
        return RouteProfile.WHEELCHAIR


class RouteRequest(BaseModel):
    """Request model for generating an accessible route."""

    origin: tuple[float, float] | str = Field(
        ...,
        description="Start as (latitude, longitude) or a place name to geocode"
    )
    destination: tuple[float, float] | str = Field(
        ...,
        description="End as (latitude, longitude) or a place name to geocode"
    )
    profile: RouteProfile = RouteProfile.WHEELCHAIR
    seed: int | None = Field(
        default=None,
        description="Seed for the smoothing jitter; fixes the generated polyline"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "origin": (13.0400, 80.2300),
                "destination": (13.0500, 80.2200),
                "profile": "wheelchair",
                "seed": None
            }
        }
    )
