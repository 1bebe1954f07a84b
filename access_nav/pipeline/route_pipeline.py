"""Route planning pipeline.

Pipeline steps:
1. Resolve origin/destination (coordinates or geocoded place names)
2. Fetch accessible places around the trip as waypoint candidates
3. Generate the route (falls back to a straight line on failure)
4. Summarize
"""

import asyncio
import logging
import random
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Optional, Sequence

import httpx
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from access_nav.config import settings
from access_nav.exceptions import AccessNavError
from access_nav.models import Place, RouteProfile, RouteRequest, RouteResult
from access_nav.routing import fallback_route, generate_route
from access_nav.routing.assembler import JITTER_DEGREES
from access_nav.tools.geocoding import resolve_location
from access_nav.tools.poi import fetch_accessible_places
from access_nav.utils.formatting import format_distance, format_duration
from access_nav.utils.geo import GeoPoint, distance_between

logger = logging.getLogger(__name__)
console = Console()

# Candidate search radius relative to the trip length, and its floor in meters
SEARCH_RADIUS_FACTOR = 1.5
MIN_SEARCH_RADIUS_M = 500


async def fetch_route_candidates(
    origin: GeoPoint,
    destination: GeoPoint,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> list[Place]:
    """
    Fetch accessible places around the trip midpoint.

    A timeout or lookup failure gives an empty list; the route is then
    generated without waypoints.
    """
    timeout = timeout if timeout is not None else settings.waypoint_timeout
    mid_lat = (origin[0] + destination[0]) / 2
    mid_lng = (origin[1] + destination[1]) / 2
    radius_m = max(distance_between(origin, destination) * SEARCH_RADIUS_FACTOR, MIN_SEARCH_RADIUS_M)

    logger.info("Searching for accessible waypoints in radius: %.0fm", radius_m)
    try:
        places = await asyncio.wait_for(
            fetch_accessible_places(mid_lat, mid_lng, radius_m, client=client),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        logger.warning("Waypoints request timed out after %.0f seconds", timeout)
        return []
    except (AccessNavError, httpx.HTTPError) as e:
        logger.warning("Error fetching accessible places for route: %s", e)
        return []

    logger.info("Found %d potential waypoints", len(places))
    return places


def build_route(
    origin: GeoPoint,
    destination: GeoPoint,
    places: Sequence[Place] = (),
    profile: RouteProfile | str = RouteProfile.WHEELCHAIR,
    rng: random.Random | None = None,
    jitter: float = JITTER_DEGREES,
) -> tuple[RouteResult, bool]:
    """Generate a route; returns (result, used_fallback)."""
    try:
        return generate_route(origin, destination, places, profile, rng=rng, jitter=jitter), False
    except Exception:
        logger.exception("Error generating route, using straight line")
        return fallback_route(origin, destination), True


async def fetch_route(
    origin: GeoPoint,
    destination: GeoPoint,
    profile: RouteProfile | str = RouteProfile.WHEELCHAIR,
    client: httpx.AsyncClient | None = None,
    rng: random.Random | None = None,
    jitter: float = JITTER_DEGREES,
) -> RouteResult:
    """Fetch waypoint candidates and generate an accessible route."""
    logger.info("Generating route from %s to %s", origin, destination)
    places = await fetch_route_candidates(origin, destination, client)
    result, _ = build_route(origin, destination, places, profile, rng=rng, jitter=jitter)
    return result


@dataclass
class RoutePlanResult:
    """Complete route planning result."""
    success: bool
    error: Optional[str] = None

    # Locations
    origin_name: str = ""
    origin: Optional[GeoPoint] = None
    destination_name: str = ""
    destination: Optional[GeoPoint] = None

    profile: str = RouteProfile.WHEELCHAIR.value
    route: Optional[RouteResult] = None
    places: list[Place] = field(default_factory=list)
    used_fallback: bool = False

    def format_summary(self) -> str:
        """Format a human-readable summary of the route."""
        if not self.success or self.route is None:
            return f"❌ Route planning failed: {self.error}"

        lines = [
            f"## ♿ Route: {self.origin_name} → {self.destination_name}",
            "",
            f"**Distance:** {format_distance(self.route.distance)}",
            f"**Walking time:** {format_duration(self.route.duration)}",
            f"**Profile:** {self.profile}",
        ]
        if self.used_fallback:
            lines.append("**Note:** direct route shown, accessible routing was unavailable")

        lines.extend(["", "### Directions", ""])
        for number, step in enumerate(self.route.steps, start=1):
            marker = "" if step.is_accessible else " ⚠️"
            lines.append(f"{number}. {step.instruction}{marker} ({step.distance}, {step.duration})")

        return "\n".join(lines)


class RoutePlanningPipeline:
    """Runs the route planning steps in sequence, optionally with a spinner."""

    def __init__(self, show_progress: bool = True, client: httpx.AsyncClient | None = None):
        self.show_progress = show_progress
        self.client = client

    async def execute(self, request: RouteRequest) -> RoutePlanResult:
        """
        Execute the full route planning pipeline.

        Args:
            request: Origin, destination, profile and optional seed

        Returns:
            RoutePlanResult with the generated route
        """
        result = RoutePlanResult(success=False, profile=request.profile.value)

        if self.show_progress:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                return await self._execute_steps(request, result, progress)
        return await self._execute_steps(request, result, None)

    async def _execute_steps(
        self,
        request: RouteRequest,
        result: RoutePlanResult,
        progress: Progress | None,
    ) -> RoutePlanResult:
        # Step 1: Resolve locations
        try:
            with _task(progress, f"📍 Finding {request.origin}..."):
                result.origin, result.origin_name = await resolve_location(request.origin, self.client)
            with _task(progress, f"📍 Finding {request.destination}..."):
                result.destination, result.destination_name = await resolve_location(
                    request.destination, self.client
                )
        except AccessNavError as e:
            result.error = str(e)
            return result

        # Step 2: Waypoint candidates
        with _task(progress, "🔎 Looking for accessible places..."):
            result.places = await fetch_route_candidates(result.origin, result.destination, self.client)

        # Step 3: Route
        with _task(progress, "🛤️ Generating accessible route..."):
            rng = random.Random(request.seed) if request.seed is not None else None
            result.route, result.used_fallback = build_route(
                result.origin, result.destination, result.places, request.profile, rng=rng
            )

        result.success = True
        return result


@contextmanager
def _task(progress: Progress | None, description: str):
    if progress is None:
        yield
        return
    task = progress.add_task(description, total=None)
    try:
        yield
    finally:
        progress.remove_task(task)
