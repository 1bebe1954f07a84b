"""Route export for GPS devices and map viewers."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

import gpxpy
import gpxpy.gpx

from access_nav.models import Place, RouteResult
from access_nav.routing.narrator import find_nearby_place

OSM_DIRECTIONS_URL = "https://www.openstreetmap.org/directions"


def create_gpx_track(
    result: RouteResult,
    name: str = "Accessible route",
    places: Sequence[Place] = (),
) -> str:
    """
    Create a GPX document from a generated route.

    Args:
        result: The generated route
        name: Name of the track
        places: Places to add as waypoints; only those the route passes
            within reach of are included

    Returns:
        GPX XML string
    """
    gpx = gpxpy.gpx.GPX()
    gpx.name = name
    gpx.description = f"{result.distance:.0f} m, {len(result.steps)} steps"
    gpx.creator = "AccessNav Route Planner"
    gpx.time = datetime.now(timezone.utc)

    passed = [
        place for place in places
        if any(find_nearby_place(point, [place]) for point in result.route)
    ]
    for place in passed:
        waypoint = gpxpy.gpx.GPXWaypoint(latitude=place.lat, longitude=place.lng)
        waypoint.name = place.name
        waypoint.description = ", ".join(place.accessibility_features) or None
        waypoint.type = place.place_type.value
        gpx.waypoints.append(waypoint)

    track = gpxpy.gpx.GPXTrack()
    track.name = name
    track.type = "walking"
    track.description = "\n".join(step.instruction for step in result.steps)
    gpx.tracks.append(track)

    segment = gpxpy.gpx.GPXTrackSegment()
    track.segments.append(segment)
    for lat, lng in result.route:
        segment.points.append(gpxpy.gpx.GPXTrackPoint(latitude=lat, longitude=lng))

    return gpx.to_xml()


def save_gpx_file(gpx_content: str, filepath: str | Path) -> Path:
    """Save GPX content to a file, creating parent directories."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(gpx_content, encoding="utf-8")
    return path


def default_gpx_path(output_dir: Path, name: str = "accessible_route") -> Path:
    """Timestamped file name inside output_dir."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    safe_name = "".join(c if c.isalnum() or c in "-_" else "_" for c in name)
    return output_dir / f"{safe_name}_{timestamp}.gpx"


def openstreetmap_directions_url(result: RouteResult) -> str:
    """Link that opens origin and destination in the OpenStreetMap directions view."""
    (start_lat, start_lng), (end_lat, end_lng) = result.route[0], result.route[-1]
    return (
        f"{OSM_DIRECTIONS_URL}?engine=fossgis_osrm_foot"
        f"&route={start_lat:.5f}%2C{start_lng:.5f}%3B{end_lat:.5f}%2C{end_lng:.5f}"
    )
