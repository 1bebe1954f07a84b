"""Simple intent parser for route requests.

Handles common patterns like:
- "from 13.04,80.23 to 13.05,80.22"
- "Chennai Central to Marina Beach by wheelchair"
- "from Home to Library, fewest steps, seed 7"
"""

import re
from typing import Optional

from access_nav.models import RouteProfile, RouteRequest
from access_nav.tools.geocoding import parse_coordinates

# Words that end the destination part of a request
_OPTION_START = r'(?=\s*(?:,|\bby\b|\bwith\b|\busing\b|\bfor\b|\bseed\b)|\s*[.!?]?\s*$)'

# Coordinate pairs first so their comma isn't taken as an option separator
_LOCATION = r'(?:-?\d+(?:\.\d+)?\s*,\s*-?\d+(?:\.\d+)?|.+?)'

_FROM_TO = re.compile(
    rf'\bfrom\s+(?P<start>{_LOCATION})\s+to\s+(?P<end>{_LOCATION}){_OPTION_START}',
    re.IGNORECASE,
)
_X_TO_Y = re.compile(
    rf'^\s*(?P<start>{_LOCATION})\s+to\s+(?P<end>{_LOCATION}){_OPTION_START}',
    re.IGNORECASE,
)
_SEED = re.compile(r'\bseed\s*(\d+)', re.IGNORECASE)

# Checked in order; first match wins
PROFILE_KEYWORDS = [
    (("wheelchair", "mobility aid"), RouteProfile.WHEELCHAIR),
    (("visual", "blind", "low vision", "sight"), RouteProfile.VISUAL_AIDS),
    (("no steps", "fewest steps", "step-free", "step free", "without steps"), RouteProfile.NO_STEPS),
    (("most accessible", "accessible route"), RouteProfile.ACCESSIBLE),
]


def _location(text: str) -> tuple[float, float] | str:
    cleaned = text.strip().rstrip(".!?").strip()
    coords = parse_coordinates(cleaned)
    return coords if coords is not None else cleaned


def parse_profile(user_input: str, default: RouteProfile = RouteProfile.WHEELCHAIR) -> RouteProfile:
    text = user_input.lower()
    for keywords, profile in PROFILE_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return profile
    return default


def parse_route_request(user_input: str) -> Optional[RouteRequest]:
    """
    Regex-based parser turning a free text request into a RouteRequest.

    Returns None when no "X to Y" structure can be found.
    """
    match = _FROM_TO.search(user_input) or _X_TO_Y.search(user_input)
    if not match:
        return None

    start = _location(match.group("start"))
    end = _location(match.group("end"))
    if not start or not end:
        return None

    seed_match = _SEED.search(user_input)

    return RouteRequest(
        origin=start,
        destination=end,
        profile=parse_profile(user_input),
        seed=int(seed_match.group(1)) if seed_match else None,
    )
