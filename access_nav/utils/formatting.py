"""Human readable distance and duration strings."""

from math import floor


def _round_half_up(value: float) -> int:
    return int(floor(value + 0.5))


def format_distance(meters: float) -> str:
    """950 -> '950 m', 1500 -> '1.5 km'."""
    if meters < 1000:
        return f"{_round_half_up(meters)} m"
    return f"{meters / 1000:.1f} km"


def format_duration(seconds: float) -> str:
    """Round to whole minutes; 45 -> '1 min', 3660 -> '1 hr 1 min'."""
    minutes = _round_half_up(seconds / 60)
    if minutes < 60:
        return f"{minutes} min"
    hours, remaining = divmod(minutes, 60)
    return f"{hours} hr {remaining} min"


def format_km_away(kilometers: float) -> str:
    """Label used for nearby place listings."""
    return f"{kilometers:.1f} km away"
