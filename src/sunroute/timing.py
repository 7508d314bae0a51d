"""Flight timing: distance, duration, and the wall-clock time at a route fraction."""

import math
from datetime import datetime, timedelta

from sunroute.models import GeoPoint
from sunroute.route import arc_angle

EARTH_RADIUS_KM = 6371.0
MS_PER_HOUR = 3_600_000


def great_circle_distance_km(
    departure: GeoPoint, arrival: GeoPoint, earth_radius_km: float = EARTH_RADIUS_KM
) -> float:
    """Surface distance along the great circle (haversine-equivalent), in km."""
    return earth_radius_km * math.radians(arc_angle(departure, arrival))


def duration_ms(distance_km: float, cruise_speed_kmh: float) -> float:
    """Flight time in milliseconds at a constant cruise speed.

    Raises:
        ValueError: If cruise_speed_kmh is not positive.
    """
    if not cruise_speed_kmh > 0:
        raise ValueError(f"cruise speed must be positive, got {cruise_speed_kmh}")
    return distance_km / cruise_speed_kmh * MS_PER_HOUR


def instant_at_fraction(
    departure_instant: datetime, duration_ms: float, fraction: float
) -> datetime:
    """Departure instant plus `fraction` of the flight duration.

    `fraction` is not clamped, so values outside [0, 1] extrapolate.
    """
    return departure_instant + timedelta(milliseconds=fraction * duration_ms)


def clamp_progress(progress: float) -> float:
    """Clamp an animation progress value into [0, 1]."""
    return max(0.0, min(1.0, progress))


def format_duration(ms: float) -> str:
    """Human readable duration rounded to the minute, e.g. ``"7h 24m"``."""
    total_minutes = round(ms / 60_000)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h {minutes:02d}m"
