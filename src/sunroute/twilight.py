"""Terminator and twilight rings as small circles around the subsolar point."""

import math
from datetime import datetime

from sunroute.geometry import normalize_longitude, to_unit_vector
from sunroute.models import BoundaryCurve, GeoPoint, TwilightBoundarySet
from sunroute.solar import (
    SolarNoonFn,
    antisolar_point,
    noaa_solar_noon,
    subsolar_point,
)

# Sun elevation (deg) on each boundary
TWILIGHT_ELEVATIONS: tuple[tuple[str, float], ...] = (
    ("terminator", 0.0),
    ("civil", -6.0),
    ("nautical", -12.0),
    ("astronomical", -18.0),
)


def small_circle(
    center: GeoPoint, angular_radius_deg: float, num_points: int = 360
) -> tuple[GeoPoint, ...]:
    """Points at a fixed angular distance from `center`, ordered by bearing.

    Bearings run ``k * 360 / num_points`` for k in [0, num_points); the curve
    is open (the first point is not repeated at the end). Each point comes from
    the spherical destination-point formula.

    Raises:
        ValueError: If num_points < 1.
    """
    if num_points < 1:
        raise ValueError(f"num_points must be >= 1, got {num_points}")

    lat1 = math.radians(center.lat)
    lng1 = math.radians(center.lng)
    delta = math.radians(angular_radius_deg)
    sin_lat1, cos_lat1 = math.sin(lat1), math.cos(lat1)
    sin_d, cos_d = math.sin(delta), math.cos(delta)

    points: list[GeoPoint] = []
    for k in range(num_points):
        bearing = math.radians(k * 360.0 / num_points)
        sin_lat2 = sin_lat1 * cos_d + cos_lat1 * sin_d * math.cos(bearing)
        lat2 = math.asin(max(-1.0, min(1.0, sin_lat2)))
        lng2 = lng1 + math.atan2(
            math.sin(bearing) * sin_d * cos_lat1, cos_d - sin_lat1 * sin_lat2
        )
        points.append(
            GeoPoint(
                lat=math.degrees(lat2),
                lng=normalize_longitude(math.degrees(lng2)),
            )
        )
    return tuple(points)


def _rings(center: GeoPoint, num_points: int) -> tuple[BoundaryCurve, ...]:
    curves: list[BoundaryCurve] = []
    for name, elevation in TWILIGHT_ELEVATIONS:
        points = small_circle(center, 90.0 - elevation, num_points)
        curves.append(
            BoundaryCurve(
                name=name,
                elevation_deg=elevation,
                center=center,
                points=points,
                vectors=tuple(to_unit_vector(p) for p in points),
            )
        )
    return tuple(curves)


def boundaries_for_instant(
    instant: datetime,
    num_points: int = 360,
    solar_noon: SolarNoonFn = noaa_solar_noon,
) -> TwilightBoundarySet:
    """Terminator and civil/nautical/astronomical rings at `instant`.

    Day-side rings are drawn around the subsolar point and night-side rings
    around the antisolar point, each at angular radius ``90 - elevation``.
    """
    subsolar = subsolar_point(instant, solar_noon)
    return TwilightBoundarySet(
        instant=instant,
        subsolar=subsolar,
        day_side=_rings(subsolar, num_points),
        night_side=_rings(antisolar_point(instant, solar_noon), num_points),
    )
