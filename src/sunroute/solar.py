"""Solar ephemeris: declination, solar noon, and the subsolar point.

This is a low-precision analytic model, good to about a degree in latitude.
Solar noon comes from a pluggable calculator: the closed-form NOAA formula by
default, or skyfield meridian transits when an ephemeris file is available.
"""

import logging
import math
from collections.abc import Callable
from datetime import date, datetime, timedelta
from functools import lru_cache
from pathlib import Path

from pytz import utc
from skyfield import almanac
from skyfield.api import Loader, wgs84

from sunroute.geometry import normalize_longitude
from sunroute.models import GeoPoint

logger = logging.getLogger(__name__)

MAX_DECLINATION_DEG = 23.44

# (day, lat, lon) -> UTC instant of solar noon at that meridian on that day
SolarNoonFn = Callable[[date, float, float], datetime]


def as_utc(instant: datetime) -> datetime:
    """Return `instant` in UTC. Naive datetimes are taken to be UTC already."""
    if instant.tzinfo is None:
        return utc.localize(instant)
    return instant.astimezone(utc)


def day_of_year(day: date) -> int:
    """1-based day of the year on the value's own calendar (Jan 1 is 1).

    An aware datetime is not converted to UTC first.
    """
    return day.timetuple().tm_yday


def solar_declination(day: date) -> float:
    """Solar declination in degrees, single-harmonic approximation.

    ``-23.44 * cos(360/365 * (day_of_year + 10))``. Accurate to about 1 degree,
    always within +/-23.44. Reaches -23.44 at day 355 (December solstice).
    """
    angle = math.radians(360.0 / 365.0 * (day_of_year(day) + 10))
    return -MAX_DECLINATION_DEG * math.cos(angle)


def _equation_of_time_minutes(day: date) -> float:
    """NOAA fractional-year equation of time, evaluated at 12:00."""
    gamma = 2.0 * math.pi / 365.0 * (day_of_year(day) - 1)
    return 229.18 * (
        0.000075
        + 0.001868 * math.cos(gamma)
        - 0.032077 * math.sin(gamma)
        - 0.014615 * math.cos(2 * gamma)
        - 0.040849 * math.sin(2 * gamma)
    )


def noaa_solar_noon(day: date, lat: float = 0.0, lon: float = 0.0) -> datetime:
    """UTC instant of solar noon at longitude `lon` on calendar day `day`.

    Closed form: ``720 - 4 * lon - eqtime`` minutes after UTC midnight.
    Latitude does not affect the transit time and is accepted only to satisfy
    the SolarNoonFn contract.
    """
    midnight = utc.localize(datetime(day.year, day.month, day.day))
    minutes = 720.0 - 4.0 * lon - _equation_of_time_minutes(day)
    return midnight + timedelta(minutes=minutes)


class SkyfieldSolarNoon:
    """Solar noon from skyfield meridian transits of the Sun.

    The ephemeris is opened on first use (skyfield downloads it into
    `ephemeris_dir` if it is missing). Results are cached per
    (day, lat, lon), so sampling a route searches once per UTC day.
    """

    def __init__(self, ephemeris_dir: Path | str, ephemeris: str = "de421.bsp"):
        self._loader = Loader(str(ephemeris_dir))
        self._ephemeris_name = ephemeris
        self._eph = None
        self._noon = lru_cache(maxsize=4096)(self._find_noon)

    def _ephemeris(self):
        if self._eph is None:
            logger.debug("Loading ephemeris %s", self._ephemeris_name)
            self._eph = self._loader(self._ephemeris_name)
        return self._eph

    def __call__(self, day: date, lat: float = 0.0, lon: float = 0.0) -> datetime:
        return self._noon(day, lat, lon)

    def _find_noon(self, day: date, lat: float, lon: float) -> datetime:
        eph = self._ephemeris()
        ts = self._loader.timescale()
        nominal = noaa_solar_noon(day, lat, lon)
        t0 = ts.from_datetime(nominal - timedelta(hours=12))
        t1 = ts.from_datetime(nominal + timedelta(hours=12))

        f = almanac.meridian_transits(
            eph, eph["sun"], wgs84.latlon(latitude_degrees=lat, longitude_degrees=lon)
        )
        times, events = almanac.find_discrete(t0, t1, f)
        transits = [t.utc_datetime() for t, event in zip(times, events) if event == 1]
        if not transits:
            logger.warning("No meridian transit found near %s; using NOAA estimate", nominal)
            return nominal
        return min(transits, key=lambda t: abs((t - nominal).total_seconds()))


def subsolar_point(
    instant: datetime, solar_noon: SolarNoonFn = noaa_solar_noon
) -> GeoPoint:
    """Point on the Earth where the Sun is directly overhead at `instant`.

    Latitude is the solar declination. Longitude is
    ``-(hours since solar noon at 0 deg longitude) * 15``, so the point moves
    west as UTC advances (June solstice, 12:00 UTC gives about 0 deg).

    Args:
        instant: Any datetime. Naive values are taken as UTC.
        solar_noon: Solar-noon calculator, queried at lat=0, lon=0 for the
            instant's UTC calendar day.

    Returns:
        GeoPoint of the subsolar point.
    """
    instant_utc = as_utc(instant)
    noon = solar_noon(instant_utc.date(), 0.0, 0.0)
    hours_since_noon = (instant_utc - as_utc(noon)).total_seconds() / 3600.0
    return GeoPoint(
        lat=solar_declination(instant),
        lng=normalize_longitude(-hours_since_noon * 15.0),
    )


def antisolar_point(
    instant: datetime, solar_noon: SolarNoonFn = noaa_solar_noon
) -> GeoPoint:
    """Antipode of the subsolar point (where it is local solar midnight)."""
    sub = subsolar_point(instant, solar_noon)
    return GeoPoint(lat=-sub.lat, lng=normalize_longitude(sub.lng + 180.0))
