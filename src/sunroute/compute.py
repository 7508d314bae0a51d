"""Flight computation layer: input parsing, airport resolution, and the full FlightData build."""

import logging
from datetime import datetime

from pytz import timezone, utc

from sunroute.airports import lookup_airport
from sunroute.classify import classify, sample_route, sun_angle_at, summarize_flight
from sunroute.models import (
    Airport,
    FlightData,
    FlightPlan,
    FlightPosition,
    FlightQuery,
)
from sunroute.route import GreatCircleRoute
from sunroute.settings import Settings
from sunroute.timing import clamp_progress, instant_at_fraction
from sunroute.twilight import boundaries_for_instant

logger = logging.getLogger(__name__)


def parse_when(when: str, tz: str = "UTC") -> datetime:
    """Parse a ``"YYYY-MM-DD HH:MM"`` wall-clock string in zone `tz` into UTC.

    Raises:
        ValueError: If `when` does not match the format.
        pytz.UnknownTimeZoneError: If `tz` is not a known zone name.
        pytz.AmbiguousTimeError, pytz.NonExistentTimeError: On DST edges.
    """
    dt = datetime.strptime(when, "%Y-%m-%d %H:%M")
    return timezone(tz).localize(dt, is_dst=None).astimezone(utc)


def plan_flight(
    plan: FlightPlan,
    sample_count: int | None = None,
    settings: Settings | None = None,
) -> FlightData:
    """Compute everything a renderer or UI needs for one flight plan.

    Always recomputes from scratch: a changed departure, arrival, or departure
    time means a new FlightPlan and a new FlightData.

    Args:
        plan: Departure/arrival points, departure instant, cruise speed.
        sample_count: Number of route segments. Defaults to settings.
        settings: Runtime settings. Defaults to ``Settings()``.

    Returns:
        FlightData with waypoints, samples, summary, and twilight boundaries
        at the departure instant.
    """
    settings = settings or Settings()
    if sample_count is None:
        sample_count = settings.sample_count
    solar_noon = settings.solar_noon()

    route = GreatCircleRoute(plan.departure, plan.arrival)
    samples = sample_route(
        plan,
        sample_count,
        bands=settings.bands,
        solar_noon=solar_noon,
        earth_radius_km=settings.earth_radius_km,
    )
    summary = summarize_flight(
        plan,
        samples,
        earth_radius_km=settings.earth_radius_km,
        threshold_deg=settings.daylight_threshold_deg,
    )
    logger.debug(
        "Planned flight %.1f km, %d samples, %d transitions",
        summary.distance_km,
        len(samples),
        len(summary.transitions),
    )

    return FlightData(
        plan=plan,
        waypoints=route.waypoints(sample_count),
        samples=samples,
        summary=summary,
        boundaries=boundaries_for_instant(
            plan.departure_instant, settings.boundary_points, solar_noon
        ),
        bands=settings.bands,
        solar_noon=solar_noon,
    )


def position_at_progress(flight: FlightData, progress: float) -> FlightPosition:
    """Marker state at an animation progress value.

    Progress is clamped to [0, 1]. Timing and the sun model come from `flight`,
    so the marker agrees with the samples at the same fraction.
    The tangent/normal pair orients the marker; the tangent is None on a
    zero-length route.
    """
    plan = flight.plan
    fraction = clamp_progress(progress)
    route = GreatCircleRoute(plan.departure, plan.arrival)
    point = route.point_at(fraction)
    instant = instant_at_fraction(plan.departure_instant, flight.summary.duration_ms, fraction)
    angle = sun_angle_at(point, instant, flight.solar_noon)
    return FlightPosition(
        progress=fraction,
        point=point,
        instant=instant,
        tangent=route.tangent_at(fraction),
        normal=route.normal_at(fraction),
        sun_angle_deg=angle,
        band=classify(angle, flight.bands),
    )


def run(
    query: FlightQuery,
    settings: Settings | None = None,
    airports: dict[str, Airport] | None = None,
) -> FlightData:
    """Top-level entry point: takes a FlightQuery and returns a FlightData.

    Args:
        query: User input (airport codes, time string, optional overrides).
        settings: Runtime settings. Defaults to ``Settings()``.
        airports: Airport dataset. Defaults to the bundled one.

    Returns:
        Fully computed FlightData.

    Raises:
        AirportLookupError: When an airport code is unknown.
        ValueError: On a malformed time string or non-positive speed.
    """
    settings = settings or Settings()
    departure = lookup_airport(query.departure, airports)
    arrival = lookup_airport(query.arrival, airports)
    plan = FlightPlan(
        departure=departure.location,
        arrival=arrival.location,
        departure_instant=parse_when(query.when, query.tz),
        cruise_speed_kmh=(
            settings.cruise_speed_kmh
            if query.cruise_speed_kmh is None
            else query.cruise_speed_kmh
        ),
    )
    logger.info(
        "Computing %s -> %s departing %s",
        departure.code,
        arrival.code,
        plan.departure_instant,
    )
    return plan_flight(plan, query.sample_count, settings)
