"""Sun-relative classification of route points, and per-flight day/night aggregates.

Two independent threshold policies are used and kept apart:

- a boolean day/night test (`is_daylight`, threshold 90 deg by default) that
  drives the daylight/darkness totals and the sunrise/sunset transitions;
- a banded model (`classify` with a `BandTable`, and the finer colour gradient
  `GRADIENT_STOPS`) used for colouring.

Callers pick the threshold or table and pass it consistently.
"""

from bisect import bisect_right
from collections.abc import Sequence
from datetime import datetime

from sunroute.geometry import angular_distance
from sunroute.models import (
    BandTable,
    FlightPlan,
    FlightSummary,
    GeoPoint,
    LightBand,
    RouteSample,
    Transition,
    TransitionKind,
)
from sunroute.route import GreatCircleRoute
from sunroute.solar import SolarNoonFn, noaa_solar_noon, subsolar_point
from sunroute.timing import (
    EARTH_RADIUS_KM,
    duration_ms,
    great_circle_distance_km,
    instant_at_fraction,
)

DEFAULT_DAYLIGHT_THRESHOLD_DEG = 90.0

# Colour-band model: day < 85, night >= 100
DEFAULT_BANDS = BandTable(day=85.0, civil=90.0, nautical=95.0, astronomical=100.0)
# Conventional sun-elevation cut points: 0, -6, -12, -18 deg
SOLAR_ELEVATION_BANDS = BandTable(day=90.0, civil=96.0, nautical=102.0, astronomical=108.0)

GRADIENT_STOPS: tuple[float, ...] = (85.0, 88.0, 91.0, 94.0, 97.0, 100.0)

_BANDS_IN_ORDER = (
    LightBand.DAY,
    LightBand.CIVIL_TWILIGHT,
    LightBand.NAUTICAL_TWILIGHT,
    LightBand.ASTRONOMICAL_TWILIGHT,
    LightBand.NIGHT,
)


def sun_angle_at(
    point: GeoPoint, instant: datetime, solar_noon: SolarNoonFn = noaa_solar_noon
) -> float:
    """Angular distance (deg) from `point` to the subsolar point at `instant`.

    0 is local solar noon, about 90 the horizon, 180 local solar midnight.
    """
    return angular_distance(subsolar_point(instant, solar_noon), point)


def is_daylight(
    sun_angle_deg: float, threshold_deg: float = DEFAULT_DAYLIGHT_THRESHOLD_DEG
) -> bool:
    return sun_angle_deg < threshold_deg


def classify(sun_angle_deg: float, bands: BandTable = DEFAULT_BANDS) -> LightBand:
    """Bucket a sun angle into a LightBand. Monotonic in the angle."""
    return _BANDS_IN_ORDER[bisect_right(bands.as_tuple(), sun_angle_deg)]


def darkness_level(
    sun_angle_deg: float, stops: Sequence[float] = GRADIENT_STOPS
) -> int:
    """Index of the colour-gradient step, 0 (full day) to len(stops) (full night)."""
    return bisect_right(stops, sun_angle_deg)


def darkness_fraction(
    sun_angle_deg: float, stops: Sequence[float] = GRADIENT_STOPS
) -> float:
    """Gradient step scaled to [0, 1] for colour mixing."""
    return darkness_level(sun_angle_deg, stops) / len(stops)


def sample_route(
    plan: FlightPlan,
    sample_count: int,
    bands: BandTable = DEFAULT_BANDS,
    solar_noon: SolarNoonFn = noaa_solar_noon,
    earth_radius_km: float = EARTH_RADIUS_KM,
) -> tuple[RouteSample, ...]:
    """Sample a flight at the midpoint of each of `sample_count` equal segments.

    Sample `i` sits at fraction ``(i + 0.5) / sample_count``, so no segment is
    counted twice when the samples are bucketed into day/night totals. Each
    sample carries its own instant and sun angle.

    Args:
        plan: Flight to sample.
        sample_count: Number of segments (and samples), >= 1.
        bands: Band table used for each sample's `band`.
        solar_noon: Solar-noon calculator for the subsolar point.
        earth_radius_km: Sphere radius used for the flight duration.

    Returns:
        Tuple of RouteSample in route order.

    Raises:
        ValueError: If sample_count < 1 or the cruise speed is not positive.
    """
    if sample_count < 1:
        raise ValueError(f"sample_count must be >= 1, got {sample_count}")

    route = GreatCircleRoute(plan.departure, plan.arrival)
    total_ms = duration_ms(
        great_circle_distance_km(plan.departure, plan.arrival, earth_radius_km),
        plan.cruise_speed_kmh,
    )

    samples: list[RouteSample] = []
    for i in range(sample_count):
        fraction = (i + 0.5) / sample_count
        point = route.point_at(fraction)
        instant = instant_at_fraction(plan.departure_instant, total_ms, fraction)
        angle = sun_angle_at(point, instant, solar_noon)
        samples.append(
            RouteSample(
                fraction=fraction,
                point=point,
                instant=instant,
                sun_angle_deg=angle,
                band=classify(angle, bands),
            )
        )
    return tuple(samples)


def aggregate_daylight_darkness(
    samples: Sequence[RouteSample],
    total_duration_ms: float,
    threshold_deg: float = DEFAULT_DAYLIGHT_THRESHOLD_DEG,
) -> tuple[int, int]:
    """Split a flight duration into (daylight_ms, darkness_ms).

    Daylight is the proportion of daylight samples times the rounded total;
    darkness is whatever remains, so the two always add up to
    ``round(total_duration_ms)`` with no rounding gap.
    """
    total = round(total_duration_ms)
    if not samples:
        return 0, total
    daylight_count = sum(1 for s in samples if is_daylight(s.sun_angle_deg, threshold_deg))
    daylight = round(total * daylight_count / len(samples))
    return daylight, total - daylight


def find_transitions(
    samples: Sequence[RouteSample],
    threshold_deg: float = DEFAULT_DAYLIGHT_THRESHOLD_DEG,
) -> tuple[Transition, ...]:
    """Sunrise/sunset points where consecutive samples change day/night state.

    The later sample of each changing pair is reported. The first sample only
    sets the initial state.
    """
    transitions: list[Transition] = []
    previous: bool | None = None
    for sample in samples:
        state = is_daylight(sample.sun_angle_deg, threshold_deg)
        if previous is not None and state != previous:
            transitions.append(
                Transition(
                    fraction=sample.fraction,
                    instant=sample.instant,
                    kind=TransitionKind.SUNRISE if state else TransitionKind.SUNSET,
                )
            )
        previous = state
    return tuple(transitions)


def summarize_flight(
    plan: FlightPlan,
    samples: Sequence[RouteSample],
    earth_radius_km: float = EARTH_RADIUS_KM,
    threshold_deg: float = DEFAULT_DAYLIGHT_THRESHOLD_DEG,
) -> FlightSummary:
    """Aggregate distance, duration, daylight split, and transitions for a flight."""
    distance = great_circle_distance_km(plan.departure, plan.arrival, earth_radius_km)
    total_ms = duration_ms(distance, plan.cruise_speed_kmh)
    daylight, darkness = aggregate_daylight_darkness(samples, total_ms, threshold_deg)
    return FlightSummary(
        distance_km=distance,
        duration_ms=total_ms,
        daylight_ms=daylight,
        darkness_ms=darkness,
        transitions=find_transitions(samples, threshold_deg),
    )
