"""Data model definitions: explicit boundaries between input, compute, and render layers."""

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class InvalidCoordinateError(ValueError):
    """Latitude or longitude outside the valid range."""


@dataclass(frozen=True)
class GeoPoint:
    """A point on the Earth's surface. Spherical Earth, no ellipsoid correction."""

    lat: float  # Latitude (decimal degrees, [-90, 90])
    lng: float  # Longitude (decimal degrees, [-180, 180])

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and -90.0 <= self.lat <= 90.0):
            raise InvalidCoordinateError(f"latitude out of range: {self.lat}")
        if not (math.isfinite(self.lng) and -180.0 <= self.lng <= 180.0):
            raise InvalidCoordinateError(f"longitude out of range: {self.lng}")


@dataclass(frozen=True)
class UnitVector3:
    """Cartesian vector, normally a point on (or tangent to) the unit sphere."""

    x: float
    y: float
    z: float

    def __add__(self, other: "UnitVector3") -> "UnitVector3":
        return UnitVector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "UnitVector3") -> "UnitVector3":
        return UnitVector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "UnitVector3":
        return UnitVector3(-self.x, -self.y, -self.z)

    def scaled(self, k: float) -> "UnitVector3":
        return UnitVector3(self.x * k, self.y * k, self.z * k)

    def dot(self, other: "UnitVector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "UnitVector3") -> "UnitVector3":
        return UnitVector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> "UnitVector3":
        """Return the vector scaled to length 1. Raises ZeroDivisionError for the zero vector."""
        return self.scaled(1.0 / self.norm())

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


class LightBand(Enum):
    """Sun-relative lighting class of a surface point, brightest first."""

    DAY = "day"
    CIVIL_TWILIGHT = "civil_twilight"
    NAUTICAL_TWILIGHT = "nautical_twilight"
    ASTRONOMICAL_TWILIGHT = "astronomical_twilight"
    NIGHT = "night"


@dataclass(frozen=True)
class BandTable:
    """Sun-angle cut points (degrees) separating the five light bands.

    An angle below `day` is DAY, below `civil` is CIVIL_TWILIGHT, and so on;
    anything at or above `astronomical` is NIGHT.
    """

    day: float
    civil: float
    nautical: float
    astronomical: float

    def __post_init__(self) -> None:
        cuts = self.as_tuple()
        if any(b <= a for a, b in zip(cuts, cuts[1:])):
            raise ValueError(f"band cut points must be strictly increasing: {cuts}")

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.day, self.civil, self.nautical, self.astronomical)


@dataclass(frozen=True)
class RouteSample:
    """One sampled point along a flight, with its own instant and sun angle."""

    fraction: float  # Fraction along the route, [0, 1]
    point: GeoPoint
    instant: datetime  # UTC instant the plane passes this point
    sun_angle_deg: float  # Angular distance to the subsolar point, [0, 180]
    band: LightBand


class TransitionKind(Enum):
    SUNRISE = "sunrise"
    SUNSET = "sunset"


@dataclass(frozen=True)
class Transition:
    """A day/night state change observed between two consecutive samples."""

    fraction: float  # Fraction of the later sample
    instant: datetime
    kind: TransitionKind


@dataclass(frozen=True)
class FlightPlan:
    """User-requested flight. Any change to these inputs means a new plan."""

    departure: GeoPoint
    arrival: GeoPoint
    departure_instant: datetime  # UTC datetime (with tzinfo=utc)
    cruise_speed_kmh: float


@dataclass(frozen=True)
class FlightSummary:
    """Aggregate figures for display."""

    distance_km: float
    duration_ms: float
    daylight_ms: int
    darkness_ms: int  # daylight_ms + darkness_ms == round(duration_ms)
    transitions: tuple[Transition, ...]

    @property
    def sunrise_count(self) -> int:
        return sum(1 for t in self.transitions if t.kind is TransitionKind.SUNRISE)

    @property
    def sunset_count(self) -> int:
        return sum(1 for t in self.transitions if t.kind is TransitionKind.SUNSET)


@dataclass(frozen=True)
class FlightPosition:
    """Animated marker state at a given progress value."""

    progress: float  # Clamped to [0, 1]
    point: GeoPoint
    instant: datetime
    tangent: UnitVector3 | None  # None for a zero-length route
    normal: UnitVector3  # Outward surface normal
    sun_angle_deg: float
    band: LightBand


@dataclass(frozen=True)
class BoundaryCurve:
    """A small circle of constant sun elevation, as an open curve."""

    name: str  # "terminator", "civil", "nautical", "astronomical"
    elevation_deg: float  # Sun elevation on the curve (0, -6, -12, -18)
    center: GeoPoint  # Subsolar point (day side) or antisolar point (night side)
    points: tuple[GeoPoint, ...]
    vectors: tuple[UnitVector3, ...]  # Same curve on the unit sphere, for 3D consumers


@dataclass(frozen=True)
class TwilightBoundarySet:
    """Terminator and twilight rings for one reference instant."""

    instant: datetime
    subsolar: GeoPoint
    day_side: tuple[BoundaryCurve, ...]  # Around the subsolar point
    night_side: tuple[BoundaryCurve, ...]  # Around the antisolar point


@dataclass(frozen=True)
class FlightData:
    """The sole input to renderers. Fully computed state for one FlightPlan."""

    plan: FlightPlan
    waypoints: tuple[GeoPoint, ...]  # sample_count + 1 evenly spaced points
    samples: tuple[RouteSample, ...]  # Segment-midpoint samples
    summary: FlightSummary
    boundaries: TwilightBoundarySet  # At the departure instant
    bands: BandTable  # Table the samples were classified with
    solar_noon: Callable[[date, float, float], datetime]  # Calculator the samples used


@dataclass(frozen=True)
class FlightQuery:
    """Raw user input. Not yet validated."""

    departure: str  # Airport code ("JFK")
    arrival: str  # Airport code ("LHR")
    when: str  # "YYYY-MM-DD HH:MM" format string, in `tz`
    tz: str = "UTC"  # IANA zone name the `when` string is expressed in
    cruise_speed_kmh: float | None = None  # Falls back to settings
    sample_count: int | None = None  # Falls back to settings


@dataclass(frozen=True)
class Airport:
    """A row of the airport dataset."""

    code: str  # IATA code, upper case
    name: str
    location: GeoPoint
