"""Great-circle router: waypoints, arc angle, and orientation along a route."""

from dataclasses import dataclass

from sunroute.geometry import (
    angular_distance,
    initial_bearing,
    slerp_points,
    to_unit_vector,
)
from sunroute.models import GeoPoint, UnitVector3


@dataclass(frozen=True)
class GreatCircleRoute:
    """Minor great-circle arc from `departure` to `arrival` on a perfect sphere."""

    departure: GeoPoint
    arrival: GeoPoint

    @property
    def arc_angle(self) -> float:
        """Central angle of the route in degrees."""
        return angular_distance(self.departure, self.arrival)

    @property
    def is_degenerate(self) -> bool:
        return self.arc_angle == 0

    @property
    def initial_bearing(self) -> float:
        return initial_bearing(self.departure, self.arrival)

    def point_at(self, fraction: float) -> GeoPoint:
        return slerp_points(self.departure, self.arrival, fraction)

    def waypoints(self, sample_count: int) -> tuple[GeoPoint, ...]:
        """`sample_count + 1` points, evenly spaced by slerp fraction.

        Raises:
            ValueError: If sample_count < 1.
        """
        if sample_count < 1:
            raise ValueError(f"sample_count must be >= 1, got {sample_count}")
        return tuple(self.point_at(i / sample_count) for i in range(sample_count + 1))

    def tangent_at(self, fraction: float, step: float = 1e-4) -> UnitVector3 | None:
        """Unit direction of travel at `fraction`, by finite difference.

        Central difference, with the stencil shifted inwards near either end
        so it never leaves the route. Returns None (no direction) for a
        zero-length route.
        """
        if self.is_degenerate:
            return None
        center = min(max(fraction, step), 1.0 - step)
        lo, hi = center - step, center + step
        delta = to_unit_vector(self.point_at(hi)) - to_unit_vector(self.point_at(lo))
        return delta.normalized()

    def normal_at(self, fraction: float) -> UnitVector3:
        """Outward surface normal under the route, i.e. the position vector."""
        return to_unit_vector(self.point_at(fraction))


def build_route(
    departure: GeoPoint, arrival: GeoPoint, sample_count: int
) -> tuple[GeoPoint, ...]:
    """Waypoints of the great circle from departure to arrival (`sample_count + 1` points)."""
    return GreatCircleRoute(departure, arrival).waypoints(sample_count)


def arc_angle(departure: GeoPoint, arrival: GeoPoint) -> float:
    return angular_distance(departure, arrival)


def tangent_at(
    departure: GeoPoint, arrival: GeoPoint, fraction: float
) -> UnitVector3 | None:
    return GreatCircleRoute(departure, arrival).tangent_at(fraction)
