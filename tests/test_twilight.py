"""Tests for terminator and twilight rings."""

import pytest

from sunroute.geometry import angular_distance, to_geo_point
from sunroute.models import GeoPoint
from sunroute.solar import antisolar_point, subsolar_point
from sunroute.twilight import TWILIGHT_ELEVATIONS, boundaries_for_instant, small_circle


class TestSmallCircle:
    """Tests for the small-circle generator."""

    @pytest.mark.parametrize(
        "center,radius",
        [
            (GeoPoint(0, 0), 30.0),
            (GeoPoint(23.44, -100.0), 90.0),
            (GeoPoint(80, 30), 108.0),
            (GeoPoint(-45, 179), 12.0),
        ],
    )
    def test_constant_radius(self, center, radius):
        points = small_circle(center, radius, 72)
        assert len(points) == 72
        for p in points:
            assert angular_distance(center, p) == pytest.approx(radius, abs=1e-6)

    def test_starts_north_and_is_open(self):
        points = small_circle(GeoPoint(0, 0), 30.0, 4)
        assert points[0].lat == pytest.approx(30.0)
        assert points[0].lng == pytest.approx(0.0)
        assert points[1].lat == pytest.approx(0.0, abs=1e-9)
        assert points[1].lng == pytest.approx(30.0)
        assert points[-1] != points[0]

    def test_default_resolution(self):
        assert len(small_circle(GeoPoint(10, 10), 90.0)) == 360

    def test_invalid_count(self):
        with pytest.raises(ValueError):
            small_circle(GeoPoint(0, 0), 90.0, 0)


class TestBoundaries:
    """Tests for the boundary set at an instant."""

    def test_structure(self, evening_departure):
        boundaries = boundaries_for_instant(evening_departure)
        names = [name for name, _ in TWILIGHT_ELEVATIONS]
        assert [c.name for c in boundaries.day_side] == names
        assert [c.name for c in boundaries.night_side] == names
        assert boundaries.instant == evening_departure
        for curve in boundaries.day_side + boundaries.night_side:
            assert len(curve.points) == 360
            assert len(curve.vectors) == 360

    def test_centers(self, evening_departure):
        boundaries = boundaries_for_instant(evening_departure, num_points=36)
        sub = subsolar_point(evening_departure)
        assert boundaries.subsolar == sub
        assert all(c.center == sub for c in boundaries.day_side)
        assert all(c.center == antisolar_point(evening_departure) for c in boundaries.night_side)

    def test_radii(self, evening_departure):
        boundaries = boundaries_for_instant(evening_departure, num_points=36)
        sub = boundaries.subsolar
        for curve in boundaries.day_side:
            for p in curve.points:
                assert angular_distance(sub, p) == pytest.approx(
                    90.0 - curve.elevation_deg, abs=1e-6
                )
        for curve in boundaries.night_side:
            for p in curve.points:
                assert angular_distance(sub, p) == pytest.approx(
                    90.0 + curve.elevation_deg, abs=1e-6
                )

    def test_vectors_match_points(self, evening_departure):
        curve = boundaries_for_instant(evening_departure, num_points=12).day_side[1]
        for p, v in zip(curve.points, curve.vectors):
            assert v.norm() == pytest.approx(1.0)
            back = to_geo_point(v)
            assert angular_distance(back, p) == pytest.approx(0.0, abs=1e-5)
