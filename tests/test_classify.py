"""Tests for sun-angle classification and day/night aggregation."""

import random
from datetime import timedelta

import pytest

from sunroute.classify import (
    DEFAULT_BANDS,
    GRADIENT_STOPS,
    SOLAR_ELEVATION_BANDS,
    aggregate_daylight_darkness,
    classify,
    darkness_fraction,
    darkness_level,
    find_transitions,
    is_daylight,
    sample_route,
    sun_angle_at,
    summarize_flight,
)
from sunroute.models import (
    BandTable,
    FlightPlan,
    GeoPoint,
    LightBand,
    RouteSample,
    TransitionKind,
)
from sunroute.solar import antisolar_point, subsolar_point
from sunroute.timing import duration_ms, great_circle_distance_km

_ORDER = list(LightBand)


def _samples(angles, start):
    n = len(angles)
    return [
        RouteSample(
            fraction=(i + 0.5) / n,
            point=GeoPoint(0.0, 0.0),
            instant=start + timedelta(minutes=i),
            sun_angle_deg=angle,
            band=classify(angle),
        )
        for i, angle in enumerate(angles)
    ]


class TestClassify:
    """Tests for band classification."""

    def test_default_cut_points(self):
        assert classify(0.0) is LightBand.DAY
        assert classify(84.9) is LightBand.DAY
        assert classify(85.0) is LightBand.CIVIL_TWILIGHT
        assert classify(89.9) is LightBand.CIVIL_TWILIGHT
        assert classify(90.0) is LightBand.NAUTICAL_TWILIGHT
        assert classify(95.0) is LightBand.ASTRONOMICAL_TWILIGHT
        assert classify(99.9) is LightBand.ASTRONOMICAL_TWILIGHT
        assert classify(100.0) is LightBand.NIGHT
        assert classify(180.0) is LightBand.NIGHT

    def test_solar_elevation_table(self):
        assert classify(89.0, SOLAR_ELEVATION_BANDS) is LightBand.DAY
        assert classify(95.0, SOLAR_ELEVATION_BANDS) is LightBand.CIVIL_TWILIGHT
        assert classify(101.0, SOLAR_ELEVATION_BANDS) is LightBand.NAUTICAL_TWILIGHT
        assert classify(107.0, SOLAR_ELEVATION_BANDS) is LightBand.ASTRONOMICAL_TWILIGHT
        assert classify(108.0, SOLAR_ELEVATION_BANDS) is LightBand.NIGHT

    @pytest.mark.parametrize("bands", [DEFAULT_BANDS, SOLAR_ELEVATION_BANDS])
    def test_monotonic(self, bands):
        seen = [_ORDER.index(classify(a / 4, bands)) for a in range(0, 721)]
        assert seen == sorted(seen)
        assert set(seen) == set(range(5))

    @pytest.mark.parametrize(
        "cuts", [(85, 85, 95, 100), (90, 85, 95, 100), (85, 90, 95, 94)]
    )
    def test_band_table_must_increase(self, cuts):
        with pytest.raises(ValueError):
            BandTable(*cuts)


class TestDaylight:
    """Tests for the boolean day/night test."""

    def test_threshold(self):
        assert is_daylight(89.9)
        assert not is_daylight(90.0)
        assert not is_daylight(135.0)

    def test_custom_threshold(self):
        assert is_daylight(92.0, threshold_deg=95.0)
        assert not is_daylight(85.0, threshold_deg=80.0)

    def test_independent_of_bands(self):
        # Civil twilight in the colour model, yet still daylight
        assert classify(87.0) is LightBand.CIVIL_TWILIGHT
        assert is_daylight(87.0)


class TestGradient:
    """Tests for the colour gradient levels."""

    def test_levels(self):
        assert darkness_level(80.0) == 0
        assert darkness_level(85.0) == 1
        assert darkness_level(86.0) == 1
        assert darkness_level(92.0) == 3
        assert darkness_level(100.0) == len(GRADIENT_STOPS)
        assert darkness_level(150.0) == len(GRADIENT_STOPS)

    def test_fraction_range(self):
        assert darkness_fraction(0.0) == 0.0
        assert darkness_fraction(180.0) == 1.0
        values = [darkness_fraction(a) for a in range(0, 181)]
        assert values == sorted(values)


class TestSunAngle:
    def test_subsolar_and_antisolar(self, evening_departure):
        sub = subsolar_point(evening_departure)
        anti = antisolar_point(evening_departure)
        assert sun_angle_at(sub, evening_departure) == 0.0
        assert sun_angle_at(anti, evening_departure) == pytest.approx(180.0, abs=1e-5)


class TestSampleRoute:
    """Tests for route sampling."""

    def test_midpoint_fractions(self, transatlantic_plan):
        samples = sample_route(transatlantic_plan, 8)
        assert [s.fraction for s in samples] == [(i + 0.5) / 8 for i in range(8)]

    def test_instants(self, transatlantic_plan):
        samples = sample_route(transatlantic_plan, 10)
        total = duration_ms(
            great_circle_distance_km(transatlantic_plan.departure, transatlantic_plan.arrival),
            transatlantic_plan.cruise_speed_kmh,
        )
        first = transatlantic_plan.departure_instant + timedelta(milliseconds=0.05 * total)
        assert abs((samples[0].instant - first).total_seconds()) < 1e-3
        instants = [s.instant for s in samples]
        assert instants == sorted(instants)

    def test_bands_follow_angles(self, transatlantic_plan):
        for s in sample_route(transatlantic_plan, 50):
            assert s.band is classify(s.sun_angle_deg)
            assert 0.0 <= s.sun_angle_deg <= 180.0

    def test_invalid_count(self, transatlantic_plan):
        with pytest.raises(ValueError):
            sample_route(transatlantic_plan, 0)


class TestAggregation:
    """Tests for daylight/darkness totals."""

    def test_split(self, evening_departure):
        samples = _samples([10.0, 100.0, 120.0], evening_departure)
        daylight, darkness = aggregate_daylight_darkness(samples, 1000.4)
        assert (daylight, darkness) == (333, 667)

    def test_empty_is_all_darkness(self):
        assert aggregate_daylight_darkness([], 1234.6) == (0, 1235)

    def test_all_day(self, evening_departure):
        samples = _samples([10.0] * 7, evening_departure)
        assert aggregate_daylight_darkness(samples, 5000.0) == (5000, 0)

    def test_sum_is_exact_for_random_flights(self, evening_departure):
        rng = random.Random(42)
        for _ in range(20):
            plan = FlightPlan(
                departure=GeoPoint(rng.uniform(-60, 60), rng.uniform(-180, 180)),
                arrival=GeoPoint(rng.uniform(-60, 60), rng.uniform(-180, 180)),
                departure_instant=evening_departure + timedelta(hours=rng.uniform(0, 24 * 365)),
                cruise_speed_kmh=rng.uniform(400, 950),
            )
            samples = sample_route(plan, rng.randint(1, 120))
            summary = summarize_flight(plan, samples)
            assert summary.daylight_ms + summary.darkness_ms == round(summary.duration_ms)
            assert summary.daylight_ms >= 0
            assert summary.darkness_ms >= 0


class TestTransitions:
    """Tests for sunrise/sunset detection."""

    def test_detects_changes(self, evening_departure):
        samples = _samples([100.0, 80.0, 80.0, 100.0, 100.0, 80.0], evening_departure)
        transitions = find_transitions(samples)
        assert [t.kind for t in transitions] == [
            TransitionKind.SUNRISE,
            TransitionKind.SUNSET,
            TransitionKind.SUNRISE,
        ]
        # The later sample of each pair is reported
        assert [t.fraction for t in transitions] == [
            samples[1].fraction,
            samples[3].fraction,
            samples[5].fraction,
        ]
        assert transitions[0].instant == samples[1].instant

    def test_first_sample_is_not_a_transition(self, evening_departure):
        assert find_transitions(_samples([80.0], evening_departure)) == ()
        assert find_transitions(_samples([120.0, 130.0], evening_departure)) == ()
        assert find_transitions([]) == ()

    def test_alternation_and_parity(self, evening_departure):
        rng = random.Random(9)
        for _ in range(10):
            angles = [rng.uniform(0, 180) for _ in range(60)]
            transitions = find_transitions(_samples(angles, evening_departure))
            kinds = [t.kind for t in transitions]
            assert all(a is not b for a, b in zip(kinds, kinds[1:]))
            sunrises = kinds.count(TransitionKind.SUNRISE)
            assert abs(sunrises - (len(kinds) - sunrises)) <= 1

    def test_summary_counts(self, transatlantic_plan):
        summary = summarize_flight(transatlantic_plan, sample_route(transatlantic_plan, 200))
        assert summary.sunrise_count == 1
        assert summary.sunset_count == 1
