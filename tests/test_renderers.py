"""Tests for the static and interactive renderers."""

import matplotlib.pyplot as plt
import numpy as np
import plotly.graph_objects as go
import pytest
from matplotlib.figure import Figure

from sunroute.compute import plan_flight
from sunroute.models import GeoPoint
from sunroute.renderers.plotly_globe import render_plotly_globe
from sunroute.renderers.static import (
    render_static_chart,
    save_static_chart,
    split_at_antimeridian,
)
from sunroute.settings import Settings


@pytest.fixture
def flight(transatlantic_plan):
    return plan_flight(transatlantic_plan, settings=Settings(sample_count=40, boundary_points=36))


class TestSplitAtAntimeridian:
    def test_inserts_gap(self):
        points = tuple(GeoPoint(0.0, lng) for lng in (170.0, 179.0, -179.0, -170.0))
        lngs, lats = split_at_antimeridian(points)
        assert len(lngs) == 5
        assert np.isnan(lngs[2]) and np.isnan(lats[2])
        assert lngs[3] == -179.0

    def test_no_crossing(self):
        points = tuple(GeoPoint(10.0, lng) for lng in (-10.0, 0.0, 10.0))
        lngs, _ = split_at_antimeridian(points)
        assert not np.isnan(lngs).any()

    def test_short_input(self):
        lngs, lats = split_at_antimeridian((GeoPoint(1.0, 2.0),))
        assert lngs.tolist() == [2.0]
        assert lats.tolist() == [1.0]


class TestStaticChart:
    def test_render(self, flight):
        fig = render_static_chart(flight, chart_width=6)
        assert isinstance(fig, Figure)
        assert tuple(fig.get_size_inches()) == (6.0, 3.0)
        plt.close(fig)

    def test_save(self, flight, tmp_path):
        path = save_static_chart(flight, tmp_path / "out" / "chart.png")
        assert path.exists()
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


class TestPlotlyGlobe:
    def test_traces(self, flight):
        fig = render_plotly_globe(flight)
        assert isinstance(fig, go.Figure)
        # 4 day rings, 3 night rings (shared terminator drawn once), route, airports, sun
        assert len(fig.data) == 10
        assert fig.layout.geo.projection.type == "orthographic"
        route = next(t for t in fig.data if t.name == "route")
        assert len(route.lon) == len(flight.samples)

    def test_rings_are_closed(self, flight):
        fig = render_plotly_globe(flight)
        ring = fig.data[0]
        assert len(ring.lon) == len(flight.boundaries.day_side[0].points) + 1
        assert ring.lon[0] == ring.lon[-1]
