"""Plotly interactive globe renderer.

Orthographic projection centred on the middle of the route. Drag to rotate,
wheel to zoom. Plotly handles antimeridian crossings for geo traces.
"""

import plotly.graph_objects as go

from sunroute.classify import darkness_fraction
from sunroute.models import FlightData
from sunroute.route import GreatCircleRoute

_BG = "#0d1b35"
_LAND = "#2a3b5f"
_OCEAN = "#13244a"
_ROUTE_COLORSCALE = [[0.0, "#f5c542"], [0.5, "#c9a96e"], [1.0, "#1b2a4a"]]
_RING_COLORS = {
    "terminator": "#e8d5a3",
    "civil": "#c9a96e",
    "nautical": "#7e8cc9",
    "astronomical": "#4a5a8a",
}


def render_plotly_globe(flight: FlightData) -> go.Figure:
    """Render FlightData as a Plotly globe.

    Route samples are coloured by the twilight gradient; day-side rings are
    solid, night-side rings dotted (the shared terminator is drawn once).

    Args:
        flight: Fully computed flight data.

    Returns:
        Plotly Figure object.
    """
    traces: list[go.Scattergeo] = []

    boundaries = flight.boundaries
    for curve, dash in [(c, "solid") for c in boundaries.day_side] + [
        (c, "dot") for c in boundaries.night_side[1:]
    ]:
        points = curve.points + curve.points[:1]
        traces.append(
            go.Scattergeo(
                lon=[p.lng for p in points],
                lat=[p.lat for p in points],
                mode="lines",
                line=dict(color=_RING_COLORS.get(curve.name, "#aaaaaa"), width=1, dash=dash),
                opacity=0.7,
                hoverinfo="skip",
                name=f"{curve.name} ({curve.elevation_deg:+.0f}°)",
            )
        )

    traces.append(
        go.Scattergeo(
            lon=[s.point.lng for s in flight.samples],
            lat=[s.point.lat for s in flight.samples],
            mode="markers",
            marker=dict(
                size=4,
                color=[darkness_fraction(s.sun_angle_deg) for s in flight.samples],
                colorscale=_ROUTE_COLORSCALE,
                cmin=0.0,
                cmax=1.0,
            ),
            text=[
                f"{s.instant:%Y-%m-%d %H:%M} UTC · {s.band.value} · {s.sun_angle_deg:.1f}°"
                for s in flight.samples
            ],
            hoverinfo="text",
            name="route",
        )
    )

    plan = flight.plan
    traces.append(
        go.Scattergeo(
            lon=[plan.departure.lng, plan.arrival.lng],
            lat=[plan.departure.lat, plan.arrival.lat],
            mode="markers",
            marker=dict(size=8, color="white", symbol="triangle-up"),
            hoverinfo="skip",
            name="airports",
        )
    )
    traces.append(
        go.Scattergeo(
            lon=[boundaries.subsolar.lng],
            lat=[boundaries.subsolar.lat],
            mode="markers",
            marker=dict(size=14, color="#f5c542"),
            hoverinfo="skip",
            name="subsolar point",
        )
    )

    center = GreatCircleRoute(plan.departure, plan.arrival).point_at(0.5)
    fig = go.Figure(data=traces)
    fig.update_layout(
        paper_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        width=800,
        height=800,
        geo=dict(
            projection=dict(
                type="orthographic",
                rotation=dict(lon=center.lng, lat=center.lat),
            ),
            showland=True,
            landcolor=_LAND,
            showocean=True,
            oceancolor=_OCEAN,
            showcountries=False,
            coastlinecolor="#334466",
            bgcolor=_BG,
        ),
    )

    fig._config = {"scrollZoom": True, "displayModeBar": False}  # type: ignore[attr-defined]

    return fig
