"""Matplotlib static PNG renderer (equirectangular map)."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.figure import Figure

from sunroute.classify import darkness_fraction
from sunroute.models import BoundaryCurve, FlightData, GeoPoint

_ROOT = Path(__file__).parent.parent.parent.parent

_BG = "#0d1b35"
_DAY_COLOR = "#f5c542"
_NIGHT_COLOR = "#1b2a4a"
_RING_COLORS = {
    "terminator": "#e8d5a3",
    "civil": "#c9a96e",
    "nautical": "#7e8cc9",
    "astronomical": "#4a5a8a",
}

DAYLIGHT_CMAP = LinearSegmentedColormap.from_list("sunroute_daylight", [_DAY_COLOR, _NIGHT_COLOR])


def split_at_antimeridian(points: tuple[GeoPoint, ...]) -> tuple[np.ndarray, np.ndarray]:
    """Longitude/latitude arrays with NaN gaps wherever the curve crosses +/-180.

    Without the gaps a line plot draws a stray stroke across the whole map.
    """
    lngs = np.array([p.lng for p in points], dtype=float)
    lats = np.array([p.lat for p in points], dtype=float)
    if len(lngs) < 2:
        return lngs, lats
    jumps = np.where(np.abs(np.diff(lngs)) > 180.0)[0] + 1
    return np.insert(lngs, jumps, np.nan), np.insert(lats, jumps, np.nan)


def _plot_curve(ax, curve: BoundaryCurve, linestyle: str) -> None:
    # Close the ring for drawing; the stored curve is open
    x, y = split_at_antimeridian(curve.points + curve.points[:1])
    ax.plot(
        x,
        y,
        color=_RING_COLORS.get(curve.name, "#aaaaaa"),
        linewidth=0.8,
        linestyle=linestyle,
        alpha=0.8,
        zorder=1,
    )


def render_static_chart(flight: FlightData, chart_width: int = 12) -> Figure:
    """Render FlightData as a static equirectangular map.

    Args:
        flight: Fully computed flight data.
        chart_width: Output image width in inches (height is half).

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(chart_width, chart_width / 2))
    fig.patch.set_facecolor(_BG)
    ax.set_facecolor(_BG)

    for curve in flight.boundaries.day_side:
        _plot_curve(ax, curve, "-")
    for curve in flight.boundaries.night_side[1:]:
        _plot_curve(ax, curve, ":")

    x, y = split_at_antimeridian(flight.waypoints)
    ax.plot(x, y, color="#ffffff", linewidth=0.5, alpha=0.4, zorder=2)

    lngs = np.array([s.point.lng for s in flight.samples])
    lats = np.array([s.point.lat for s in flight.samples])
    shades = np.array([darkness_fraction(s.sun_angle_deg) for s in flight.samples])
    ax.scatter(lngs, lats, c=shades, cmap=DAYLIGHT_CMAP, vmin=0.0, vmax=1.0, s=6, zorder=3)

    sub = flight.boundaries.subsolar
    ax.scatter([sub.lng], [sub.lat], s=120, color=_DAY_COLOR, marker="o", zorder=4)

    plan = flight.plan
    for point in (plan.departure, plan.arrival):
        ax.scatter([point.lng], [point.lat], s=30, color="white", marker="^", zorder=5)

    ax.set_xlim(-180, 180)
    ax.set_ylim(-90, 90)
    ax.set_aspect("equal")
    ax.axis("off")

    return fig


def save_static_chart(flight: FlightData, output_path: Path | None = None) -> Path:
    """Save FlightData as a PNG file.

    Args:
        flight: Fully computed flight data.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        plan = flight.plan
        when_str = plan.departure_instant.strftime("%Y_%m_%d_%H_%M")
        filename = (
            f"{plan.departure.lat:.2f}_{plan.departure.lng:.2f}__"
            f"{plan.arrival.lat:.2f}_{plan.arrival.lng:.2f}__{when_str}.png"
        )
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_chart(flight)
    fig.savefig(output_path, facecolor=_BG)
    plt.close(fig)
    return output_path
