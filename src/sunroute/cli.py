"""Command-line entry point: daylight and darkness along a flight.

    sunroute JFK LHR --when "2026-06-21 18:30" --tz America/New_York --png out.png
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pytz import UnknownTimeZoneError
from pytz.exceptions import InvalidTimeError

from sunroute.airports import AirportLookupError
from sunroute.compute import run
from sunroute.models import FlightData, FlightQuery
from sunroute.settings import Settings
from sunroute.timing import format_duration

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def format_summary(flight: FlightData) -> str:
    summary = flight.summary
    lines = [
        f"Distance:  {summary.distance_km:,.0f} km",
        f"Duration:  {format_duration(summary.duration_ms)}",
        f"Daylight:  {format_duration(summary.daylight_ms)}",
        f"Darkness:  {format_duration(summary.darkness_ms)}",
    ]
    if summary.transitions:
        lines.append("Transitions:")
        for t in summary.transitions:
            lines.append(
                f"  {t.kind.value:<8} {t.instant:%Y-%m-%d %H:%M} UTC  ({t.fraction:.0%} along)"
            )
    else:
        lines.append("Transitions: none")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sunroute",
        description="Day, twilight, and night along a great-circle flight",
    )
    parser.add_argument("departure", help="Departure airport code (e.g. JFK)")
    parser.add_argument("arrival", help="Arrival airport code (e.g. LHR)")
    parser.add_argument(
        "-w", "--when",
        required=True,
        help='Departure time, "YYYY-MM-DD HH:MM"',
    )
    parser.add_argument(
        "--tz",
        default="UTC",
        help="IANA zone name the departure time is given in (default: UTC)",
    )
    parser.add_argument("-s", "--speed", type=float, help="Cruise speed [km/h]")
    parser.add_argument("-n", "--samples", type=int, help="Number of route samples")
    parser.add_argument("--png", type=Path, help="Write a static map to this PNG path")
    parser.add_argument("--html", type=Path, help="Write an interactive globe to this HTML path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = Settings.from_env()
        flight = run(
            FlightQuery(
                departure=args.departure,
                arrival=args.arrival,
                when=args.when,
                tz=args.tz,
                cruise_speed_kmh=args.speed,
                sample_count=args.samples,
            ),
            settings=settings,
        )
    except (AirportLookupError, UnknownTimeZoneError, InvalidTimeError, ValueError) as e:
        logger.error("%s", e)
        return 1

    print(format_summary(flight))

    if args.png:
        from sunroute.renderers.static import save_static_chart

        print(f"Saved: {save_static_chart(flight, args.png)}")
    if args.html:
        from sunroute.renderers.plotly_globe import render_plotly_globe

        args.html.parent.mkdir(parents=True, exist_ok=True)
        render_plotly_globe(flight).write_html(args.html)
        print(f"Saved: {args.html}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
