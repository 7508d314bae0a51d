"""Airport code -> coordinates lookup over a flat dataset.

A small dataset of major airports ships with the package. The full OurAirports
dataset can be downloaded with `fetch_airports`.
"""

import csv
import io
import logging
from collections.abc import Iterable
from pathlib import Path

import httpx

from sunroute.models import Airport, GeoPoint, InvalidCoordinateError

logger = logging.getLogger(__name__)

_DATA = Path(__file__).parent / "data"
BUNDLED_AIRPORTS = _DATA / "airports.csv"
OURAIRPORTS_URL = "https://davidmegginson.github.io/ourairports-data/airports.csv"

_default_airports: dict[str, Airport] | None = None


class AirportLookupError(Exception):
    """Airport code not present in the dataset."""


def _parse_rows(
    rows: Iterable[dict[str, str]], code_col: str, lat_col: str, lng_col: str
) -> dict[str, Airport]:
    airports: dict[str, Airport] = {}
    for row in rows:
        code = (row.get(code_col) or "").strip().upper()
        if not code:
            continue
        try:
            location = GeoPoint(lat=float(row[lat_col]), lng=float(row[lng_col]))
        except (InvalidCoordinateError, ValueError, KeyError) as e:
            logger.warning("Skipping airport %s: %s", code, e)
            continue
        airports[code] = Airport(code=code, name=row.get("name", "").strip(), location=location)
    return airports


def load_airports(path: Path | None = None) -> dict[str, Airport]:
    """Load a ``code,name,latitude,longitude`` CSV into a code -> Airport map.

    Args:
        path: CSV file. Defaults to the bundled dataset.

    Returns:
        Dict keyed by upper-case IATA code.
    """
    path = path or BUNDLED_AIRPORTS
    with path.open(encoding="utf-8", newline="") as f:
        airports = _parse_rows(csv.DictReader(f), "code", "latitude", "longitude")
    logger.debug("Loaded %d airports from %s", len(airports), path)
    return airports


def fetch_airports(
    url: str = OURAIRPORTS_URL, client: httpx.Client | None = None
) -> dict[str, Airport]:
    """Download the OurAirports CSV and keep rows that have an IATA code.

    Args:
        url: CSV location.
        client: Optional httpx client (for proxies, retries, or tests).

    Returns:
        Dict keyed by upper-case IATA code.

    Raises:
        httpx.HTTPStatusError: On a non-2xx response.
    """
    if client is None:
        resp = httpx.get(url, timeout=30, follow_redirects=True)
    else:
        resp = client.get(url)
    resp.raise_for_status()
    reader = csv.DictReader(io.StringIO(resp.text))
    airports = _parse_rows(reader, "iata_code", "latitude_deg", "longitude_deg")
    logger.info("Fetched %d airports from %s", len(airports), url)
    return airports


def lookup_airport(code: str, airports: dict[str, Airport] | None = None) -> Airport:
    """Resolve an airport code (case-insensitive).

    Args:
        code: IATA code such as "jfk" or "LHR".
        airports: Dataset to search. Defaults to the bundled dataset.

    Raises:
        AirportLookupError: When the code is not in the dataset.
    """
    global _default_airports
    if airports is None:
        if _default_airports is None:
            _default_airports = load_airports()
        airports = _default_airports

    key = code.strip().upper()
    try:
        return airports[key]
    except KeyError:
        raise AirportLookupError(f"Airport not found: {code}") from None
