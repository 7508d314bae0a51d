"""Runtime settings, read from SUNROUTE_* environment variables.

Entry points call ``load_dotenv()`` before ``Settings.from_env()`` so a local
``.env`` file is honoured.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from sunroute.classify import DEFAULT_BANDS, DEFAULT_DAYLIGHT_THRESHOLD_DEG
from sunroute.models import BandTable
from sunroute.solar import SkyfieldSolarNoon, SolarNoonFn, noaa_solar_noon
from sunroute.timing import EARTH_RADIUS_KM

_ROOT = Path(__file__).parent.parent.parent

SOLAR_NOON_PROVIDERS = ("noaa", "skyfield")


@lru_cache(maxsize=4)
def _skyfield_solar_noon(ephemeris_dir: Path, ephemeris: str) -> SkyfieldSolarNoon:
    return SkyfieldSolarNoon(ephemeris_dir, ephemeris)


@dataclass(frozen=True)
class Settings:
    cruise_speed_kmh: float = 750.0
    sample_count: int = 1000
    boundary_points: int = 360
    earth_radius_km: float = EARTH_RADIUS_KM
    daylight_threshold_deg: float = DEFAULT_DAYLIGHT_THRESHOLD_DEG
    bands: BandTable = DEFAULT_BANDS
    solar_noon_provider: str = "noaa"  # "noaa" or "skyfield"
    ephemeris_dir: Path = field(default_factory=lambda: _ROOT / "resources")
    ephemeris: str = "de421.bsp"

    def __post_init__(self) -> None:
        if self.solar_noon_provider not in SOLAR_NOON_PROVIDERS:
            raise ValueError(
                f"unknown solar noon provider {self.solar_noon_provider!r}, "
                f"expected one of {SOLAR_NOON_PROVIDERS}"
            )
        if self.sample_count < 1:
            raise ValueError(f"sample_count must be >= 1, got {self.sample_count}")
        if not self.cruise_speed_kmh > 0:
            raise ValueError(f"cruise speed must be positive, got {self.cruise_speed_kmh}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build Settings from SUNROUTE_* variables; unset variables keep defaults.

        Recognised variables: SUNROUTE_CRUISE_SPEED_KMH, SUNROUTE_SAMPLE_COUNT,
        SUNROUTE_BOUNDARY_POINTS, SUNROUTE_EARTH_RADIUS_KM,
        SUNROUTE_DAYLIGHT_THRESHOLD_DEG, SUNROUTE_BANDS (four comma separated
        cut points), SUNROUTE_SOLAR_NOON, SUNROUTE_EPHEMERIS_DIR,
        SUNROUTE_EPHEMERIS.

        Raises:
            ValueError: On malformed values.
        """
        env = os.environ if environ is None else environ
        kwargs: dict = {}

        numeric = {
            "SUNROUTE_CRUISE_SPEED_KMH": ("cruise_speed_kmh", float),
            "SUNROUTE_SAMPLE_COUNT": ("sample_count", int),
            "SUNROUTE_BOUNDARY_POINTS": ("boundary_points", int),
            "SUNROUTE_EARTH_RADIUS_KM": ("earth_radius_km", float),
            "SUNROUTE_DAYLIGHT_THRESHOLD_DEG": ("daylight_threshold_deg", float),
        }
        for var, (name, convert) in numeric.items():
            if env.get(var):
                kwargs[name] = convert(env[var])

        if env.get("SUNROUTE_BANDS"):
            cuts = [float(v) for v in env["SUNROUTE_BANDS"].split(",")]
            if len(cuts) != 4:
                raise ValueError(f"SUNROUTE_BANDS needs 4 cut points, got {len(cuts)}")
            kwargs["bands"] = BandTable(*cuts)
        if env.get("SUNROUTE_SOLAR_NOON"):
            kwargs["solar_noon_provider"] = env["SUNROUTE_SOLAR_NOON"].lower()
        if env.get("SUNROUTE_EPHEMERIS_DIR"):
            kwargs["ephemeris_dir"] = Path(env["SUNROUTE_EPHEMERIS_DIR"])
        if env.get("SUNROUTE_EPHEMERIS"):
            kwargs["ephemeris"] = env["SUNROUTE_EPHEMERIS"]

        return cls(**kwargs)

    def solar_noon(self) -> SolarNoonFn:
        """The configured solar-noon calculator."""
        if self.solar_noon_provider == "skyfield":
            return _skyfield_solar_noon(self.ephemeris_dir, self.ephemeris)
        return noaa_solar_noon
