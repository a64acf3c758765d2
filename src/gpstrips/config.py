"""
Pipeline configuration.

Defaults hold the thresholds and presentation settings of the trip
pipeline. `PipelineConfig.from_env()` lets a deployment override them
through GPSTRIPS_* environment variables or a .env file.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from gpstrips.exceptions import ConfigError

ENV_PREFIX = "GPSTRIPS_"

DEFAULT_PALETTE: Tuple[str, ...] = (
    "#e6194B", "#3cb44b", "#ffe119", "#4363d8", "#f58231", "#911eb4",
    "#42d4f4", "#f032e6", "#bfef45", "#fabed4", "#808000", "#ffd8b1",
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class PipelineConfig:
    """
    Args:
        input_csv: Path of the CSV with device_id, lat, lon, timestamp columns.
        rejects_log: Path of the reject log written by file-backed runs.
        max_time_gap_seconds: Largest gap between consecutive fixes within one trip.
        max_distance_jump_km: Largest distance between consecutive fixes within one trip.
        earth_radius_km: Sphere radius used by the haversine distance.
        palette: Trip colours, reused cyclically.
        time_format: strftime format for start/end times and reject log stamps.
        timezone: IANA zone for naive input timestamps and for formatted times.
        round_digits: Decimal places of the reported statistics.
        log_level: Name of the logging level.
    """
    input_csv: str = "points.csv"
    rejects_log: str = "rejects.log"
    max_time_gap_seconds: int = 25 * 60
    max_distance_jump_km: float = 2.0
    earth_radius_km: float = 6371.0
    palette: Tuple[str, ...] = field(default=DEFAULT_PALETTE)
    time_format: str = "%Y-%m-%d %H:%M:%S"
    timezone: str = "UTC"
    round_digits: int = 2
    log_level: str = "INFO"

    def __post_init__(self):
        if self.max_time_gap_seconds < 0:
            raise ConfigError("max_time_gap_seconds must be non-negative")
        if self.max_distance_jump_km < 0:
            raise ConfigError("max_distance_jump_km must be non-negative")
        if self.earth_radius_km <= 0:
            raise ConfigError("earth_radius_km must be positive")
        if not self.palette:
            raise ConfigError("palette must contain at least one colour")
        object.__setattr__(self, "palette", tuple(self.palette))
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown timezone: {self.timezone!r}") from e

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "PipelineConfig":
        """
        Builds a config from GPSTRIPS_* variables, after loading a .env file
        if one is found. Variables that are not set keep their defaults.
        """
        load_dotenv(dotenv_path)

        overrides = {}
        if value := os.environ.get(ENV_PREFIX + "INPUT_CSV"):
            overrides["input_csv"] = value
        if value := os.environ.get(ENV_PREFIX + "REJECTS_LOG"):
            overrides["rejects_log"] = value
        if value := os.environ.get(ENV_PREFIX + "TIME_GAP_SECONDS"):
            overrides["max_time_gap_seconds"] = _parse_env(value, int, "TIME_GAP_SECONDS")
        if value := os.environ.get(ENV_PREFIX + "DISTANCE_JUMP_KM"):
            overrides["max_distance_jump_km"] = _parse_env(value, float, "DISTANCE_JUMP_KM")
        if value := os.environ.get(ENV_PREFIX + "TIMEZONE"):
            overrides["timezone"] = value
        if value := os.environ.get(ENV_PREFIX + "LOG_LEVEL"):
            overrides["log_level"] = value.upper()

        return cls(**overrides)


def _parse_env(value: str, cast, name: str):
    try:
        return cast(value)
    except ValueError as e:
        raise ConfigError(f"{ENV_PREFIX}{name} has an invalid value: {value!r}") from e


def configure_logging(level: str = "INFO") -> None:
    numeric_level = logging._nameToLevel.get(level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
