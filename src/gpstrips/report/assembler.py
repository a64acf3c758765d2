import json
import logging
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Sequence
from zoneinfo import ZoneInfo

import pandas as pd
from shapely.geometry import LineString, mapping

from gpstrips.config import DEFAULT_PALETTE
from gpstrips.core.trip import Trip
from gpstrips.metrics.distance import EARTH_RADIUS_KM
from gpstrips.metrics.trip_stats import calculate_trip_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingSummary:
    total_rows: int = 0
    valid_points: int = 0
    rejected_rows: int = 0

    def __post_init__(self):
        if self.total_rows != self.valid_points + self.rejected_rows:
            raise ValueError(
                f"total_rows ({self.total_rows}) must equal valid_points ({self.valid_points}) "
                f"+ rejected_rows ({self.rejected_rows})"
            )

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class TripReport:
    """
    Everything a renderer needs: one GeoJSON LineString feature per trip,
    the processing counters and the reject log text.
    """
    features: List[Dict[str, Any]] = field(default_factory=list)
    summary: ProcessingSummary = field(default_factory=ProcessingSummary)
    reject_log: str = ""
    input_available: bool = True

    COLUMNS = (
        "trip_id", "color", "total_distance_km", "duration_s", "duration_min",
        "avg_speed_kmh", "max_speed_kmh", "point_count", "device_ids",
        "start_time", "end_time",
    )

    def to_geojson(self) -> Dict[str, Any]:
        return {"type": "FeatureCollection", "features": self.features}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "geoJson": self.to_geojson(),
            "stats": self.summary.as_dict(),
            "reject_log_content": self.reject_log,
            "input_available": self.input_available,
        }

    def to_frame(self) -> pd.DataFrame:
        """One row per trip with its properties."""
        return pd.DataFrame([f["properties"] for f in self.features], columns=list(TripReport.COLUMNS))


class ResultAssembler:
    """
    Packages trips into GeoJSON features.

    Trips with fewer than two points are skipped. Ids (trip_1, trip_2, ...)
    and palette colours are assigned in order over the emitted trips only, so
    numbering has no gaps.
    """

    def __init__(
        self,
        palette: Sequence[str] = DEFAULT_PALETTE,
        time_format: str = "%Y-%m-%d %H:%M:%S",
        tz: ZoneInfo | timezone = timezone.utc,
        round_digits: int = 2,
        earth_radius_km: float = EARTH_RADIUS_KM,
    ):
        if not palette:
            raise ValueError("palette must contain at least one colour")
        self.palette = list(palette)
        self.time_format = time_format
        self.tz = tz
        self.round_digits = round_digits
        self.earth_radius_km = earth_radius_km

    def color_for(self, index: int) -> str:
        """Colour of the emitted trip at 0-based position `index`."""
        return self.palette[index % len(self.palette)]

    def format_time(self, timestamp: int) -> str:
        return datetime.fromtimestamp(timestamp, tz=self.tz).strftime(self.time_format)

    def build_feature(self, trip: Trip, index: int) -> Dict[str, Any]:
        stats = calculate_trip_stats(trip, self.earth_radius_km)
        digits = self.round_digits
        geometry = mapping(LineString(trip.coordinates))

        return {
            "type": "Feature",
            "properties": {
                "trip_id": f"trip_{index + 1}",
                "color": self.color_for(index),
                "total_distance_km": round(stats.total_distance_km, digits),
                "duration_s": stats.duration_s,
                "duration_min": round(stats.duration_min, digits),
                "avg_speed_kmh": round(stats.avg_speed_kmh, digits),
                "max_speed_kmh": round(stats.max_speed_kmh, digits),
                "point_count": stats.point_count,
                "device_ids": trip.device_ids,
                "start_time": self.format_time(trip.start_time),
                "end_time": self.format_time(trip.end_time),
            },
            "geometry": {
                "type": geometry["type"],
                "coordinates": [list(c) for c in geometry["coordinates"]],
            },
        }

    def assemble(
        self,
        trips: Sequence[Trip],
        summary: ProcessingSummary,
        reject_log: str = "",
        input_available: bool = True,
    ) -> TripReport:
        features = []
        skipped = 0
        for trip in trips:
            if trip.point_count < 2:
                skipped += 1
                continue
            features.append(self.build_feature(trip, len(features)))

        if skipped:
            logger.debug("Skipped %d single-point trips", skipped)

        return TripReport(
            features=features,
            summary=summary,
            reject_log=reject_log,
            input_available=input_available,
        )


def write_report(report: TripReport, path: str | Path, indent: int = 2) -> Path:
    """Writes the report as JSON and returns the path."""
    path = Path(path)
    with open(path, mode="w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=indent)
    return path
