import logging
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence
from zoneinfo import ZoneInfo

import pandas as pd

from gpstrips.core.point import GpsPoint
from gpstrips.core.rejects import RejectLog, RejectReason, RejectRecord, NullRejectLog

logger = logging.getLogger(__name__)

MIN_COLUMNS = 4

DECIMAL_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def parse_float(value: str) -> Optional[float]:
    """
    Parses a plain ASCII decimal string. Returns None for empty, malformed
    or non-finite input.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not DECIMAL_RE.fullmatch(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def parse_timestamp(value: str, tz: ZoneInfo | timezone = timezone.utc) -> Optional[int]:
    """
    Parses a date-time string into whole epoch seconds.
    Naive values are read in `tz`; values with an offset keep it.
    Returns None when the string cannot be parsed.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        ts = pd.to_datetime(value.strip())
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is None:
        # Local times skipped or repeated by a DST change become NaT
        ts = ts.tz_localize(tz, ambiguous="NaT", nonexistent="NaT")
        if pd.isna(ts):
            return None
    return math.floor(ts.timestamp())


@dataclass
class ParseResult:
    points: List[GpsPoint] = field(default_factory=list)
    rejects: List[RejectRecord] = field(default_factory=list)
    total_rows: int = 0

    @property
    def valid_points(self) -> int:
        return len(self.points)

    @property
    def rejected_rows(self) -> int:
        return len(self.rejects)


class RecordValidator:
    """
    Turns raw CSV rows (device_id, lat, lon, timestamp) into GpsPoints.
    Every invalid row produces exactly one RejectRecord, which is appended to
    the reject log in the order rows are read.
    """

    def __init__(
        self,
        reject_log: RejectLog | None = None,
        logged_at: datetime | None = None,
        tz: ZoneInfo | timezone = timezone.utc,
    ):
        """
        Args:
            reject_log: Sink for rejected rows. Defaults to a NullRejectLog.
            logged_at: Processing time stamped on every reject. Defaults to now.
            tz: Zone used for timestamps without an offset.
        """
        self.reject_log = reject_log if reject_log is not None else NullRejectLog()
        self.logged_at = logged_at if logged_at is not None else datetime.now(tz)
        self.tz = tz

    def validate(self, row: Sequence[str]) -> GpsPoint | RejectRecord:
        """
        Validates a single row without touching the reject log.
        """
        if len(row) < MIN_COLUMNS:
            return self._reject(row, RejectReason.INVALID_COLUMN_COUNT)

        device_id, raw_lat, raw_lon, raw_time = row[0], row[1], row[2], row[3]
        lat = parse_float(raw_lat)
        lon = parse_float(raw_lon)
        timestamp = parse_timestamp(raw_time, self.tz)

        if (lat is None or not -90.0 <= lat <= 90.0
                or lon is None or not -180.0 <= lon <= 180.0
                or timestamp is None):
            return self._reject(row, RejectReason.INVALID_COORDINATE_OR_TIMESTAMP)

        return GpsPoint(device_id=device_id, lat=lat, lon=lon, timestamp=timestamp)

    def process_row(self, row: Sequence[str]) -> GpsPoint | RejectRecord:
        """
        Validates a row and logs it if it is rejected.
        """
        result = self.validate(row)
        if isinstance(result, RejectRecord):
            logger.debug("Rejected row %r: %s", result.raw_row, result.reason.message)
            self.reject_log.append(result)
        return result

    def process(self, rows: Iterable[Sequence[str]]) -> ParseResult:
        """
        Batch helper: validates all rows and collects points and rejects.
        """
        result = ParseResult()
        for row in rows:
            result.total_rows += 1
            outcome = self.process_row(row)
            if isinstance(outcome, GpsPoint):
                result.points.append(outcome)
            else:
                result.rejects.append(outcome)
        return result

    def _reject(self, row: Sequence[str], reason: RejectReason) -> RejectRecord:
        return RejectRecord(raw_row=",".join(row), reason=reason, logged_at=self.logged_at)
