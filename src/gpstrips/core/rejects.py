import abc
import enum
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List

from gpstrips.exceptions import RejectLogError


class RejectReason(enum.Enum):
    INVALID_COLUMN_COUNT = "Invalid column count"
    INVALID_COORDINATE_OR_TIMESTAMP = "Invalid coordinates or timestamp"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class RejectRecord:
    """
    A raw input row that failed validation.
    raw_row is the original fields joined with commas.
    """
    raw_row: str
    reason: RejectReason
    logged_at: datetime

    def format_line(self, time_format: str = "%Y-%m-%d %H:%M:%S") -> str:
        stamp = self.logged_at.strftime(time_format)
        return f"{stamp} | REJECTED: {self.raw_row} | REASON: {self.reason.message}"


class RejectLog(abc.ABC):
    """
    Append-only sink for rejected rows.
    A run calls reset() once before any append().
    """

    def __init__(self, time_format: str = "%Y-%m-%d %H:%M:%S"):
        self.time_format = time_format

    @abc.abstractmethod
    def reset(self) -> None:
        """Discards the contents left by a previous run."""
        pass

    @abc.abstractmethod
    def append(self, record: RejectRecord) -> None:
        pass

    @abc.abstractmethod
    def read_text(self) -> str:
        """Returns everything written since the last reset."""
        pass


class FileRejectLog(RejectLog):
    """Writes one line per rejected row to a text file."""

    def __init__(self, path: str | Path, time_format: str = "%Y-%m-%d %H:%M:%S"):
        super().__init__(time_format)
        self.path = Path(path)

    def reset(self) -> None:
        try:
            with open(self.path, mode="w", encoding="utf-8"):
                pass
        except OSError as e:
            raise RejectLogError(f"Cannot reset reject log {self.path}: {e}") from e

    def append(self, record: RejectRecord) -> None:
        try:
            with open(self.path, mode="a", encoding="utf-8") as f:
                f.write(record.format_line(self.time_format) + "\n")
        except OSError as e:
            raise RejectLogError(f"Cannot write to reject log {self.path}: {e}") from e

    def read_text(self) -> str:
        if not self.path.exists():
            return ""
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise RejectLogError(f"Cannot read reject log {self.path}: {e}") from e


class MemoryRejectLog(RejectLog):
    """Keeps rejected rows in memory."""

    def __init__(self, time_format: str = "%Y-%m-%d %H:%M:%S"):
        super().__init__(time_format)
        self.records: List[RejectRecord] = []

    def reset(self) -> None:
        self.records = []

    def append(self, record: RejectRecord) -> None:
        self.records.append(record)

    def read_text(self) -> str:
        return "".join(r.format_line(self.time_format) + "\n" for r in self.records)


class NullRejectLog(RejectLog):
    """Drops every record."""

    def reset(self) -> None:
        pass

    def append(self, record: RejectRecord) -> None:
        pass

    def read_text(self) -> str:
        return ""
