from .point import GpsPoint
from .trip import Trip
from .rejects import (
    RejectReason,
    RejectRecord,
    RejectLog,
    FileRejectLog,
    MemoryRejectLog,
    NullRejectLog,
)
from .stream import CsvRowStream

__all__ = [
    "GpsPoint",
    "Trip",
    "RejectReason",
    "RejectRecord",
    "RejectLog",
    "FileRejectLog",
    "MemoryRejectLog",
    "NullRejectLog",
    "CsvRowStream",
]
