"""
End-to-end trip pipeline: read rows, validate, sort, segment, assemble.

A run is synchronous and owns all of its state. The reject log is reset
once at the start of every run, before anything is written to it.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from gpstrips.config import PipelineConfig
from gpstrips.core.rejects import RejectLog, FileRejectLog
from gpstrips.core.stream import CsvRowStream
from gpstrips.exceptions import InputUnavailableError
from gpstrips.modules.parsing.validator import RecordValidator
from gpstrips.modules.segmentation.gap import GapSegmenter, sort_points
from gpstrips.report.assembler import ProcessingSummary, ResultAssembler, TripReport

logger = logging.getLogger(__name__)


class TripPipeline:
    """
    Runs the cleaning -> segmentation -> statistics pipeline over one input.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        reject_log: Optional[RejectLog] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            config: Thresholds and presentation settings. Defaults to PipelineConfig().
            reject_log: Sink for rejected rows. Defaults to a FileRejectLog at config.rejects_log.
            clock: Returns the processing time stamped on rejects. Defaults to now in the configured zone.
        """
        self.config = config or PipelineConfig()
        if reject_log is None:
            reject_log = FileRejectLog(self.config.rejects_log, self.config.time_format)
        self.reject_log = reject_log
        self.clock = clock or (lambda: datetime.now(self.config.tzinfo))

        self.segmenter = GapSegmenter(
            max_time_gap_seconds=self.config.max_time_gap_seconds,
            max_distance_km=self.config.max_distance_jump_km,
            earth_radius_km=self.config.earth_radius_km,
        )
        self.assembler = ResultAssembler(
            palette=self.config.palette,
            time_format=self.config.time_format,
            tz=self.config.tzinfo,
            round_digits=self.config.round_digits,
            earth_radius_km=self.config.earth_radius_km,
        )

    def run(self, input_path: str | Path | None = None) -> TripReport:
        """
        Processes a CSV file. A missing or unreadable file yields an empty
        report with input_available=False. An unusable reject log raises
        RejectLogError.
        """
        path = Path(input_path) if input_path is not None else Path(self.config.input_csv)
        stream = CsvRowStream(path)

        try:
            rows: List[Sequence[str]] = list(stream.stream())
        except InputUnavailableError as e:
            logger.warning("%s; continuing with no points", e)
            # The reject log is still reset so stale rejects never leak into this run
            self.reject_log.reset()
            return self.assembler.assemble([], ProcessingSummary(), "", input_available=False)

        return self.run_rows(rows, source=str(path))

    def run_rows(self, rows: Iterable[Sequence[str]], source: str = "<rows>") -> TripReport:
        """
        Processes rows that are already split into fields (header excluded).
        """
        self.reject_log.reset()
        logger.info("Processing GPS rows from %s", source)

        validator = RecordValidator(
            reject_log=self.reject_log,
            logged_at=self.clock(),
            tz=self.config.tzinfo,
        )
        parsed = validator.process(rows)
        summary = ProcessingSummary(
            total_rows=parsed.total_rows,
            valid_points=parsed.valid_points,
            rejected_rows=parsed.rejected_rows,
        )

        points = sort_points(parsed.points)
        trips = self.segmenter.process(points)
        report = self.assembler.assemble(trips, summary, self.reject_log.read_text())

        logger.info(
            "Processed %d rows: %d valid, %d rejected, %d trips (%d reported)",
            summary.total_rows, summary.valid_points, summary.rejected_rows,
            len(trips), len(report.features),
        )
        return report


def run_pipeline(
    input_path: str | Path | None = None,
    config: Optional[PipelineConfig] = None,
    reject_log: Optional[RejectLog] = None,
) -> TripReport:
    """Convenience wrapper around TripPipeline(...).run(...)."""
    return TripPipeline(config=config, reject_log=reject_log).run(input_path)
