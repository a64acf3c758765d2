from gpstrips.config import PipelineConfig, configure_logging
from gpstrips.pipeline import TripPipeline, run_pipeline
from gpstrips.report import TripReport, ProcessingSummary, write_report

__all__ = [
    "PipelineConfig",
    "configure_logging",
    "TripPipeline",
    "run_pipeline",
    "TripReport",
    "ProcessingSummary",
    "write_report",
]
