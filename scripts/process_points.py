import argparse
import logging
from pathlib import Path

from gpstrips.config import PipelineConfig, configure_logging
from gpstrips.core.rejects import FileRejectLog
from gpstrips.exceptions import RejectLogError
from gpstrips.pipeline import TripPipeline
from gpstrips.report import write_report

logger = logging.getLogger(__name__)

def main():
    config = PipelineConfig.from_env()

    parser = argparse.ArgumentParser(description="Split a GPS point CSV into trips and write a JSON report.")
    parser.add_argument("input", nargs="?", default=config.input_csv, help="CSV with device_id,lat,lon,timestamp")
    parser.add_argument("--output", default="trips.json", help="Path of the JSON report")
    parser.add_argument("--rejects", default=config.rejects_log, help="Path of the reject log")
    parser.add_argument("--log-level", default=config.log_level, help="Logging level")
    args = parser.parse_args()

    configure_logging(args.log_level)

    pipeline = TripPipeline(config=config, reject_log=FileRejectLog(args.rejects, config.time_format))
    try:
        report = pipeline.run(args.input)
    except RejectLogError as e:
        logger.error("%s", e)
        raise SystemExit(1)

    output = write_report(report, Path(args.output))

    stats = report.summary
    print(f"Total rows:    {stats.total_rows}")
    print(f"Valid points:  {stats.valid_points}")
    print(f"Rejected rows: {stats.rejected_rows}")
    if not report.input_available:
        print(f"Input {args.input} was not available.")

    if report.features:
        frame = report.to_frame()
        columns = ["trip_id", "point_count", "total_distance_km", "duration_min",
                   "avg_speed_kmh", "max_speed_kmh", "start_time", "end_time"]
        print()
        print(frame[columns].to_string(index=False))
    else:
        print("No trips found.")

    print(f"\nReport saved to {output}")

if __name__ == "__main__":
    main()
