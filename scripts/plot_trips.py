import argparse
from pathlib import Path

import matplotlib.pyplot as plt
import matplotlib.lines as mlines

from gpstrips.config import PipelineConfig, configure_logging
from gpstrips.core.rejects import MemoryRejectLog
from gpstrips.pipeline import TripPipeline

def plot_report(report, output_path: Path, title: str):
    fig, ax = plt.subplots(figsize=(10, 8))

    handles = []
    for feature in report.features:
        props = feature["properties"]
        coords = feature["geometry"]["coordinates"]
        lons = [c[0] for c in coords]
        lats = [c[1] for c in coords]

        ax.plot(lons, lats, color=props["color"], linewidth=2, alpha=0.8)
        ax.scatter(lons[0], lats[0], color=props["color"], marker="o", s=40, zorder=5)
        ax.scatter(lons[-1], lats[-1], color=props["color"], marker="s", s=40, zorder=5)

        label = f"{props['trip_id']} ({props['total_distance_km']} km, {props['avg_speed_kmh']} km/h)"
        handles.append(mlines.Line2D([], [], color=props["color"], linewidth=2, label=label))

    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title(title)
    if handles:
        ax.legend(handles=handles, loc="best", fontsize="small")

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

def main():
    config = PipelineConfig.from_env()

    parser = argparse.ArgumentParser(description="Plot the trips found in a GPS point CSV.")
    parser.add_argument("input", nargs="?", default=config.input_csv, help="CSV with device_id,lat,lon,timestamp")
    parser.add_argument("--output", default="trips.png", help="Path of the PNG to write")
    args = parser.parse_args()

    configure_logging(config.log_level)

    # Rejects only matter for the report, keep them out of the filesystem here
    report = TripPipeline(config=config, reject_log=MemoryRejectLog()).run(args.input)
    if not report.features:
        print("No trips to plot.")
        return

    stats = report.summary
    title = f"{len(report.features)} trips from {stats.valid_points} points ({stats.rejected_rows} rejected)"
    plot_report(report, Path(args.output), title)
    print(f"Plot saved to {args.output}")

if __name__ == "__main__":
    main()
