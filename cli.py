"""CLI entry point for the geotrack analyzer.

Orchestrates loading a JSON batch, cleaning, clustering, anomaly detection and
scoring, optionally extends the dataset with the synthetic real-time feed, and
exports the final snapshot as CSV/JSON.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Dict

from geotrack.config import AnalyzerConfig, get_nested, load_config
from geotrack.errors import GeotrackError
from geotrack.feed import RealtimeFeed
from geotrack.io import export_snapshot, load_raw_points
from geotrack.pipeline import GeotrackAnalyzer


def configure_logging(log_cfg: Dict[str, object]) -> None:
    """Configure root logger with both file and console handlers."""

    log_dir = Path(log_cfg.get("dir", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    filename = log_cfg.get("filename", "geotrack.log")
    log_path = log_dir / filename
    level_name = str(log_cfg.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s - %(levelname)s - %(message)s"
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(fmt))
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(fmt))

    root.addHandler(file_handler)
    root.addHandler(stream_handler)
    root.info("Logging to %s (level=%s)", log_path, level_name)


def main(
    config_path: str | None = "config/geotrack.yaml",
    input_path: str | None = None,
    output_dir: str | None = None,
    realtime_sec: float = 0.0,
) -> int:
    cfg = load_config(config_path) if config_path and Path(config_path).exists() else {}

    configure_logging(cfg.get("logging", {}) or {})
    analyzer_cfg = AnalyzerConfig.from_dict(cfg)
    input_path = input_path or get_nested(cfg, ["input", "path"], None)
    output_dir = output_dir or get_nested(cfg, ["output", "dir"], "output")
    if not input_path:
        logging.error("No input file given; pass --input or set input.path in the config.")
        return 2

    analyzer = GeotrackAnalyzer(analyzer_cfg)
    try:
        snapshot = analyzer.process(load_raw_points(input_path))
    except GeotrackError as exc:
        logging.error("Processing failed: %s", exc)
        return 1

    if realtime_sec > 0:
        feed = RealtimeFeed(analyzer, seed=get_nested(cfg, ["realtime", "seed"], None))
        feed.start()
        try:
            time.sleep(realtime_sec)
        except KeyboardInterrupt:
            logging.info("Interrupted; exporting current snapshot.")
        finally:
            feed.stop()
        snapshot = analyzer.snapshot

    for metric in snapshot.metrics:
        logging.info(
            "%s: %d points, avg %d km/h, density %d%%",
            metric.id,
            metric.point_count,
            metric.avg_speed_kmh,
            metric.density_pct,
        )
    logging.info("Cluster quality: %s", snapshot.quality)
    export_snapshot(snapshot, output_dir)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Geotrack point clustering and speed analysis.")
    parser.add_argument(
        "-c",
        "--config",
        default="config/geotrack.yaml",
        help="Path to YAML config file.",
    )
    parser.add_argument("-i", "--input", default=None, help="JSON file with an array of raw points.")
    parser.add_argument("-o", "--output", default=None, help="Directory for exported results.")
    parser.add_argument(
        "--realtime",
        type=float,
        default=0.0,
        metavar="SECONDS",
        help="Run the synthetic real-time feed for this long before exporting.",
    )
    args = parser.parse_args()
    sys.exit(main(args.config, args.input, args.output, args.realtime))
