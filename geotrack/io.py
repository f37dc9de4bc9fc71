"""Input/output helpers for the geotrack analyzer.

Covers JSON batch loading with a top-level shape check, conversion of points
and summaries to DataFrames, and CSV/JSON export of a snapshot.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pandas as pd

from .errors import InvalidInputShape
from .metrics import markers_frame, metrics_frame
from .models import AnalysisSnapshot, Point

POINT_COLUMNS: List[str] = ["id", "lat", "lng", "alt", "speed", "heading"]


def load_raw_points(path: str | Path) -> List[Dict[str, Any]]:
    """Read a JSON file whose top level must be an array of point records."""

    path = Path(path)
    logging.info("Reading %s", path)
    with path.open("r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise InvalidInputShape(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise InvalidInputShape(f"{path} must contain a JSON array of data points.")
    logging.info("Loaded %d raw records from %s", len(data), path)
    return data


def points_frame(points: Sequence[Point]) -> pd.DataFrame:
    return pd.DataFrame([p.to_dict() for p in points], columns=POINT_COLUMNS)


def save_dataframe(df: pd.DataFrame, path: str | Path) -> None:
    """Persist a DataFrame to CSV."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    logging.info("Saved %d rows to %s", len(df), path)


def export_snapshot(snapshot: AnalysisSnapshot, out_dir: str | Path) -> Path:
    """Write every result of a snapshot under out_dir and return the directory."""

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    save_dataframe(points_frame(snapshot.cleaned), out_dir / "cleaned_points.csv")
    save_dataframe(metrics_frame(snapshot.metrics), out_dir / "cluster_metrics.csv")
    save_dataframe(markers_frame(snapshot.markers), out_dir / "cluster_markers.csv")
    save_dataframe(points_frame(snapshot.anomalies), out_dir / "anomalies.csv")
    save_dataframe(points_frame(snapshot.bottlenecks), out_dir / "bottlenecks.csv")
    (out_dir / "summary.json").write_text(json.dumps(snapshot.summary(), indent=2, allow_nan=False), encoding="utf-8")
    logging.info("Exported snapshot v%d to %s", snapshot.version, out_dir)
    return out_dir
