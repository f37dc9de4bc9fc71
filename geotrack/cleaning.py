"""Validation and cleaning of raw geotrack records.

Coerces every field of the raw records to numbers, converts speed from m/s to
km/h, and keeps only finite points inside the accepted speed range. Records
that fail coercion are dropped silently; only the drop count is logged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd

from .errors import InvalidInputShape, NoValidData
from .models import Point

RAW_FIELDS: List[str] = ["randomized_id", "lat", "lng", "alt", "spd", "azm"]
NUMERIC_FIELDS: List[str] = ["lat", "lng", "alt", "spd", "azm"]

MS_TO_KMH = 3.6
MIN_SPEED_KMH = 0.0
MAX_SPEED_KMH = 200.0


def ensure_record_sequence(raw: Any) -> Sequence[Any]:
    """Validate that the raw input is a list of records."""

    if not isinstance(raw, (list, tuple)):
        raise InvalidInputShape(f"Expected a sequence of point records, got {type(raw).__name__}")
    return raw


def _to_row(item: Any) -> Dict[str, Any]:
    # Points are already in km/h; carry their speed separately so it is not converted twice.
    if isinstance(item, Point):
        return {
            "randomized_id": item.id,
            "lat": item.lat,
            "lng": item.lng,
            "alt": item.alt,
            "spd": None,
            "azm": item.heading,
            "speed_kmh": item.speed,
        }
    if isinstance(item, Mapping):
        row = {col: item.get(col) for col in RAW_FIELDS}
        row["speed_kmh"] = None
        return row
    return {col: None for col in [*RAW_FIELDS, "speed_kmh"]}


def _literal(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        return None
    return value


def _coerce_numeric(values: pd.Series) -> pd.Series:
    """Convert a column of mixed literals to float, mapping failures to NaN."""

    return pd.to_numeric(values.map(_literal), errors="coerce").astype(float)


def _format_id(value: Any) -> str:
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return ""
    return str(value)


def clean_points(
    raw: Any,
    speed_factor: float = MS_TO_KMH,
    min_speed_kmh: float = MIN_SPEED_KMH,
    max_speed_kmh: float = MAX_SPEED_KMH,
) -> List[Point]:
    """
    Normalise raw records into canonical points, preserving input order.
    Raises InvalidInputShape for a non-sequence input and NoValidData when nothing survives.
    """

    records = ensure_record_sequence(raw)
    total = len(records)
    if total == 0:
        raise NoValidData("No valid data points after cleaning.")

    rows = [_to_row(item) for item in records]
    ids = [_format_id(row["randomized_id"]) for row in rows]
    frame = pd.DataFrame(
        {col: pd.Series([row[col] for row in rows], dtype=object) for col in [*NUMERIC_FIELDS, "speed_kmh"]}
    )

    lat = _coerce_numeric(frame["lat"])
    lng = _coerce_numeric(frame["lng"])
    alt = _coerce_numeric(frame["alt"]).fillna(0.0)
    heading = _coerce_numeric(frame["azm"]).fillna(0.0)
    carried = _coerce_numeric(frame["speed_kmh"])
    converted = _coerce_numeric(frame["spd"]) * speed_factor
    speed = carried.where(carried.notna(), converted)

    numeric = pd.DataFrame({"lat": lat, "lng": lng, "alt": alt, "speed": speed, "heading": heading})
    finite = np.isfinite(numeric.to_numpy()).all(axis=1)
    in_range = ((numeric["speed"] >= min_speed_kmh) & (numeric["speed"] <= max_speed_kmh)).to_numpy()
    keep = finite & in_range

    cleaned = [
        Point(
            id=ids[idx],
            lat=float(row.lat),
            lng=float(row.lng),
            alt=float(row.alt),
            speed=float(row.speed),
            heading=float(row.heading),
        )
        for idx, row in zip(numeric.index[keep], numeric[keep].itertuples(index=False))
    ]

    dropped = total - len(cleaned)
    if dropped:
        logging.warning("Dropped %d of %d records during cleaning", dropped, total)
    else:
        logging.info("Cleaned %d records, none dropped", total)

    if not cleaned:
        raise NoValidData("No valid data points after cleaning.")
    return cleaned
