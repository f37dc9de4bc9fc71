"""Speed anomaly and bottleneck detection.

Anomalies are points whose speed is more than ``sigma`` population standard
deviations above the mean speed of the whole cleaned set. Bottlenecks are
points slower than a fixed threshold and are found independently.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import numpy as np

from .models import Point

ANOMALY_SIGMA = 2.0
BOTTLENECK_SPEED_KMH = 10.0


def speed_statistics(points: Sequence[Point]) -> Tuple[float, float]:
    """Return population mean and standard deviation (ddof=0) of point speeds."""

    if not points:
        raise ValueError("Speed statistics need at least one point")
    speeds = np.array([p.speed for p in points], dtype=float)
    return float(speeds.mean()), float(speeds.std())


def detect(
    points: Sequence[Point],
    sigma: float = ANOMALY_SIGMA,
    bottleneck_kmh: float = BOTTLENECK_SPEED_KMH,
) -> Tuple[List[Point], List[Point]]:
    """
    Split out speed anomalies and bottlenecks, both in input order.
    Comparisons are strict, so a point exactly on a threshold is in neither set.
    """

    mean, std = speed_statistics(points)
    threshold = mean + sigma * std
    anomalies = [p for p in points if p.speed > threshold]
    bottlenecks = [p for p in points if p.speed < bottleneck_kmh]
    logging.info(
        "Speed mean=%.2f std=%.2f threshold=%.2f: %d anomalies, %d bottlenecks",
        mean,
        std,
        threshold,
        len(anomalies),
        len(bottlenecks),
    )
    return anomalies, bottlenecks
