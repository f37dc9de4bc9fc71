"""Data models for cleaned geotrack points and derived analysis results.

Defines the canonical point record produced by the cleaner and the read-only
summaries built from it. Everything here is frozen so a published snapshot can
be shared with readers without copying.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Point:
    """A validated location update.

    Attributes:
        id: Opaque identifier taken from ``randomized_id``
        lat: Latitude in degrees
        lng: Longitude in degrees
        alt: Altitude in meters
        speed: Ground speed in km/h
        heading: Azimuth in degrees
    """

    id: str
    lat: float
    lng: float
    alt: float
    speed: float
    heading: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _json_number(value: Any) -> Any:
    """Map NaN and infinities to None so summaries stay strict JSON."""

    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


Cluster = Tuple[Point, ...]


@dataclass(frozen=True)
class ClusterMetric:
    """Aggregate statistics for one cluster."""

    id: str
    point_count: int
    avg_speed_kmh: int
    density_pct: int


@dataclass(frozen=True)
class ClusterMarker:
    """Map placement for one cluster: centroid plus a bounded display radius."""

    id: str
    lat: float
    lng: float
    radius: float
    extent_m: Optional[float]


@dataclass(frozen=True)
class AnalysisSnapshot:
    """Complete derived state of one processing run.

    A new snapshot replaces the previous one wholesale; fields are never
    updated individually.
    """

    version: int
    cleaned: Tuple[Point, ...]
    clusters: Tuple[Cluster, ...]
    metrics: Tuple[ClusterMetric, ...]
    markers: Tuple[ClusterMarker, ...]
    anomalies: Tuple[Point, ...]
    bottlenecks: Tuple[Point, ...]
    safety_score: int
    mean_speed_kmh: float
    dropped_count: int = 0
    quality: Dict[str, Any] = field(default_factory=dict)

    def summary(self) -> Dict[str, Any]:
        """Return a JSON-friendly overview of the snapshot."""

        return {
            "version": self.version,
            "points": len(self.cleaned),
            "dropped": self.dropped_count,
            "clusters": len(self.clusters),
            "clustered_points": sum(m.point_count for m in self.metrics),
            "anomalies": len(self.anomalies),
            "bottlenecks": len(self.bottlenecks),
            "safety_score": self.safety_score,
            "mean_speed_kmh": _json_number(self.mean_speed_kmh),
            "quality": {key: _json_number(value) for key, value in self.quality.items()},
        }
