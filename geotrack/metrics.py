"""Per-cluster statistics and map markers.

Summaries are computed from the clusters as produced by the cluster engine,
without re-sorting, so ``Cluster 1`` is always the cluster with the earliest
seed point.
"""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np
import pandas as pd

from clustering.distances import coordinate_matrix, geodesic_distances_m

from .models import Cluster, ClusterMarker, ClusterMetric

MARKER_SCALE = 20.0
MAX_MARKER_RADIUS = 10.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, as dashboards expect."""

    return int(math.floor(value + 0.5))


def cluster_label(index: int) -> str:
    return f"Cluster {index + 1}"


def summarize_clusters(clusters: Sequence[Cluster], total_count: int) -> List[ClusterMetric]:
    """Build point count, mean speed and density share for every cluster."""

    if total_count <= 0:
        raise ValueError("total_count must be positive")

    metrics: List[ClusterMetric] = []
    for idx, cluster in enumerate(clusters):
        speeds = np.array([p.speed for p in cluster], dtype=float)
        metrics.append(
            ClusterMetric(
                id=cluster_label(idx),
                point_count=len(cluster),
                avg_speed_kmh=round_half_up(float(speeds.mean())),
                density_pct=round_half_up(100.0 * len(cluster) / total_count),
            )
        )
    return metrics


def cluster_markers(clusters: Sequence[Cluster]) -> List[ClusterMarker]:
    """
    Centroid and display radius per cluster, plus the geodesic extent in meters
    from the centroid to the farthest member. The extent is None when any member
    lies outside the valid latitude range, since no geodesic exists there.
    """

    markers: List[ClusterMarker] = []
    for idx, cluster in enumerate(clusters):
        coords = coordinate_matrix(cluster)
        lat, lng = coords.mean(axis=0)
        extent_m = None
        if np.all(np.abs(coords[:, 0]) <= 90.0):
            extent = geodesic_distances_m(float(lat), float(lng), coords)
            extent_m = float(extent.max()) if extent.size else 0.0
        markers.append(
            ClusterMarker(
                id=cluster_label(idx),
                lat=float(lat),
                lng=float(lng),
                radius=min(len(cluster) / MARKER_SCALE, MAX_MARKER_RADIUS),
                extent_m=extent_m,
            )
        )
    return markers


def metrics_frame(metrics: Sequence[ClusterMetric]) -> pd.DataFrame:
    columns = ["id", "point_count", "avg_speed_kmh", "density_pct"]
    return pd.DataFrame([vars(m) for m in metrics], columns=columns)


def markers_frame(markers: Sequence[ClusterMarker]) -> pd.DataFrame:
    columns = ["id", "lat", "lng", "radius", "extent_m"]
    return pd.DataFrame([vars(m) for m in markers], columns=columns)
