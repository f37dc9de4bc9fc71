"""Proximity clustering of cleaned points.

Each unvisited point in input order seeds a group of all still-unvisited
points closer than a fixed planar radius. Groups larger than ``min_points``
become clusters; the rest stay unclustered for good. Grouping is single-pass,
so members are only ever compared with their seed.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from clustering.distances import coordinate_matrix
from clustering.registry import get_clusterer

from .models import Cluster, Point

CLUSTER_RADIUS_DEG = 0.005
MIN_CLUSTER_POINTS = 5


def label_points(
    points: Sequence[Point],
    method: str = "seed_scan",
    radius: float = CLUSTER_RADIUS_DEG,
    min_points: int = MIN_CLUSTER_POINTS,
) -> np.ndarray:
    """Return one label per point: -1 for unclustered, else the cluster index in seed order."""

    clusterer = get_clusterer(method)
    return clusterer.fit_predict(coordinate_matrix(points), radius=radius, min_points=min_points)


def groups_from_labels(points: Sequence[Point], labels: np.ndarray) -> List[Cluster]:
    """Collect members of each label, keeping input order within a cluster."""

    n_clusters = int(labels.max()) + 1 if len(labels) else 0
    groups: List[List[Point]] = [[] for _ in range(n_clusters)]
    for point, label in zip(points, labels):
        if label != -1:
            groups[int(label)].append(point)
    return [tuple(group) for group in groups]


def cluster_points(
    points: Sequence[Point],
    method: str = "seed_scan",
    radius: float = CLUSTER_RADIUS_DEG,
    min_points: int = MIN_CLUSTER_POINTS,
) -> List[Cluster]:
    """
    Group points into clusters of more than min_points members.
    Clusters are returned in the order their seeds appear in the input.
    """

    labels = label_points(points, method=method, radius=radius, min_points=min_points)
    clusters = groups_from_labels(points, labels)
    logging.info(
        "Clustered %d of %d points into %d clusters (method=%s, radius=%s)",
        sum(len(c) for c in clusters),
        len(points),
        len(clusters),
        method,
        radius,
    )
    return clusters
