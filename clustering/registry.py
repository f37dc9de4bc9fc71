"""Clustering registry and the fixed-radius seed-scan clusterers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np
from scipy.spatial import cKDTree

from clustering.distances import planar_distances

# Widens the KD-tree query so rounding never hides a point the exact check accepts.
_QUERY_SLACK = 1e-9


class Clusterer(Protocol):
    name: str

    def fit_predict(self, coords: np.ndarray, radius: float, min_points: int) -> np.ndarray:
        ...


def _assign(labels: np.ndarray, seed: int, members: np.ndarray, min_points: int, next_label: int) -> int:
    if members.size + 1 > min_points:
        labels[seed] = next_label
        labels[members] = next_label
        return next_label + 1
    return next_label


@dataclass
class SeedScanClusterer:
    """Pairwise reference implementation; quadratic in the number of points."""

    name: str = "seed_scan"

    def fit_predict(self, coords: np.ndarray, radius: float, min_points: int) -> np.ndarray:
        n = len(coords)
        labels = np.full(n, -1, dtype=int)
        visited = np.zeros(n, dtype=bool)
        next_label = 0
        for i in range(n):
            if visited[i]:
                continue
            visited[i] = True
            candidates = np.flatnonzero(~visited)
            members = candidates[planar_distances(coords[i], coords[candidates]) < radius]
            visited[members] = True
            next_label = _assign(labels, i, members, min_points, next_label)
        return labels


@dataclass
class KDTreeClusterer:
    """Same grouping as SeedScanClusterer, with neighbour lookup through a KD-tree."""

    name: str = "kdtree"

    def fit_predict(self, coords: np.ndarray, radius: float, min_points: int) -> np.ndarray:
        n = len(coords)
        labels = np.full(n, -1, dtype=int)
        if n == 0:
            return labels
        visited = np.zeros(n, dtype=bool)
        tree = cKDTree(coords)
        next_label = 0
        for i in range(n):
            if visited[i]:
                continue
            visited[i] = True
            nearby = np.asarray(tree.query_ball_point(coords[i], r=radius * (1 + _QUERY_SLACK)), dtype=int)
            candidates = np.sort(nearby[~visited[nearby]])
            members = candidates[planar_distances(coords[i], coords[candidates]) < radius]
            visited[members] = True
            next_label = _assign(labels, i, members, min_points, next_label)
        return labels


def get_clusterer(method_name: str) -> Clusterer:
    name = method_name.lower()
    if name == "seed_scan":
        return SeedScanClusterer()
    if name == "kdtree":
        return KDTreeClusterer()
    raise ValueError(f"Unsupported clustering method: {method_name}")
