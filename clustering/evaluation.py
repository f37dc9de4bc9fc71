"""Cluster quality metrics."""

from __future__ import annotations

import numpy as np
from sklearn.metrics import calinski_harabasz_score, davies_bouldin_score, silhouette_score


def compute_internal_metrics(X, labels, include_noise: bool = False, max_silhouette_points: int = 5000) -> dict:
    X = np.asarray(X, dtype=float)
    labels = np.asarray(labels)
    noise_frac = float(np.mean(labels == -1)) if len(labels) else 0.0
    if not include_noise:
        mask = labels != -1
        X = X[mask]
        labels = labels[mask]

    unique = [c for c in np.unique(labels) if c != -1]
    if len(unique) < 2 or len(np.unique(labels)) >= len(labels):
        return {
            "davies_bouldin": float("nan"),
            "silhouette": float("nan"),
            "calinski_harabasz": float("nan"),
            "n_clusters": len(unique),
            "noise_frac": noise_frac,
            "reason": "<2 clusters",
        }

    metrics = {
        "n_clusters": len(unique),
        "noise_frac": noise_frac,
        "davies_bouldin": float(davies_bouldin_score(X, labels)),
        "calinski_harabasz": float(calinski_harabasz_score(X, labels)),
    }
    # Silhouette needs the full pairwise distance matrix.
    if len(labels) <= max_silhouette_points:
        metrics["silhouette"] = float(silhouette_score(X, labels))
    else:
        metrics["silhouette"] = float("nan")
        metrics["reason"] = f">{max_silhouette_points} points"
    return metrics
