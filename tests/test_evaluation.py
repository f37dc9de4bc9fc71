import numpy as np

from clustering.evaluation import compute_internal_metrics


def test_all_noise_returns_nan():
    X = np.random.rand(5, 2)
    labels = np.array([-1, -1, -1, -1, -1])
    metrics = compute_internal_metrics(X, labels)
    assert np.isnan(metrics["silhouette"])
    assert metrics["reason"] == "<2 clusters"
    assert metrics["noise_frac"] == 1.0


def test_single_cluster_returns_nan():
    X = np.random.rand(5, 2)
    labels = np.array([0, 0, 0, 0, 0])
    metrics = compute_internal_metrics(X, labels)
    assert np.isnan(metrics["silhouette"])


def test_separated_clusters_score_well():
    X = np.array([[0.0, 0.0], [0.0, 0.001], [0.001, 0.0], [1.0, 1.0], [1.0, 1.001], [1.001, 1.0], [5.0, 5.0]])
    labels = np.array([0, 0, 0, 1, 1, 1, -1])
    metrics = compute_internal_metrics(X, labels)
    assert metrics["n_clusters"] == 2
    assert metrics["silhouette"] > 0.9
    assert metrics["noise_frac"] == 1 / 7


def test_large_input_skips_silhouette():
    X = np.vstack([np.zeros((30, 2)), np.ones((30, 2))]) + np.random.rand(60, 2) * 0.01
    labels = np.array([0] * 30 + [1] * 30)
    metrics = compute_internal_metrics(X, labels, max_silhouette_points=50)
    assert np.isnan(metrics["silhouette"])
    assert np.isfinite(metrics["davies_bouldin"])
