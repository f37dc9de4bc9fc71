"""Pipeline orchestration for the geotrack analyzer.

Runs cleaning, clustering, cluster summaries, anomaly detection and scoring
over one batch of points and publishes the result as a single immutable
snapshot. Runs are serialised, and a failed run leaves the previously
published snapshot in place.
"""

from __future__ import annotations

import threading
from typing import Any, Optional, Sequence

from clustering.distances import coordinate_matrix
from clustering.evaluation import compute_internal_metrics

from .anomalies import detect, speed_statistics
from .base import PipelineComponent
from .cleaning import clean_points, ensure_record_sequence
from .clustering import groups_from_labels, label_points
from .config import AnalyzerConfig
from .errors import NoValidData
from .metrics import cluster_markers, summarize_clusters
from .models import AnalysisSnapshot, Point
from .scoring import safety_score


def run_analysis(
    points: Sequence[Point],
    config: AnalyzerConfig | None = None,
    version: int = 1,
    dropped_count: int = 0,
) -> AnalysisSnapshot:
    """Derive every result from an already-cleaned, non-empty point sequence."""

    if not points:
        raise NoValidData("Analysis requires at least one cleaned point.")
    config = config or AnalyzerConfig()

    labels = label_points(
        points,
        method=config.clustering_method,
        radius=config.cluster_radius_deg,
        min_points=config.min_cluster_points,
    )
    clusters = groups_from_labels(points, labels)
    anomalies, bottlenecks = detect(
        points,
        sigma=config.anomaly_sigma,
        bottleneck_kmh=config.bottleneck_speed_kmh,
    )
    mean_speed, _ = speed_statistics(points)

    return AnalysisSnapshot(
        version=version,
        cleaned=tuple(points),
        clusters=tuple(clusters),
        metrics=tuple(summarize_clusters(clusters, len(points))),
        markers=tuple(cluster_markers(clusters)),
        anomalies=tuple(anomalies),
        bottlenecks=tuple(bottlenecks),
        safety_score=safety_score(len(anomalies), len(points)),
        mean_speed_kmh=mean_speed,
        dropped_count=dropped_count,
        quality=compute_internal_metrics(coordinate_matrix(points), labels),
    )


class GeotrackAnalyzer(PipelineComponent):
    """Own the current analysis snapshot and replace it once per processing run."""

    def __init__(self, config: Optional[AnalyzerConfig] = None) -> None:
        super().__init__(config or AnalyzerConfig())
        self._lock = threading.Lock()
        self._snapshot: Optional[AnalysisSnapshot] = None
        self._version = 0

    @property
    def snapshot(self) -> Optional[AnalysisSnapshot]:
        """Most recently published snapshot, or None before the first successful run."""

        return self._snapshot

    def _clean(self, records: Sequence[Any]) -> list[Point]:
        return clean_points(
            records,
            speed_factor=self.config.speed_factor,
            min_speed_kmh=self.config.min_speed_kmh,
            max_speed_kmh=self.config.max_speed_kmh,
        )

    def _publish(self, cleaned: Sequence[Point], dropped: int) -> AnalysisSnapshot:
        snapshot = run_analysis(cleaned, self.config, version=self._version + 1, dropped_count=dropped)
        self._version = snapshot.version
        self._snapshot = snapshot
        summary = snapshot.summary()
        self.logger.info(
            "Published snapshot v%d: %d points, %d clusters, %d anomalies, %d bottlenecks, safety=%d",
            snapshot.version,
            summary["points"],
            summary["clusters"],
            summary["anomalies"],
            summary["bottlenecks"],
            snapshot.safety_score,
        )
        return snapshot

    def process(self, raw: Any) -> AnalysisSnapshot:
        """Clean a full raw batch and publish a fresh snapshot from it."""

        with self._lock:
            records = ensure_record_sequence(raw)
            cleaned = self._clean(records)
            return self._publish(cleaned, dropped=len(records) - len(cleaned))

    def append_point(self, point: Any) -> AnalysisSnapshot:
        """
        Append one point (a Point or a raw record) to the current set, keep the
        newest history_limit points, and re-run the whole pipeline.
        """

        with self._lock:
            current = self._snapshot
            if current is None:
                raise NoValidData("No data loaded; process a batch before appending points.")
            retained = [*current.cleaned, point][-self.config.history_limit :]
            cleaned = self._clean(retained)
            return self._publish(cleaned, dropped=len(retained) - len(cleaned))
