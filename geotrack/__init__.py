"""Utilities for geotrack point cleaning, clustering and speed analysis.

This package provides modular building blocks to validate raw location points,
group them into proximity clusters, summarise each cluster, flag speed
anomalies and bottlenecks, and publish the result as an immutable snapshot.
"""

from .config import AnalyzerConfig
from .errors import GeotrackError, InvalidInputShape, NoValidData
from .models import AnalysisSnapshot, ClusterMarker, ClusterMetric, Point
from .pipeline import GeotrackAnalyzer, run_analysis

__all__ = [
    "AnalysisSnapshot",
    "AnalyzerConfig",
    "ClusterMarker",
    "ClusterMetric",
    "GeotrackAnalyzer",
    "GeotrackError",
    "InvalidInputShape",
    "NoValidData",
    "Point",
    "run_analysis",
]
