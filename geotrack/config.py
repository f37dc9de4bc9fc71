"""Configuration helpers for the geotrack analyzer.

Provides YAML loading, small utilities for accessing nested configuration
values with defaults, and the strongly-typed settings used by the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml


def load_config(path: str | Path) -> Dict[str, Any]:
    """Load a YAML configuration file."""

    with Path(path).open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def get_nested(config: Dict[str, Any], keys: list[str], default: Any) -> Any:
    """Retrieve a nested value from a config dict with a default."""

    current: Any = config
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


@dataclass(frozen=True)
class AnalyzerConfig:
    """Thresholds and limits for one analyzer instance."""

    speed_factor: float = 3.6
    min_speed_kmh: float = 0.0
    max_speed_kmh: float = 200.0
    clustering_method: str = "seed_scan"
    cluster_radius_deg: float = 0.005
    min_cluster_points: int = 5
    anomaly_sigma: float = 2.0
    bottleneck_speed_kmh: float = 10.0
    history_limit: int = 1000
    feed_interval_sec: float = 5.0
    position_jitter_deg: float = 0.001
    altitude_jitter_m: float = 10.0
    feed_min_speed_kmh: float = 10.0
    feed_max_speed_kmh: float = 60.0

    def __post_init__(self) -> None:
        if self.history_limit <= 0:
            raise ValueError(f"history_limit must be positive, got {self.history_limit}")

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "AnalyzerConfig":
        """Build a config from the sections of a loaded YAML document."""

        defaults = cls()
        return cls(
            speed_factor=float(get_nested(cfg, ["cleaning", "speed_factor"], defaults.speed_factor)),
            min_speed_kmh=float(get_nested(cfg, ["cleaning", "min_speed_kmh"], defaults.min_speed_kmh)),
            max_speed_kmh=float(get_nested(cfg, ["cleaning", "max_speed_kmh"], defaults.max_speed_kmh)),
            clustering_method=str(get_nested(cfg, ["clustering", "method"], defaults.clustering_method)).lower(),
            cluster_radius_deg=float(get_nested(cfg, ["clustering", "radius_deg"], defaults.cluster_radius_deg)),
            min_cluster_points=int(get_nested(cfg, ["clustering", "min_points"], defaults.min_cluster_points)),
            anomaly_sigma=float(get_nested(cfg, ["anomalies", "sigma"], defaults.anomaly_sigma)),
            bottleneck_speed_kmh=float(
                get_nested(cfg, ["anomalies", "bottleneck_speed_kmh"], defaults.bottleneck_speed_kmh)
            ),
            history_limit=int(get_nested(cfg, ["realtime", "history_limit"], defaults.history_limit)),
            feed_interval_sec=float(get_nested(cfg, ["realtime", "interval_sec"], defaults.feed_interval_sec)),
            position_jitter_deg=float(
                get_nested(cfg, ["realtime", "position_jitter_deg"], defaults.position_jitter_deg)
            ),
            altitude_jitter_m=float(get_nested(cfg, ["realtime", "altitude_jitter_m"], defaults.altitude_jitter_m)),
            feed_min_speed_kmh=float(get_nested(cfg, ["realtime", "min_speed_kmh"], defaults.feed_min_speed_kmh)),
            feed_max_speed_kmh=float(get_nested(cfg, ["realtime", "max_speed_kmh"], defaults.feed_max_speed_kmh)),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AnalyzerConfig":
        return cls.from_dict(load_config(path))
