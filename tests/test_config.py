import pytest

from geotrack.config import AnalyzerConfig, get_nested, load_config


def test_defaults():
    cfg = AnalyzerConfig()
    assert cfg.cluster_radius_deg == 0.005
    assert cfg.min_cluster_points == 5
    assert cfg.history_limit == 1000
    assert cfg.clustering_method == "seed_scan"


def test_from_dict_overrides_sections():
    cfg = AnalyzerConfig.from_dict(
        {"clustering": {"method": "KDTree", "radius_deg": 0.01}, "realtime": {"history_limit": 50}}
    )
    assert cfg.clustering_method == "kdtree"
    assert cfg.cluster_radius_deg == 0.01
    assert cfg.history_limit == 50
    assert cfg.anomaly_sigma == 2.0


def test_load_yaml(tmp_path):
    path = tmp_path / "geotrack.yaml"
    path.write_text("anomalies:\n  sigma: 3\n  bottleneck_speed_kmh: 5\n", encoding="utf-8")
    cfg = AnalyzerConfig.from_yaml(path)
    assert cfg.anomaly_sigma == 3.0
    assert cfg.bottleneck_speed_kmh == 5.0


def test_empty_yaml_is_empty_dict(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == {}


def test_get_nested_default():
    assert get_nested({"a": {"b": 1}}, ["a", "b"], 0) == 1
    assert get_nested({"a": 1}, ["a", "b"], "x") == "x"


def test_non_positive_history_limit_is_rejected():
    with pytest.raises(ValueError):
        AnalyzerConfig.from_dict({"realtime": {"history_limit": 0}})
