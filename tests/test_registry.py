import pytest

from clustering.registry import get_clusterer


def test_get_clusterer_seed_scan():
    c = get_clusterer("seed_scan")
    assert c.name == "seed_scan"


def test_get_clusterer_kdtree():
    c = get_clusterer("KDTree")
    assert c.name == "kdtree"


def test_get_clusterer_unknown():
    with pytest.raises(ValueError):
        get_clusterer("optics")
