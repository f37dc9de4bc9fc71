import numpy as np
import pytest

from clustering.distances import geodesic_distances_m, planar_distances


def test_planar_distances_in_degrees():
    coords = np.array([[0.0, 0.0], [3.0, 4.0], [0.005, 0.0]])
    assert np.allclose(planar_distances(np.array([0.0, 0.0]), coords), [0.0, 5.0, 0.005])


def test_geodesic_degree_of_latitude():
    dist = geodesic_distances_m(0.0, 0.0, np.array([[1.0, 0.0]]))
    assert dist[0] == pytest.approx(110_574, rel=1e-3)


def test_longitude_degrees_shrink_with_latitude():
    equator = geodesic_distances_m(0.0, 0.0, np.array([[0.0, 0.005]]))[0]
    north = geodesic_distances_m(60.0, 0.0, np.array([[60.0, 0.005]]))[0]
    assert north == pytest.approx(equator / 2, rel=0.01)
