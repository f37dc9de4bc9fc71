"""Distance helpers for point clustering."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from pyproj import Geod

_WGS84 = Geod(ellps="WGS84")


def coordinate_matrix(points: Sequence) -> np.ndarray:
    """Return an (n, 2) array of [lat, lng] rows for objects with lat/lng attributes."""

    if not points:
        return np.empty((0, 2), dtype=float)
    return np.array([[p.lat, p.lng] for p in points], dtype=float)


def planar_distances(seed: np.ndarray, coords: np.ndarray) -> np.ndarray:
    """
    Euclidean distance from seed to every row of coords, in raw degree space.
    Not geodesic: a degree of longitude is treated the same as a degree of latitude.
    """

    delta = coords - seed
    return np.sqrt(delta[:, 0] ** 2 + delta[:, 1] ** 2)


def geodesic_distances_m(lat: float, lng: float, coords: np.ndarray) -> np.ndarray:
    """WGS84 distance in meters from (lat, lng) to every [lat, lng] row of coords."""

    if len(coords) == 0:
        return np.empty(0, dtype=float)
    lats = np.full(len(coords), lat, dtype=float)
    lngs = np.full(len(coords), lng, dtype=float)
    _, _, dist = _WGS84.inv(lngs, lats, coords[:, 1], coords[:, 0])
    return np.asarray(dist, dtype=float)
