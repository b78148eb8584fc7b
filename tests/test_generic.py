import numpy as np
from pytest import approx, raises

from py_eddy_scan.generic import distance, distance_km, grid_spacing, max_pairwise_distance

# One degree along a meridian
DEGREE = 6370997.0 * np.pi / 180


def test_distance():
    assert distance(0, 0, 0, 1) == approx(DEGREE)
    assert distance(10, -45, 10, -45) == 0
    # Along parallel, distance decrease with latitude
    assert distance(0, 60, 1, 60) == approx(DEGREE / 2, rel=1e-3)
    assert distance_km(0, 0, 1, 0) == approx(DEGREE / 1000)


def test_distance_array():
    x = np.arange(5, dtype="f8")
    d = distance(x[:-1], np.zeros(4), x[1:], np.zeros(4))
    assert d.shape == (4,)
    assert d == approx(DEGREE)


def test_max_pairwise_distance():
    lon = np.array((0, 1, 1, 0), dtype="f8")
    lat = np.array((0, 0, 1, 1), dtype="f8")
    d_max = max_pairwise_distance(lon, lat)
    # Diagonal is the largest
    assert d_max == approx(distance_km(0, 0, 1, 1))
    assert d_max > distance_km(0, 0, 1, 0)
    assert max_pairwise_distance(lon[:1], lat[:1]) == 0


def test_grid_spacing():
    x, y = np.meshgrid(np.arange(4, dtype="f8"), np.arange(3, dtype="f8"))
    dx, dy = grid_spacing(x, y)
    assert dx.shape == dy.shape == (3, 4)
    # Interior nodes use two steps
    assert dy[1] == approx(2 * DEGREE)
    assert dx[0, 1:-1] == approx(2 * DEGREE)
    # Edges use first single step
    assert dy[0] == approx(DEGREE)
    assert dy[-1] == approx(DEGREE)
    assert dx[:, 0] == approx(dx[:, -1])
    assert dx[0, 0] == approx(DEGREE)
    assert dx[2, 0] < dx[0, 0]


def test_grid_spacing_small():
    x, y = np.meshgrid(np.arange(2, dtype="f8"), np.arange(2, dtype="f8"))
    dx, dy = grid_spacing(x, y)
    assert dy == approx(DEGREE)
    with raises(Exception):
        grid_spacing(x[:1], y[:1])
