from numpy import exp, linspace, meshgrid, zeros
from pytest import fixture

from py_eddy_scan.generic import distance

LON = linspace(0, 6, 61)
LAT = linspace(27, 33, 61)
# Width of gaussian in m
SIGMA = 40000.0


def gaussian_sla(*bumps):
    """Sea level anomaly (m) with gaussian bumps, bump is (lon, lat, height in m)"""
    x, y = meshgrid(LON, LAT)
    sla = zeros(x.shape)
    for lon, lat, height in bumps:
        d = distance(lon, lat, x, y)
        sla += height * exp(-(d ** 2) / (2 * SIGMA ** 2))
    return sla


@fixture(scope="module")
def depression():
    return gaussian_sla((3, 30, -0.2))


@fixture(scope="module")
def elevation():
    return gaussian_sla((3, 30, 0.2))


@fixture(scope="module")
def dipole():
    return gaussian_sla((1.5, 30, -0.2), (4.5, 30, 0.2))
