# -*- coding: utf-8 -*-
"""
Tool method which use mostly numba
"""

from numba import njit
from numpy import arctan2, cos, empty, pi, sin

EARTH_RADIUS = 6370997.0


@njit(cache=True, fastmath=True)
def distance(lon0, lat0, lon1, lat1):
    """
    Compute distance between points from each line.

    :param float lon0:
    :param float lat0:
    :param float lon1:
    :param float lat1:
    :return: distance (in m)
    :rtype: array
    """
    D2R = pi / 180.0
    sin_dlat = sin((lat1 - lat0) * 0.5 * D2R)
    sin_dlon = sin((lon1 - lon0) * 0.5 * D2R)
    cos_lat1 = cos(lat0 * D2R)
    cos_lat2 = cos(lat1 * D2R)
    a_val = sin_dlon ** 2 * cos_lat1 * cos_lat2 + sin_dlat ** 2
    return EARTH_RADIUS * 2 * arctan2(a_val ** 0.5, (1 - a_val) ** 0.5)


@njit(cache=True)
def distance_km(lon0, lat0, lon1, lat1):
    """Great circle distance in km, see :py:func:`distance`"""
    return distance(lon0, lat0, lon1, lat1) / 1000.0


@njit(cache=True)
def max_pairwise_distance(lon, lat):
    """
    Get the largest distance between two vertices of a line.

    Every couple is checked, so cost is quadratic with number of vertices.

    :param array lon:
    :param array lat:
    :return: distance (in km)
    :rtype: float
    """
    nb = lon.shape[0]
    d_max = 0.0
    for i in range(nb):
        lon_i, lat_i = lon[i], lat[i]
        for j in range(i + 1, nb):
            d = distance_km(lon_i, lat_i, lon[j], lat[j])
            if d > d_max:
                d_max = d
    return d_max


def grid_spacing(x, y):
    """
    Physical length spanned by two grid steps along each axis.

    Interior nodes use the distance between both neighbours, first and last
    row (or column) use the single step between the first two nodes.

    :param array x: 2D longitude (rows, cols)
    :param array y: 2D latitude (rows, cols)
    :return: dx (along columns), dy (along rows) in m
    :rtype: (array, array)
    """
    nb_row, nb_col = x.shape
    if nb_row < 2 or nb_col < 2:
        raise Exception(
            f"Grid must have at least 2 nodes along each axis (shape : {x.shape})"
        )
    dx, dy = empty(x.shape), empty(x.shape)
    if nb_row > 2:
        dy[1:-1] = distance(x[:-2], y[:-2], x[2:], y[2:])
    dy[0] = distance(x[0], y[0], x[1], y[1])
    dy[-1] = dy[0]
    if nb_col > 2:
        dx[:, 1:-1] = distance(x[:, :-2], y[:, :-2], x[:, 2:], y[:, 2:])
    dx[:, 0] = distance(x[:, 0], y[:, 0], x[:, 1], y[:, 1])
    dx[:, -1] = dx[:, 0]
    return dx, dy
