# -*- coding: utf-8 -*-
"""
Method for polygon
"""

from numba import njit, types as numba_types
from numpy import empty, where

EPSILON = 1e-10


@njit(cache=True)
def is_left(
    x_line_0: float,
    y_line_0: float,
    x_line_1: float,
    y_line_1: float,
    x_test: float,
    y_test: float,
) -> bool:
    """
    Test if point is left of an infinit line.

    http://geomalgorithms.com/a03-_inclusion.html
    See: Algorithm 1 "Area of Triangles and Polygons"

    :param float x_line_0:
    :param float y_line_0:
    :param float x_line_1:
    :param float y_line_1:
    :param float x_test:
    :param float y_test:
    :return: > 0 for P2 left of the line through P0 and P1
            = 0 for P2  on the line
            < 0 for P2  right of the line
    :rtype: bool

    """
    # Vector product
    product = (x_line_1 - x_line_0) * (y_test - y_line_0) - (x_test - x_line_0) * (
        y_line_1 - y_line_0
    )
    return product > 0


@njit(cache=True)
def on_segment(x, y, x0, y0, x1, y1):
    """
    Check if x,y is on segment [(x0, y0), (x1, y1)], bounds included.

    :param float x: x to test
    :param float y: y to test
    :return: True if point is on segment
    :rtype: bool
    """
    if x < min(x0, x1) - EPSILON or x > max(x0, x1) + EPSILON:
        return False
    if y < min(y0, y1) - EPSILON or y > max(y0, y1) + EPSILON:
        return False
    product = (x1 - x0) * (y - y0) - (x - x0) * (y1 - y0)
    return abs(product) <= EPSILON


@njit(cache=True)
def winding_number_poly(x, y, xy_poly):
    """
    Check if x,y is in poly.

    :param float x: x to test
    :param float y: y to test
    :param vertice xy_poly: vertice of polygon
    :return: wn == 0  if x,y is not in poly
    :retype: int
    """
    nb_elt = xy_poly.shape[0]
    wn = 0
    # loop through all edges of the polygon
    for i_elt in range(nb_elt):
        if i_elt + 1 == nb_elt:
            # We close polygon with first value (no need to duplicate first value)
            x_next = xy_poly[0, 0]
            y_next = xy_poly[0, 1]
        else:
            x_next = xy_poly[i_elt + 1, 0]
            y_next = xy_poly[i_elt + 1, 1]
        if xy_poly[i_elt, 1] <= y:
            if y_next > y:
                if is_left(xy_poly[i_elt, 0], xy_poly[i_elt, 1], x_next, y_next, x, y):
                    wn += 1
        else:
            if y_next <= y:
                if not is_left(
                    xy_poly[i_elt, 0], xy_poly[i_elt, 1], x_next, y_next, x, y
                ):
                    wn -= 1
    return wn


@njit(cache=True)
def in_polygon(x, y, xy_poly):
    """
    Check if x,y is in poly, a point on an edge is considered inside.

    :param float x: x to test
    :param float y: y to test
    :param vertice xy_poly: vertice of polygon
    :return: True if point is inside or on the edge
    :rtype: bool
    """
    nb_elt = xy_poly.shape[0]
    for i_elt in range(nb_elt):
        i_next = 0 if i_elt + 1 == nb_elt else i_elt + 1
        if on_segment(
            x,
            y,
            xy_poly[i_elt, 0],
            xy_poly[i_elt, 1],
            xy_poly[i_next, 0],
            xy_poly[i_next, 1],
        ):
            return True
    return winding_number_poly(x, y, xy_poly) != 0


@njit(cache=True)
def grid_in_polygon(x_g, y_g, xy_poly):
    """
    Flag every node of a 2D grid which are in polygon (edge included).

    :param array x_g: 2D x of grid
    :param array y_g: 2D y of grid
    :param vertice xy_poly: vertice of polygon
    :return: mask with same shape than grid
    :rtype: array[bool]
    """
    x_min, x_max = xy_poly[:, 0].min(), xy_poly[:, 0].max()
    y_min, y_max = xy_poly[:, 1].min(), xy_poly[:, 1].max()
    nb_row, nb_col = x_g.shape
    m = empty((nb_row, nb_col), dtype=numba_types.bool_)
    for i in range(nb_row):
        for j in range(nb_col):
            x, y = x_g[i, j], y_g[i, j]
            if x < x_min - EPSILON or x > x_max + EPSILON:
                m[i, j] = False
            elif y < y_min - EPSILON or y > y_max + EPSILON:
                m[i, j] = False
            else:
                m[i, j] = in_polygon(x, y, xy_poly)
    return m


def pixels_in(mask):
    """
    Index of selected pixels, enumerated column after column.

    :param array[bool] mask: 2D selection
    :return: row index, column index
    :rtype: (array, array)
    """
    # nonzero follow index order, so transposition gives column-major order
    j, i = where(mask.T)
    return i, j
