# -*- coding: utf-8 -*-
"""
Class to extract closed contours and compute amplitude
"""

import logging

from contourpy import LineType, contour_generator
from numpy import (
    ascontiguousarray,
    concatenate,
    floor,
    isnan,
    ma,
    nanmax,
    nanmin,
    where,
)

from .generic import max_pairwise_distance
from .poly import grid_in_polygon, in_polygon, pixels_in

logger = logging.getLogger("pes")


class ClosedLoop(object):
    """
    Closed contour which could be the edge of an eddy.

    Use :py:meth:`from_vertices` to build it, every check on the raw line
    is done there.
    """

    # Minimal extent (in degrees) along longitude and latitude
    MIN_EXTENT = 0.5
    # Maximal distance (in km) between two vertices
    MAX_DISTANCE = 400.0

    __slots__ = (
        "level",
        "vertices",
        "x_min",
        "x_max",
        "y_min",
        "y_max",
        "max_distance",
        "reject",
    )

    def __init__(self, vertices, level, max_distance):
        """
        :param array vertices: distinct vertices (without closing vertex)
        :param float level: contour height
        :param float max_distance: largest distance between two vertices in km
        """
        self.level = level
        self.vertices = vertices
        self.x_min, self.y_min = vertices.min(axis=0)
        self.x_max, self.y_max = vertices.max(axis=0)
        self.max_distance = max_distance
        self.reject = 0

    @classmethod
    def from_vertices(cls, vertices, level, min_extent=None, max_distance=None):
        """
        Check a raw contour line and build closed loop if line is accepted.

        Checks are done in this order:

        1. At least 3 distinct vertices
        2. First and last vertices are the same
        3. Extent in longitude **and** latitude is greater or equal to `min_extent`
        4. Largest distance between two vertices is lower or equal to `max_distance`

        :param array vertices: (N, 2) vertices of line, last one must repeat first one
        :param float level: contour height
        :param float,None min_extent: in degrees, if None :py:attr:`MIN_EXTENT` is used
        :param float,None max_distance: in km, if None :py:attr:`MAX_DISTANCE` is used
        :return: closed loop or None if line is rejected
        :rtype: ClosedLoop,None
        """
        if min_extent is None:
            min_extent = cls.MIN_EXTENT
        if max_distance is None:
            max_distance = cls.MAX_DISTANCE
        if vertices.shape[0] < 4:
            return None
        if vertices[0, 0] != vertices[-1, 0] or vertices[0, 1] != vertices[-1, 1]:
            return None
        vertices = ascontiguousarray(vertices[:-1], dtype="f8")
        x_min, y_min = vertices.min(axis=0)
        x_max, y_max = vertices.max(axis=0)
        if (x_max - x_min) < min_extent or (y_max - y_min) < min_extent:
            return None
        d_max = max_pairwise_distance(vertices[:, 0], vertices[:, 1])
        if d_max > max_distance:
            return None
        return cls(vertices, level, d_max)

    @property
    def lon(self):
        return self.vertices[:, 0]

    @property
    def lat(self):
        return self.vertices[:, 1]

    @property
    def nb_vertices(self):
        return self.vertices.shape[0]

    @property
    def bbox(self):
        return self.x_min, self.x_max, self.y_min, self.y_max

    @property
    def extent(self):
        return self.x_max - self.x_min, self.y_max - self.y_min

    @property
    def centroid(self):
        """Arithmetic mean of vertices (no area weighting)"""
        lon, lat = self.vertices.mean(axis=0)
        return lon, lat

    @property
    def boundary(self):
        """Closed edge, first vertex is repeated at the end

        :return: lon in first row, lat in second row
        :rtype: array
        """
        return concatenate((self.vertices, self.vertices[:1])).T

    def contains(self, x, y):
        """True if x, y is inside the loop or on its edge"""
        return in_polygon(x, y, self.vertices)

    def pixels_in(self, x_g, y_g):
        """
        Index of grid nodes inside the loop (edge included).

        :param array x_g: 2D longitude of grid
        :param array y_g: 2D latitude of grid
        :return: row index, column index, enumerated column after column
        :rtype: (array, array)
        """
        return pixels_in(grid_in_polygon(x_g, y_g, self.vertices))


class Contours(object):
    """
    Iso-lines of a 2D field for one level.

    Contours stop on missing values (NaN or masked).
    """

    __slots__ = ("level", "paths")

    def __init__(self, x, y, z, level):
        """
        :param array x: 2D longitude (rows, cols)
        :param array y: 2D latitude (rows, cols)
        :param array z: field with same shape
        :param float level: height of iso-line
        """
        generator = contour_generator(
            x, y, ma.masked_invalid(z), line_type=LineType.Separate
        )
        self.level = level
        self.paths = generator.lines(level)
        logger.debug("%d contours at level %s", len(self.paths), level)

    def __len__(self):
        return len(self.paths)

    def __iter__(self):
        for path in self.paths:
            yield path

    def closed_loops(self, **kwargs):
        """
        Yield only lines which are closed loops.

        :param dict kwargs: look at :py:meth:`ClosedLoop.from_vertices`
        """
        for path in self.paths:
            loop = ClosedLoop.from_vertices(path, self.level, **kwargs)
            if loop is not None:
                yield loop


class Amplitude(object):
    """
    Class to find the extremum of sea level anomaly within a closed loop
    and compute *amplitude* against the loop height.
    """

    __slots__ = (
        "h_0",
        "sla",
        "extremum",
        "amplitude",
    )

    def __init__(self, contour_height, data, pixels):
        """
        Create amplitude object

        :param float contour_height:
        :param array data: field, missing values are NaN
        :param (array,array) pixels: index of all pixels in contour
        """
        # Height of the contour
        self.h_0 = contour_height
        # Only pixel in contour, could contain NaN
        self.sla = data[pixels]
        self.extremum = None
        # Amplitude which will be provide
        self.amplitude = 0

    @property
    def nb_pixel(self):
        return self.sla.shape[0]

    @property
    def nb_valid(self):
        return (~isnan(self.sla)).sum()

    def within_amplitude_limits(self, amplitude_threshold):
        return self.amplitude >= amplitude_threshold

    def _select(self, extremum):
        """
        Store amplitude and choose one pixel for extremum.

        When several pixels have the extremum value, the pixel at the
        (floored) mean of their positions in contour enumeration is chosen.
        """
        self.extremum = extremum
        self.amplitude = abs(extremum - self.h_0)
        # 1-based position
        index = where(self.sla == extremum)[0] + 1
        if index.shape[0] > 1:
            logger.debug("%d pixels share extremum %f", index.shape[0], extremum)
        return int(floor(index.mean())) - 1

    def extremum_below_h0(self):
        """
        Minimum must be below contour height for cyclonic eddies.

        :return: position of extremum in pixels or None
        :rtype: int,None
        """
        if self.nb_valid == 0:
            return None
        extremum = nanmin(self.sla)
        if extremum > self.h_0:
            return None
        return self._select(extremum)

    def extremum_above_h0(self):
        """
        Maximum must be above contour height for anticyclonic eddies.

        :return: position of extremum in pixels or None
        :rtype: int,None
        """
        if self.nb_valid == 0:
            return None
        extremum = nanmax(self.sla)
        if extremum < self.h_0:
            return None
        return self._select(extremum)
