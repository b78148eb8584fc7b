# -*- coding: utf-8 -*-
"""
Class to load sea level anomaly grid and detect eddies on it
"""
import logging
from numbers import Real

from netCDF4 import Dataset
from numpy import arange, asarray, isfinite, isnan, ma, meshgrid, nan, pi
from pint import UnitRegistry

from ..eddy_feature import Amplitude, Contours
from ..generic import grid_spacing
from ..observations.observation import Eddy, EddiesObservations

logger = logging.getLogger("pes")


class SlaGrid(object):
    """
    Sea level anomaly on a 2D grid (rows, cols), height is stored in cm.

    Missing values (land, no data) are NaN.
    """

    __slots__ = ("x_c", "y_c", "sla", "_spacing")

    def __init__(self, lon, lat, sla, height_unit="m"):
        """
        :param array lon: longitude, vector or 2D (rows, cols)
        :param array lat: latitude, vector or 2D (rows, cols)
        :param array sla: sea level anomaly, could be transposed compared to grid
        :param str height_unit: unit of sla, any length unit understood by pint
        """
        self.x_c, self.y_c = self.build_coordinates(lon, lat)
        sla = self.check_sla(sla, self.x_c.shape)
        factor = self.unit_factor(height_unit)
        logger.debug("Factor %f applied on sla to get cm", factor)
        self.sla = sla * factor
        self._spacing = None
        if isnan(self.sla).all():
            logger.warning("All sla values are missing")

    @staticmethod
    def is_vector(a):
        return a.ndim == 1 or (a.ndim == 2 and 1 in a.shape)

    @classmethod
    def build_coordinates(cls, lon, lat):
        """
        Get 2D coordinates, vectors are expanded like meshgrid.

        :return: x, y with shape (nb lat, nb lon) for vectors
        :rtype: (array, array)
        """
        lon, lat = asarray(lon, dtype="f8"), asarray(lat, dtype="f8")
        if lon.size == 0 or lat.size == 0:
            raise Exception("Longitude and latitude must be not empty")
        if cls.is_vector(lon) and cls.is_vector(lat):
            x, y = meshgrid(lon.ravel(), lat.ravel())
        elif lon.ndim == 2 and lon.shape == lat.shape:
            x, y = lon, lat
        else:
            raise Exception(
                f"Longitude {lon.shape} and latitude {lat.shape} must be two vectors "
                "or two matrix with same shape"
            )
        if not (isfinite(x).all() and isfinite(y).all()):
            raise Exception("Longitude and latitude must be finite")
        if y.min() < -90 or y.max() > 90:
            raise Exception("Latitude must be between -90 and 90")
        if x.min() < -180 or x.max() > 360:
            raise Exception("Longitude must be between -180 and 360")
        if x.max() > 180:
            logger.warning("Longitude greater than 180 (max : %f)", x.max())
        return x, y

    @staticmethod
    def check_sla(sla, shape):
        """
        Get sla with the grid shape, sla is transposed if needed.

        :return: sla with missing values replaced by NaN
        :rtype: array
        """
        data = ma.array(sla, dtype="f8", copy=True)
        if data.ndim != 2:
            raise Exception(f"Sla must be a 2D field, not {data.ndim}D")
        if data.shape != shape:
            data = data.T
        if data.shape != shape:
            raise Exception(
                'The zonal or meridional grid points of "sla" do not match those '
                f'of "lon" or "lat" ({data.shape} != {shape}).'
            )
        data = data.filled(nan)
        data[~isfinite(data)] = nan
        return data

    @staticmethod
    def unit_factor(height_unit):
        """Factor to convert height_unit in cm"""
        units = UnitRegistry()
        in_h_unit = units.parse_expression(height_unit)
        factor, _ = in_h_unit.to("cm").to_tuple()
        return factor

    @classmethod
    def from_netcdf(cls, filename, x_name, y_name, sla_name, indexs=None, height_unit=None):
        """
        Load grid from a netcdf file.

        :param str filename: Filename to load
        :param str x_name: Name of longitude coordinates
        :param str y_name: Name of latitude coordinates
        :param str sla_name: Name of sea level anomaly
        :param dict indexs: index to use for non-coordinate dimensions (0 by default)
        :param str,None height_unit: if None, units attribute of variable is used (m by default)
        """
        if indexs is None:
            indexs = dict()
        logger.debug(
            "Load %(varname)s from %(filename)s",
            dict(varname=sla_name, filename=filename),
        )
        with Dataset(filename) as h:
            coordinates_dims = set(h.variables[x_name].dimensions)
            coordinates_dims.update(h.variables[y_name].dimensions)

            def get(varname):
                dims = h.variables[varname].dimensions
                sl = tuple(
                    slice(None) if dim in coordinates_dims else indexs.get(dim, 0)
                    for dim in dims
                )
                return h.variables[varname][sl]

            lon, lat, sla = get(x_name), get(y_name), get(sla_name)
            if height_unit is None:
                height_unit = getattr(h.variables[sla_name], "units", "m")
        return cls(ma.filled(lon, nan), ma.filled(lat, nan), sla, height_unit=height_unit)

    @property
    def shape(self):
        return self.x_c.shape

    @property
    def grid_spacing(self):
        """dx, dy in m, see :py:func:`py_eddy_scan.generic.grid_spacing`"""
        if self._spacing is None:
            self._spacing = grid_spacing(self.x_c, self.y_c)
        return self._spacing

    @property
    def cell_area(self):
        """Area (m²) of each cell, dx and dy are measured over two steps"""
        dx, dy = self.grid_spacing
        return dx * dy / 4

    @staticmethod
    def check_threshold(name, value):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise Exception(f"{name} must be a number, not {value!r}")
        if not value > 0:
            raise Exception(f"{name} must be positive, not {value!r}")

    def eddy_identification(
        self,
        amplitude_threshold=3,
        radius_threshold=45,
        level_max=100,
        level_step=1,
        min_extent=None,
        max_distance=None,
    ):
        """
        Detect eddies with closed contours of sea level anomaly.

        Levels are scanned from `level_max` to `-level_max` for cyclonic eddies,
        then from `-level_max` to `level_max` for anticyclonic eddies. Each phase
        works on its own copy of the field; pixels of an accepted eddy are masked
        for the remaining levels of the phase.

        :param float amplitude_threshold: minimal amplitude in cm
        :param float radius_threshold: radius must be greater than this value, in km
        :param float level_max: outer level of the scan in cm
        :param float level_step: step between two levels in cm
        :param float,None min_extent: look at :py:meth:`ClosedLoop.from_vertices`
        :param float,None max_distance: look at :py:meth:`ClosedLoop.from_vertices`
        :return: eddies in order of detection, cyclonic first
        :rtype: py_eddy_scan.observations.observation.EddiesObservations
        """
        self.check_threshold("Amplitude threshold", amplitude_threshold)
        self.check_threshold("Radius threshold", radius_threshold)
        self.check_threshold("Level max", level_max)
        self.check_threshold("Level step", level_step)
        loop_kwargs = dict(min_extent=min_extent, max_distance=max_distance)
        nb_step = int(round(level_max / level_step))
        levels = arange(-nb_step, nb_step + 1) * float(level_step)
        cell_area = self.cell_area

        eddies = EddiesObservations()
        for cyclonic_search in (True, False):
            # Each phase start from original field
            data = self.sla.copy()
            nb_start = len(eddies)
            for level in levels[::-1] if cyclonic_search else levels:
                contours = Contours(self.x_c, self.y_c, data, level)
                for loop in contours.closed_loops(**loop_kwargs):
                    eddy = self.evaluate_loop(
                        loop,
                        data,
                        cell_area,
                        cyclonic_search,
                        amplitude_threshold,
                        radius_threshold,
                    )
                    if eddy is None:
                        logger.debug(
                            "Contour at level %s rejected (code %d)", level, loop.reject
                        )
                        continue
                    eddies.append(eddy)
                    logger.info("%d eddy(eddies) found.", len(eddies))
                    # To reserve definitively the area
                    data[eddy.pixels] = nan
            logger.info(
                "%d %s eddies detected",
                len(eddies) - nb_start,
                "cyclonic" if cyclonic_search else "anticyclonic",
            )
        return eddies

    def evaluate_loop(
        self,
        loop,
        data,
        cell_area,
        cyclonic_search,
        amplitude_threshold,
        radius_threshold,
    ):
        """
        Apply all eddy criteria on a closed loop.

        Reject code stored in loop:

        0. Accepted
        1. Centroid outside of loop
        2. No valid value in loop
        3. Extremum on wrong side of loop level
        4. Amplitude criterion
        5. Radius criterion

        :return: eddy or None if loop is rejected
        :rtype: Eddy,None
        """
        lon_c, lat_c = loop.centroid
        if not loop.contains(lon_c, lat_c):
            loop.reject = 1
            return None
        i_in, j_in = loop.pixels_in(self.x_c, self.y_c)
        amp = Amplitude(loop.level, data, (i_in, j_in))
        if amp.nb_valid == 0:
            loop.reject = 2
            return None
        if cyclonic_search:
            index = amp.extremum_below_h0()
        else:
            index = amp.extremum_above_h0()
        if index is None:
            loop.reject = 3
            return None
        if not amp.within_amplitude_limits(amplitude_threshold):
            loop.reject = 4
            return None
        area = cell_area[i_in, j_in].sum() / 1000.0 / 1000.0
        radius = (area / pi) ** 0.5
        if radius <= radius_threshold:
            loop.reject = 5
            return None
        i, j = i_in[index], j_in[index]
        return Eddy.build(
            sign_type=-1 if cyclonic_search else 1,
            center=(lon_c, lat_c),
            amplitude=(
                self.x_c[i, j],
                self.y_c[i, j],
                amp.amplitude,
                amplitude_threshold,
            ),
            radius=(radius, radius_threshold),
            edge=loop.boundary,
            level=loop.level,
            extremum=amp.extremum,
            pixels=(i_in, j_in),
        )

    def display(self, ax, **kwargs):
        """
        Display sea level anomaly (cm)

        :param matplotlib.axes.Axes ax: matplotlib axe used to draw
        :param dict kwargs: look at :py:meth:`matplotlib.axes.Axes.pcolormesh`
        """
        kwargs.setdefault("shading", "auto")
        return ax.pcolormesh(self.x_c, self.y_c, ma.masked_invalid(self.sla), **kwargs)
