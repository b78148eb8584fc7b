# -*- coding: utf-8 -*-
"""
Base class to manage eddy observation
"""
from collections import namedtuple
from glob import glob
import logging
from numbers import Integral
from os import makedirs, path
import re

from netCDF4 import Dataset
from numpy import array, array_equal, asarray, concatenate, empty, full, nan

from .. import GLOBAL_ATTRS, VAR_DESCR, __version__

logger = logging.getLogger("pes")

_EddyBase = namedtuple(
    "Eddy",
    ("type", "center", "amplitude", "radius", "edge", "level", "extremum", "pixels"),
)


def _frozen(a, dtype):
    a = array(a, dtype=dtype)
    a.flags.writeable = False
    return a


class Eddy(_EddyBase):
    """
    Immutable record of one eddy.

    - type: -1 for cyclonic, 1 for anticyclonic
    - center: (lon, lat) of eddy centroid
    - amplitude: (lon, lat, amplitude, amplitude_threshold), lon/lat of extremum, in cm
    - radius: (radius, radius_threshold) in km
    - edge: 2xN array, longitudes in first row and latitudes in second row
    - level: height (cm) of contour used as edge
    - extremum: sea level anomaly (cm) at extremum
    - pixels: (row index, column index) of grid nodes in eddy
    """

    __slots__ = ()

    ELEMENTS = ("type", "center", "amplitude", "radius", "edge")

    @classmethod
    def build(
        cls,
        sign_type,
        center,
        amplitude,
        radius,
        edge,
        level=nan,
        extremum=nan,
        pixels=None,
    ):
        if pixels is None:
            pixels = empty(0, dtype="i8"), empty(0, dtype="i8")
        return cls(
            type=int(sign_type),
            center=tuple(float(v) for v in center),
            amplitude=tuple(float(v) for v in amplitude),
            radius=tuple(float(v) for v in radius),
            edge=_frozen(edge, "f8"),
            level=float(level),
            extremum=float(extremum),
            pixels=tuple(_frozen(i, "i8") for i in pixels),
        )

    @property
    def polarity(self):
        return "cyclonic" if self.type == -1 else "anticyclonic"

    @property
    def sign_legend(self):
        return "Cyclonic" if self.type != 1 else "Anticyclonic"

    @property
    def nb_pixel(self):
        return self.pixels[0].shape[0]

    def __eq__(self, other):
        if not isinstance(other, Eddy):
            return NotImplemented
        for name in self._fields:
            a, b = getattr(self, name), getattr(other, name)
            if name == "pixels":
                if not all(array_equal(a_, b_) for a_, b_ in zip(a, b)):
                    return False
            elif not array_equal(asarray(a), asarray(b), equal_nan=True):
                return False
        return True

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def to_netcdf(self, handler):
        """Store eddy in an opened netcdf handler"""
        values = dict(
            type=array((self.type,)),
            center=array(self.center),
            amplitude=array(self.amplitude),
            radius=array(self.radius),
            edge=self.edge,
        )
        for name in self.ELEMENTS:
            descr = VAR_DESCR[name]
            data = values[name]
            for dim, nb in zip(descr["nc_dims"], data.shape):
                if dim not in handler.dimensions:
                    handler.createDimension(dim, nb)
            var = handler.createVariable(
                descr["nc_name"], descr["nc_type"], descr["nc_dims"]
            )
            attrs = list(descr["nc_attr"].keys())
            attrs.sort()
            for attr in attrs:
                var.setncattr(attr, descr["nc_attr"][attr])
            var[:] = data
        for key, value in GLOBAL_ATTRS.items():
            handler.setncattr(key, value)
        handler.setncattr("framework_version", __version__)

    @classmethod
    def load_file(cls, filename):
        """
        Load an eddy stored with :py:meth:`to_netcdf`.

        Level, extremum and pixels are not stored.
        """
        logger.debug("Load %s", filename)
        with Dataset(filename) as h:
            data = {
                name: array(h.variables[VAR_DESCR[name]["nc_name"]][:])
                for name in cls.ELEMENTS
            }
        return cls.build(
            sign_type=data["type"][0],
            center=data["center"],
            amplitude=data["amplitude"],
            radius=data["radius"],
            edge=data["edge"],
        )


class EddiesObservations(object):
    """
    Ordered collection of eddies, in order of detection.
    """

    __slots__ = ("eddies",)

    def __init__(self, eddies=None):
        self.eddies = list() if eddies is None else list(eddies)

    def append(self, eddy):
        if not isinstance(eddy, Eddy):
            raise Exception("Only Eddy could be stored, not %s" % type(eddy))
        self.eddies.append(eddy)

    def __len__(self):
        return len(self.eddies)

    def __iter__(self):
        for eddy in self.eddies:
            yield eddy

    def __getitem__(self, item):
        if isinstance(item, slice):
            return self.__class__(self.eddies[item])
        return self.eddies[item]

    def __eq__(self, other):
        if not isinstance(other, EddiesObservations):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(a == b for a, b in zip(self, other))

    __hash__ = None

    def extract_with_sign(self, sign_type):
        return self.__class__(eddy for eddy in self if eddy.type == sign_type)

    @property
    def cyclonic(self):
        return self.extract_with_sign(-1)

    @property
    def anticyclonic(self):
        return self.extract_with_sign(1)

    def field(self, name, index):
        """Array of one element of a tuple field (as `amplitude` or `radius`)"""
        return array([getattr(eddy, name)[index] for eddy in self], dtype="f8")

    def __repr__(self):
        nb = len(self)
        nb_c = len(self.cyclonic)
        summary = f"    | {nb} eddies ({nb_c} cyclonic, {nb - nb_c} anticyclonic)"
        if nb == 0:
            return summary
        amplitude, radius = self.field("amplitude", 2), self.field("radius", 0)
        return f"""{summary}
    |   Amplitude (cm)  : mean {amplitude.mean():.2f}, max {amplitude.max():.2f}
    |   Radius (km)     : mean {radius.mean():.2f}, max {radius.max():.2f}"""

    @staticmethod
    def output_folder(path_out, year, month, day=None, hour=None):
        """
        Build folder name with date : path_out/YYYYMM[DD[HH]]

        :param str path_out: upper folder
        :param int year:
        :param int month: between 1 and 12
        :param int,None day: between 1 and 31
        :param int,None hour: between 0 and 23, day must be set
        :rtype: str
        """

        def is_int(value):
            return isinstance(value, Integral) and not isinstance(value, bool)

        if not isinstance(path_out, str) or len(path_out) == 0:
            raise Exception("Upper folder must be a non empty string")
        if not is_int(year) or year <= 0:
            raise Exception(f"Year must be a positive integer, not {year!r}")
        if not is_int(month) or not 1 <= month <= 12:
            raise Exception(f"Month must be an integer between 1 and 12, not {month!r}")
        name = f"{year}{month:02d}"
        if day is not None:
            if not is_int(day) or not 1 <= day <= 31:
                raise Exception(f"Day must be an integer between 1 and 31, not {day!r}")
            name += f"{day:02d}"
        if hour is not None:
            if day is None:
                raise Exception("Hour could be set only if day is set")
            if not is_int(hour) or not 0 <= hour <= 23:
                raise Exception(f"Hour must be an integer between 0 and 23, not {hour!r}")
            name += f"{hour:02d}"
        return path.join(path_out, name)

    def write_files(self, path_out, year, month, day=None, hour=None):
        """
        Write one netcdf file by eddy (eddy1.nc, eddy2.nc, ...) in a dated folder.

        :param str path_out: upper folder
        :return: list of written filenames
        :rtype: list
        """
        folder = self.output_folder(path_out, year, month, day, hour)
        makedirs(folder, exist_ok=True)
        filenames = list()
        for i, eddy in enumerate(self, start=1):
            filename = path.join(folder, f"eddy{i}.nc")
            with Dataset(filename, "w", format="NETCDF4") as handler:
                eddy.to_netcdf(handler)
            filenames.append(filename)
        logger.info("%d eddies stored in %s", len(filenames), folder)
        return filenames

    @classmethod
    def load_folder(cls, folder):
        """Load all eddies from a folder written by :py:meth:`write_files`"""
        filenames = glob(path.join(folder, "eddy*.nc"))
        index = list()
        for filename in filenames:
            match = re.match(r"eddy([0-9]+)\.nc$", path.basename(filename))
            if match is not None:
                index.append((int(match.group(1)), filename))
        index.sort()
        return cls(Eddy.load_file(filename) for _, filename in index)

    @staticmethod
    def flatten_edges(eddies):
        """Join all edges in two arrays, with nan between each edge"""
        if len(eddies) == 0:
            return full(1, nan), full(1, nan)
        edges = list()
        for eddy in eddies:
            edges.append(eddy.edge)
            edges.append(full((2, 1), nan))
        lon, lat = concatenate(edges, axis=1)
        return lon, lat

    def display(self, ax, cyclonic_color="b", anticyclonic_color="r", **kwargs):
        """Plot edge and centroid of eddies

        :param matplotlib.axes.Axes ax: matplotlib axe used to draw
        :param str cyclonic_color: color of cyclonic eddies
        :param str anticyclonic_color: color of anticyclonic eddies
        :param dict kwargs: look at :py:meth:`matplotlib.axes.Axes.plot`
        """
        mappables = list()
        for eddies, color in (
            (self.cyclonic, cyclonic_color),
            (self.anticyclonic, anticyclonic_color),
        ):
            if len(eddies) == 0:
                continue
            kwargs_ = kwargs.copy()
            kwargs_.setdefault("color", color)
            kwargs_.setdefault("label", eddies[0].sign_legend)
            mappables.append(ax.plot(*self.flatten_edges(eddies), **kwargs_)[0])
            kwargs_.pop("label", None)
            kwargs_.pop("ls", None)
            kwargs_["linestyle"] = "none"
            kwargs_.setdefault("marker", "+")
            mappables.append(
                ax.plot(eddies.field("center", 0), eddies.field("center", 1), **kwargs_)[0]
            )
        return mappables
