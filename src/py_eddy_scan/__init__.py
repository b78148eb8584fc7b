# -*- coding: utf-8 -*-
"""
This file is part of py-eddy-scan.

    py-eddy-scan is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    py-eddy-scan is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    You should have received a copy of the GNU General Public License
    along with py-eddy-scan.  If not, see <http://www.gnu.org/licenses/>.

"""

import logging
from argparse import ArgumentParser

__version__ = "0.1.0"


def start_logger():
    FORMAT_LOG = (
        "%(levelname)-8s %(asctime)s %(module)s.%(funcName)s :\n\t\t\t\t\t%(message)s"
    )
    logger = logging.getLogger("pes")
    if len(logger.handlers) == 0:
        # set up logging to CONSOLE
        console = logging.StreamHandler()
        console.setFormatter(ColoredFormatter(FORMAT_LOG))
        # add the handler to the root logger
        logger.addHandler(console)
    return logger


class ColoredFormatter(logging.Formatter):
    COLOR_LEVEL = dict(
        CRITICAL="\033[37;41m",
        ERROR="\033[31;47m",
        WARNING="\033[30;47m",
        INFO="\033[36m",
        DEBUG="\033[34m\t",
    )

    def __init__(self, message):
        super().__init__(message)

    def format(self, record):
        color = self.COLOR_LEVEL.get(record.levelname, "")
        color_reset = "\033[0m"
        model = color + "%s" + color_reset
        record.msg = model % record.msg
        record.funcName = model % record.funcName
        record.module = model % record.module
        record.levelname = model % record.levelname
        return super().format(record)


class EddyParser(ArgumentParser):
    """General parser for applications"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_base_argument()

    def add_base_argument(self):
        """Base arguments"""
        self.add_argument(
            "-v",
            "--verbose",
            dest="logging_level",
            default="ERROR",
            help="Levels : DEBUG, INFO, WARNING," " ERROR, CRITICAL",
        )

    def parse_args(self, *args, **kwargs):
        logger = start_logger()
        # Parsing
        opts = super().parse_args(*args, **kwargs)
        # set current level
        logger.setLevel(getattr(logging, opts.logging_level.upper()))
        return opts


VAR_DESCR = dict(
    type=dict(
        nc_name="type",
        nc_type="i1",
        nc_dims=("type",),
        nc_attr=dict(
            standard_name="Eddy polarity",
            long_name="Eddy polarity, cyclonic or anticyclonic",
            description="-1 for cyclonic eddy while 1 for anticyclonic eddy",
        ),
    ),
    center=dict(
        nc_name="center",
        nc_type="f8",
        nc_dims=("center",),
        nc_attr=dict(
            standard_name="Eddy centroid",
            long_name="Longitude and latitude coordinate of eddy centroid",
            description="[longitude latitude]",
        ),
    ),
    amplitude=dict(
        nc_name="amplitude",
        nc_type="f8",
        nc_dims=("amplitude",),
        nc_attr=dict(
            standard_name="Eddy amplitude",
            long_name="The sea suface height (SSH) difference (positive with unit of "
            "centimeters) between extreme value of SSH falls within the range of eddy "
            "and the SSH on eddy edge. Company with the lon/lat coordinate of that "
            "extreme value of SSH and value of the minimum amplitude threshold.",
            description="[longitude latitude amplitude amplitude_threshold]",
        ),
    ),
    radius=dict(
        nc_name="radius",
        nc_type="f8",
        nc_dims=("radius",),
        nc_attr=dict(
            standard_name="Eddy radius",
            long_name="Radius of an circle that has the same area as the eddy area "
            "enclosed by the eddy edge as well as value of the minimum radius "
            "threshold. Unit: Km",
            description="[radius radius_threshold]",
        ),
    ),
    edge=dict(
        nc_name="edge",
        nc_type="f8",
        nc_dims=("edge_row", "edge_col"),
        nc_attr=dict(
            standard_name="Eddy edge",
            long_name="The longitudes and latitudes of eddy edge defined by the "
            "largest closed sla contour.",
            description="Longitudes are in the 1st row while the 2nd row is filled "
            "with latitudes",
        ),
    ),
)

GLOBAL_ATTRS = dict(
    dataset_name="Preliminary Mesoscale Eddy Detection Results based on Sea Surface Height",
    dataset_description="Outputs are eddy polarity, coordinates of eddy centroid, "
    "eddy amplitude and according coordinates, eddy radius and coordinates of eddy edge.",
)
