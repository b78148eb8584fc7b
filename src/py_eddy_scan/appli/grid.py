# -*- coding: utf-8 -*-
"""
All entry point to detect eddies on grid
"""
from argparse import Action
import logging

from matplotlib.figure import Figure

from .. import EddyParser
from ..dataset.grid import SlaGrid
from ..observations.observation import EddiesObservations

logger = logging.getLogger("pes")


class DictAction(Action):
    def __call__(self, parser, namespace, values, option_string=None):
        indexs = None
        if len(values):
            indexs = dict()
            for value in values:
                k, v = value.split("=")
                indexs[k] = int(v)
        setattr(namespace, self.dest, indexs)


def scan_parser():
    parser = EddyParser("Eddy detection with closed contours of sea level anomaly")
    parser.add_argument("filename")
    parser.add_argument("sla", help="Name of sea level anomaly variable")
    parser.add_argument("longitude")
    parser.add_argument("latitude")
    parser.add_argument("path_out", help="Upper folder, a dated folder is created in")
    parser.add_argument("year", type=int)
    parser.add_argument("month", type=int)
    parser.add_argument("--day", type=int, default=None)
    parser.add_argument("--hour", type=int, default=None)
    parser.add_argument(
        "--amplitude_threshold",
        default=3,
        type=float,
        help="Minimal amplitude of eddies in cm",
    )
    parser.add_argument(
        "--radius_threshold",
        default=45,
        type=float,
        help="Radius of eddies must be greater than this value in km",
    )
    parser.add_argument(
        "--height_unit",
        default=None,
        help="Force sla unit, by default units attribute is used",
    )
    help = "Indexs to select grid : --indexs time=2, will select third step along time dimensions"
    parser.add_argument("--indexs", nargs="*", help=help, action=DictAction)
    parser.add_argument("--figure", default=None, help="Save a figure of detection")
    return parser


def eddy_scan(args=None):
    args = scan_parser().parse_args(args) if args else scan_parser().parse_args()
    # Check date before detection
    EddiesObservations.output_folder(
        args.path_out, args.year, args.month, args.day, args.hour
    )
    grid = SlaGrid.from_netcdf(
        args.filename,
        args.longitude,
        args.latitude,
        args.sla,
        indexs=args.indexs,
        height_unit=args.height_unit,
    )
    eddies = grid.eddy_identification(
        amplitude_threshold=args.amplitude_threshold,
        radius_threshold=args.radius_threshold,
    )
    eddies.write_files(args.path_out, args.year, args.month, args.day, args.hour)
    if args.figure is not None:
        save_figure(grid, eddies, args.figure)
    return eddies


def save_figure(grid, eddies, filename):
    fig = Figure(figsize=(12, 8))
    ax = fig.add_subplot(111)
    ax.set_aspect("equal")
    m = grid.display(ax, cmap="RdBu_r", vmin=-50, vmax=50)
    eddies.display(ax, lw=1)
    fig.colorbar(m, ax=ax, label="SLA (cm)")
    fig.savefig(filename)
    logger.info("Figure saved in %s", filename)
