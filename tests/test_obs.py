from os import path

import numpy as np
from matplotlib.figure import Figure
from netCDF4 import Dataset
from pytest import approx, fixture, raises

from conftest import LAT, LON
from py_eddy_scan.dataset.grid import SlaGrid
from py_eddy_scan.observations.observation import Eddy, EddiesObservations


@fixture(scope="module")
def eddies(dipole):
    return SlaGrid(LON, LAT, dipole).eddy_identification()


def test_output_folder():
    assert EddiesObservations.output_folder("out", 2019, 2) == path.join("out", "201902")
    assert EddiesObservations.output_folder("out", 2019, 2, 23) == path.join(
        "out", "20190223"
    )
    assert EddiesObservations.output_folder("out", 2019, 12, 3, 6) == path.join(
        "out", "2019120306"
    )
    assert EddiesObservations.output_folder("out", 2019, 2, 3, 0) == path.join(
        "out", "2019020300"
    )


def test_output_folder_check():
    with raises(Exception):
        EddiesObservations.output_folder("out", 2019, 2, hour=6)
    with raises(Exception):
        EddiesObservations.output_folder("out", 2019, 13)
    with raises(Exception):
        EddiesObservations.output_folder("out", 2019, 2, 32)
    with raises(Exception):
        EddiesObservations.output_folder("out", 2019, 2, 1, 24)
    with raises(Exception):
        EddiesObservations.output_folder("out", "2019", 2)
    with raises(Exception):
        EddiesObservations.output_folder("", 2019, 2)


def test_eddy_immutable(eddies):
    e = eddies[0]
    with raises(AttributeError):
        e.type = 1
    with raises(ValueError):
        e.edge[0, 0] = 0
    with raises(ValueError):
        e.pixels[0][0] = 0


def test_collection(eddies):
    assert len(eddies) == 2
    assert len(eddies[:1]) == 1
    assert isinstance(eddies[:1], EddiesObservations)
    assert eddies[:1] == eddies.cyclonic
    assert eddies != eddies.cyclonic
    assert [e.type for e in eddies] == [-1, 1]
    assert eddies.field("radius", 0).shape == (2,)
    assert "2 eddies (1 cyclonic, 1 anticyclonic)" in repr(eddies)
    assert "0 eddies" in repr(EddiesObservations())
    with raises(Exception):
        EddiesObservations().append((1, 2))


def test_write_files(eddies, tmp_path):
    filenames = eddies.write_files(str(tmp_path), 2019, 2, 23)
    folder = path.join(str(tmp_path), "20190223")
    assert filenames == [path.join(folder, "eddy1.nc"), path.join(folder, "eddy2.nc")]
    with Dataset(filenames[0]) as h:
        assert h.variables["type"][0] == -1
        assert h.variables["center"].shape == (2,)
        assert h.variables["amplitude"].shape == (4,)
        assert h.variables["radius"].shape == (2,)
        assert h.variables["edge"].shape == eddies[0].edge.shape
        assert h.variables["radius"].standard_name == "Eddy radius"
        assert h.framework_version
    with Dataset(filenames[1]) as h:
        assert h.variables["type"][0] == 1


def test_write_empty(tmp_path):
    filenames = EddiesObservations().write_files(str(tmp_path), 2019, 2)
    assert filenames == list()
    assert path.isdir(path.join(str(tmp_path), "201902"))


def test_load_folder(eddies, tmp_path):
    eddies.write_files(str(tmp_path), 2019, 2, 23, 12)
    loaded = EddiesObservations.load_folder(path.join(str(tmp_path), "2019022312"))
    assert len(loaded) == 2
    for e, e_ in zip(eddies, loaded):
        assert e_ == Eddy.build(e.type, e.center, e.amplitude, e.radius, e.edge)
        assert e_.nb_pixel == 0
        assert np.isnan(e_.level)
    assert loaded[1].amplitude == approx(eddies[1].amplitude)


def test_flatten_edges(eddies):
    lon, lat = EddiesObservations.flatten_edges(eddies)
    nb = sum(e.edge.shape[1] + 1 for e in eddies)
    assert lon.shape == lat.shape == (nb,)
    assert np.isnan(lon).sum() == 2


def test_display(eddies):
    ax = Figure().add_subplot(111)
    mappables = eddies.display(ax, lw=1)
    assert len(mappables) == 4
    assert mappables[0].get_label() == "Cyclonic"
    assert mappables[2].get_label() == "Anticyclonic"
    assert eddies.display(ax, label="edge")[0].get_label() == "edge"
    assert len(EddiesObservations().display(ax)) == 0
