# -*- coding: utf-8 -*-
import re

from setuptools import setup, find_packages

with open("README.md", "r") as fh:
    long_description = fh.read()
with open("requirements.txt", "r") as fh:
    requirements = [line for line in fh.read().split("\n") if line.strip()]
with open("src/py_eddy_scan/__init__.py", "r") as fh:
    version = re.search(r'^__version__ = "([^"]+)"', fh.read(), re.M).group(1)

setup(
    name="pyEddyScan",
    python_requires=">=3.7",
    version=version,
    description="Eddy detection with closed contours of sea level anomaly",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Topic :: Scientific/Engineering :: Physics",
        "Programming Language :: Python",
    ],
    keywords="eddy science, eddy detection, sea level anomaly",
    packages=find_packages("src"),
    package_dir={"": "src"},
    zip_safe=False,
    entry_points=dict(
        console_scripts=[
            # grid
            "EddyScan = py_eddy_scan.appli.grid:eddy_scan",
        ]
    ),
    install_requires=requirements,
    extras_require=dict(test=["pytest"]),
)
