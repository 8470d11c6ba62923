# -*- coding: utf-8 -*-

import os
import re

from setuptools import find_packages, setup

INSTALL_REQUIRES = [
    "numpy>=1.19.0",
    "scikit-learn>=1.3",
    "joblib>=1.0",
]

EXTRAS_REQUIRE = {
    "test": [
        "pytest>=7",
    ],
}


def read_version():
    path = os.path.join(os.path.dirname(__file__), "src", "tslcss", "version.py")
    with open(path) as f:
        return re.search(r"^version = \"(.+)\"$", f.read(), re.MULTILINE).group(1)


if __name__ == "__main__":
    setup(
        name="tslcss",
        version=read_version(),
        description="Longest common subsequence distance for time series",
        license="BSD-3-Clause",
        python_requires=">=3.9",
        package_dir={"": "src"},
        packages=find_packages("src"),
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS_REQUIRE,
        classifiers=[
            "License :: OSI Approved :: BSD License",
            "Programming Language :: Python :: 3",
            "Topic :: Scientific/Engineering",
        ],
    )
