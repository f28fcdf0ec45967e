#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from setuptools import setup, find_packages

setup(
    name="gsl-bridge",
    version="0.1.0",
    description="GSL-style typed vectors and matrices with numpy conversions",
    license="BSD-3-Clause",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy",
        "typing_extensions",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "gsl-bridge = gslbridge.cli.bridge_info:main",
        ],
    },
)
