#!/usr/bin/python3

from setuptools import setup

setup(
    name="debinfo",
    version="1.0.0",
    packages=["debinfo_lib"],
    scripts=["debinfo"],
    python_requires=">=3.10",
    install_requires=[
        "python-debian",
        "zstandard>=0.15",
        "orjson",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
