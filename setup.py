#!/usr/bin/env python

# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Setuptools installer for txdict.
"""

import pathlib
import re

import setuptools

version = re.search(
    r'^__version__ = "([^"]+)"',
    pathlib.Path("src/txdict/_version.py").read_text(encoding="utf8"),
    flags=re.M,
).group(1)

setuptools.setup(
    name="txdict",
    version=version,
    description="A DICT (RFC 2229) dictionary client for Twisted",
    long_description=pathlib.Path("README.rst").read_text(encoding="utf8"),
    long_description_content_type="text/x-rst",
    license="MIT",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=setuptools.find_packages("src"),
    install_requires=[
        "Twisted >= 21.2.0",
        "attrs >= 19.2.0",
        "zope.interface >= 5",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["txdict = txdict.scripts.dictlookup:run"],
    },
    classifiers=[
        "Framework :: Twisted",
        "Programming Language :: Python :: 3",
        "Topic :: Internet",
        "Topic :: Text Processing :: Linguistic",
    ],
)
