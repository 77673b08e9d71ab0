#!/usr/bin/env python3
"""
Setup script for suconfig package.
"""

from setuptools import setup, find_packages

setup(
    name="suconfig",
    version="0.3",
    description="Typed configuration core over local preferences and a settings database",
    author="suconfig Team",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
        "sqlalchemy>=2.0",
        "typer>=0.9",
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "suconfig=suconfig.cli.main:app",
        ],
    },
)
