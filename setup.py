"""Legacy setuptools entry point for pattern-telemetry.

Only needed by tools that still invoke ``python setup.py``; the project
metadata, dependencies and package discovery live in pyproject.toml.
"""
from setuptools import setup

setup()
