"""Helpful utilities for developing visual novels using Ren'Py."""

__version__ = "1.0.9"
