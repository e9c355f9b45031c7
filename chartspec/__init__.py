"""Pure chart transform package for xkcdcharts.

This package turns a role-tagged tabular description into a renderer-ready
chart.xkcd specification (or a structured rejection). It must not import
Django or perform any I/O.
"""

from .engine import transform

__all__ = ["transform"]
