"""Isopleth (contour line) generation for point-forecast grids."""

__version__ = '0.3.0'
