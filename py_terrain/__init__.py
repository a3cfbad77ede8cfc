"""Procedural terrain map generation from fractal OpenSimplex noise."""

__version__ = "0.1.0"
