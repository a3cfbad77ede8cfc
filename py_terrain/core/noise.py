"""
Coherent noise sources used by the terrain generator.

A noise source is created once per generation from a single integer seed and
is read-only afterwards.
"""

import math

import numpy as np
from opensimplex import OpenSimplex


class NoiseSource:
    """Base class for 2D noise returning values nominally in [-1, 1]."""

    def eval(self, x: float, y: float) -> float:
        raise NotImplementedError

    def eval_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """
        Evaluate the noise over the grid spanned by two coordinate axes.

        Args:
            xs: Sample x coordinates, one per column
            ys: Sample y coordinates, one per row

        Returns:
            Array of shape (len(ys), len(xs))
        """
        values = np.empty((len(ys), len(xs)), dtype=np.float64)
        for row, y in enumerate(ys):
            for col, x in enumerate(xs):
                values[row, col] = self.eval(float(x), float(y))
        return values


class OpenSimplexNoise(NoiseSource):
    """
    OpenSimplex 2D noise.

    Non-finite coordinates (from a zero scale) sample as NaN instead of
    raising, so degenerate configurations still produce a map.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._noise = OpenSimplex(seed=seed)

    def eval(self, x: float, y: float) -> float:
        if not (math.isfinite(x) and math.isfinite(y)):
            return math.nan
        return self._noise.noise2(x, y)

    def eval_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        finite_x = np.isfinite(xs)
        finite_y = np.isfinite(ys)

        if finite_x.all() and finite_y.all():
            # noise2array already returns (len(ys), len(xs))
            return self._noise.noise2array(xs, ys)

        values = np.full((len(ys), len(xs)), np.nan, dtype=np.float64)
        if finite_x.any() and finite_y.any():
            values[np.ix_(finite_y, finite_x)] = self._noise.noise2array(
                xs[finite_x], ys[finite_y]
            )
        return values
