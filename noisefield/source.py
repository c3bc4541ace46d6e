from __future__ import annotations

import math

import numpy as np

from .noise_2d import Noise2D, Perlin2D, Simplex2D, ValueNoise2D, fbm2

BASES = ("perlin", "value", "simplex")

# Rescales each basis so its theoretical range fills [-1, 1].
_BASIS_GAIN = {
    "perlin": math.sqrt(2.0),
    "value": 1.0,
    "simplex": 1.0,
}


def make_basis(basis: str, *, seed: int) -> Noise2D:
    basis = str(basis)
    if basis == "perlin":
        return Perlin2D(seed=int(seed))
    if basis == "value":
        return ValueNoise2D(seed=int(seed))
    if basis == "simplex":
        return Simplex2D(seed=int(seed))
    raise ValueError(f"unknown basis: {basis}")


class NoiseSource:
    """Seeded scalar field ``(x, y) -> [-1, 1]`` sampled at a fixed frequency.

    ``evaluate`` and ``grid`` share one code path, so a grid cell always
    equals the scalar evaluation at the same coordinates.
    """

    def __init__(
        self,
        *,
        seed: int,
        frequency: float,
        basis: str = "perlin",
        octaves: int = 1,
    ):
        frequency = float(frequency)
        if not frequency > 0.0:
            raise ValueError("frequency must be > 0")
        octaves = int(octaves)
        if octaves < 1:
            raise ValueError("octaves must be >= 1")

        self.seed = int(seed)
        self.frequency = frequency
        self.basis = str(basis)
        self.octaves = octaves
        self._noise = make_basis(self.basis, seed=self.seed)
        self._gain = _BASIS_GAIN[self.basis]

    def __repr__(self) -> str:
        return (
            f"NoiseSource(seed={self.seed}, frequency={self.frequency}, "
            f"basis={self.basis!r}, octaves={self.octaves})"
        )

    def sample(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        """Elementwise evaluation over broadcastable world coordinates."""

        x = np.asarray(x, dtype=np.float64) * self.frequency
        y = np.asarray(y, dtype=np.float64) * self.frequency
        z = fbm2(self._noise, x, y, octaves=self.octaves)
        return np.clip(z * self._gain, -1.0, 1.0)

    def evaluate(self, x: float, y: float) -> float:
        return float(self.sample(np.array(float(x)), np.array(float(y))))

    def grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Evaluate on the cartesian product of two axes, shape ``(ys, xs)``."""

        xg, yg = np.meshgrid(
            np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64)
        )
        return self.sample(xg, yg)
