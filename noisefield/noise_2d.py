from __future__ import annotations

from typing import Protocol

import numpy as np
from opensimplex import OpenSimplex

from .core import fade, grad2_from_hash, lattice, lerp, make_permutation


class Noise2D(Protocol):
    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:  # pragma: no cover
        ...


class Perlin2D:
    """Gradient noise over an 8-direction unit gradient set.

    Output is bounded by ``sqrt(2) / 2`` in magnitude.
    """

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.perm = make_permutation(self.seed)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        (aa, ab, ba, bb), xf, yf = lattice(self.perm, x, y)
        u = fade(xf)
        v = fade(yf)

        gxaa, gyaa = grad2_from_hash(aa)
        gxab, gyab = grad2_from_hash(ab)
        gxba, gyba = grad2_from_hash(ba)
        gxbb, gybb = grad2_from_hash(bb)

        x1 = xf - 1.0
        y1 = yf - 1.0

        d00 = gxaa * xf + gyaa * yf
        d01 = gxab * xf + gyab * y1
        d10 = gxba * x1 + gyba * yf
        d11 = gxbb * x1 + gybb * y1

        x_lerp0 = lerp(d00, d10, u)
        x_lerp1 = lerp(d01, d11, u)
        return lerp(x_lerp0, x_lerp1, v)


class ValueNoise2D:
    """2D value noise (lattice values + smooth interpolation)."""

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.perm = make_permutation(self.seed)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        corners, xf, yf = lattice(self.perm, x, y)
        u = fade(xf)
        v = fade(yf)

        # Map hashed values into [-1, 1].
        vaa, vab, vba, vbb = (
            (h.astype(np.float64) / 255.0) * 2.0 - 1.0 for h in corners
        )

        x_lerp0 = lerp(vaa, vba, u)
        x_lerp1 = lerp(vab, vbb, u)
        return lerp(x_lerp0, x_lerp1, v)


class Simplex2D:
    """OpenSimplex noise, evaluated point by point through ``opensimplex``."""

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self._gen = OpenSimplex(seed=self.seed)
        self._noise2 = np.vectorize(self._gen.noise2, otypes=[np.float64])

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        return np.asarray(self._noise2(x, y), dtype=np.float64)


def fbm2(
    noise: Noise2D,
    x: np.ndarray,
    y: np.ndarray,
    *,
    octaves: int = 4,
    lacunarity: float = 2.0,
    persistence: float = 0.5,
) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    octaves = max(int(octaves), 1)
    if octaves == 1:
        return np.asarray(noise.noise(x, y), dtype=np.float64)

    amp = 1.0
    freq = 1.0
    total = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
    amp_sum = 0.0

    for _ in range(octaves):
        total += amp * noise.noise(x * freq, y * freq)
        amp_sum += amp
        amp *= float(persistence)
        freq *= float(lacunarity)

    if amp_sum == 0.0:
        return total
    return total / amp_sum
