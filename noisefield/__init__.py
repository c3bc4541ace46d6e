from .noise_2d import Perlin2D, Simplex2D, ValueNoise2D, fbm2
from .source import BASES, NoiseSource, make_basis

__all__ = [
    "BASES",
    "NoiseSource",
    "Perlin2D",
    "Simplex2D",
    "ValueNoise2D",
    "fbm2",
    "make_basis",
]
