from __future__ import annotations

import numpy as np


def fade(t: np.ndarray) -> np.ndarray:
    """Quintic fade curve used by Improved Perlin Noise (2002)."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def make_permutation(seed: int) -> np.ndarray:
    rng = np.random.default_rng(int(seed))
    p = rng.permutation(256).astype(np.int32)
    return np.concatenate([p, p])


def lattice(
    perm: np.ndarray, x: np.ndarray, y: np.ndarray
) -> tuple[tuple[np.ndarray, ...], np.ndarray, np.ndarray]:
    """Hash the four corners of the unit cell holding each sample.

    Returns ``(aa, ab, ba, bb)`` corner hashes plus the in-cell offsets.
    """

    xi0 = np.floor(x).astype(np.int32) & 255
    yi0 = np.floor(y).astype(np.int32) & 255
    xi1 = (xi0 + 1) & 255
    yi1 = (yi0 + 1) & 255

    xf = x - np.floor(x)
    yf = y - np.floor(y)

    p = perm
    aa = p[p[xi0] + yi0]
    ab = p[p[xi0] + yi1]
    ba = p[p[xi1] + yi0]
    bb = p[p[xi1] + yi1]
    return (aa, ab, ba, bb), xf, yf


_GRAD2_DIAG8 = np.array(
    [
        [1.0, 0.0],
        [-1.0, 0.0],
        [0.0, 1.0],
        [0.0, -1.0],
        [1.0, 1.0],
        [-1.0, 1.0],
        [1.0, -1.0],
        [-1.0, -1.0],
    ],
    dtype=np.float64,
)
_GRAD2_DIAG8 /= np.linalg.norm(_GRAD2_DIAG8, axis=1, keepdims=True)


def grad2_from_hash(
    h: np.ndarray, *, grad_table: np.ndarray = _GRAD2_DIAG8
) -> tuple[np.ndarray, np.ndarray]:
    n = int(grad_table.shape[0])
    idx = (h % n).astype(np.int32)
    g = grad_table[idx]
    return g[..., 0], g[..., 1]
