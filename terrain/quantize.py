from __future__ import annotations

import math

import numpy as np

PALETTES: dict[str, str] = {
    "ascii": " .-=#",
    "blocks": " ░▒▓█",
    "dense": " .:-=+*#%@",
}


class Quantizer:
    """Map noise values in [-1, 1] onto a brightness palette.

    The palette runs from emptiest (index 0) to fullest (index N - 1).
    Values outside [-1, 1] land on the nearest end.
    """

    def __init__(self, palette: str = PALETTES["ascii"]):
        palette = str(palette)
        if not palette:
            raise ValueError("palette must not be empty")
        if len(palette) > 256:
            raise ValueError("palette must have at most 256 glyphs")
        self.palette = palette
        self._glyphs = np.array(list(palette))

    @classmethod
    def named(cls, name: str) -> Quantizer:
        try:
            return cls(PALETTES[str(name)])
        except KeyError:
            raise ValueError(f"unknown palette: {name}") from None

    def __len__(self) -> int:
        return len(self.palette)

    def index(self, value: float) -> int:
        n = len(self.palette)
        i = math.floor((float(value) + 1.0) / 2.0 * n)
        return min(max(i, 0), n - 1)

    def glyph(self, value: float) -> str:
        return self.palette[self.index(value)]

    def indices(self, values: np.ndarray) -> np.ndarray:
        n = len(self.palette)
        z = np.asarray(values, dtype=np.float64)
        i = np.floor((z + 1.0) / 2.0 * n)
        return np.clip(i, 0, n - 1).astype(np.uint8)

    def rows(self, indices: np.ndarray) -> tuple[str, ...]:
        """Render a 2D index grid as one glyph string per row."""

        chars = self._glyphs[np.asarray(indices)]
        return tuple("".join(row) for row in chars)
