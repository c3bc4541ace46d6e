from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from noisefield.source import NoiseSource
from terrain.coords import ChunkPos, chunk_origin
from terrain.quantize import Quantizer

CHUNK_SIZE = 128


@dataclass(frozen=True, eq=False)
class Chunk:
    """A square tile of quantized glyphs.

    ``cells[ly, lx]`` holds the palette index of world cell
    ``(origin.x + lx, origin.y + ly)``; ``rows[ly]`` is the same row as text.
    """

    position: ChunkPos
    cells: np.ndarray
    rows: tuple[str, ...]

    @property
    def size(self) -> int:
        return int(self.cells.shape[0])

    def glyph(self, lx: int, ly: int) -> str:
        return self.rows[int(ly)][int(lx)]


class ChunkGenerator:
    """Chunk contract: (seed, frequency, chunk position) -> deterministic tile."""

    def __init__(
        self,
        source: NoiseSource,
        quantizer: Quantizer,
        *,
        chunk_size: int = CHUNK_SIZE,
    ):
        chunk_size = int(chunk_size)
        if chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
        self.source = source
        self.quantizer = quantizer
        self.chunk_size = chunk_size

    def generate(self, position: ChunkPos) -> Chunk:
        position = ChunkPos(int(position[0]), int(position[1]))
        left, top = chunk_origin(position, chunk_size=self.chunk_size)
        local = np.arange(self.chunk_size, dtype=np.int64)

        z = self.source.grid(left + local, top + local)
        cells = self.quantizer.indices(z)
        cells.flags.writeable = False
        return Chunk(position=position, cells=cells, rows=self.quantizer.rows(cells))
