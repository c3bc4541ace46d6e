from __future__ import annotations

import logging
from typing import Protocol

from terrain.chunks import Chunk
from terrain.coords import ChunkPos, WorldPos, chunk_position, local_offset

logger = logging.getLogger(__name__)


class ChunkSource(Protocol):
    chunk_size: int

    def generate(self, position: ChunkPos) -> Chunk:  # pragma: no cover
        ...


class ChunkCacheError(RuntimeError):
    """The generator did not produce the chunk that was asked for."""


class World:
    """Lazily generated chunk cache.

    Chunks are created on first access and kept for the lifetime of the
    world; there is no eviction.
    """

    def __init__(self, generator: ChunkSource):
        self.generator = generator
        self.chunk_size = int(generator.chunk_size)
        self.hits = 0
        self.misses = 0
        self._chunks: dict[ChunkPos, Chunk] = {}

    def __len__(self) -> int:
        return len(self._chunks)

    def __contains__(self, position: object) -> bool:
        return position in self._chunks

    def acquire(self, position: ChunkPos) -> Chunk:
        position = ChunkPos(int(position[0]), int(position[1]))
        cached = self._chunks.get(position)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        chunk = self.generator.generate(position)
        if chunk is None or chunk.position != position:
            got = None if chunk is None else chunk.position
            raise ChunkCacheError(f"generator returned {got} for chunk {position}")
        self._chunks[position] = chunk
        logger.debug("generated chunk %s (%d cached)", position, len(self._chunks))
        return chunk

    def glyph_at(self, pos: WorldPos) -> str:
        chunk = self.acquire(chunk_position(pos, chunk_size=self.chunk_size))
        lx, ly = local_offset(pos, chunk_size=self.chunk_size)
        return chunk.glyph(lx, ly)
