from __future__ import annotations

from terrain.chunks import CHUNK_SIZE, Chunk, ChunkGenerator
from terrain.coords import (
    ChunkPos,
    WorldPos,
    chunk_origin,
    chunk_position,
    local_offset,
)
from terrain.quantize import PALETTES, Quantizer
from terrain.viewport import (
    ChunkSlice,
    plan_viewport,
    render_viewport,
    visible_chunk_range,
)
from terrain.world import ChunkCacheError, World

__all__ = [
    "CHUNK_SIZE",
    "Chunk",
    "ChunkCacheError",
    "ChunkGenerator",
    "ChunkPos",
    "ChunkSlice",
    "PALETTES",
    "Quantizer",
    "World",
    "WorldPos",
    "chunk_origin",
    "chunk_position",
    "local_offset",
    "plan_viewport",
    "render_viewport",
    "visible_chunk_range",
]
