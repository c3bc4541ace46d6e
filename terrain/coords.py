"""World and chunk coordinate domains.

Both are integer pairs; they only meet through the conversions below, which
use floor division so negative world cells land in the chunk to their
upper-left rather than the one nearer zero.
"""

from __future__ import annotations

from typing import NamedTuple


class WorldPos(NamedTuple):
    x: int
    y: int


class ChunkPos(NamedTuple):
    x: int
    y: int


def chunk_position(pos: WorldPos, *, chunk_size: int) -> ChunkPos:
    s = int(chunk_size)
    return ChunkPos(int(pos.x) // s, int(pos.y) // s)


def chunk_origin(pos: ChunkPos, *, chunk_size: int) -> WorldPos:
    s = int(chunk_size)
    return WorldPos(int(pos.x) * s, int(pos.y) * s)


def local_offset(pos: WorldPos, *, chunk_size: int) -> tuple[int, int]:
    cpos = chunk_position(pos, chunk_size=chunk_size)
    origin = chunk_origin(cpos, chunk_size=chunk_size)
    return int(pos.x) - origin.x, int(pos.y) - origin.y
