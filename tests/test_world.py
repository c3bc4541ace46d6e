from __future__ import annotations

import numpy as np
import pytest

from noisefield.source import NoiseSource
from terrain.chunks import Chunk, ChunkGenerator
from terrain.coords import ChunkPos, WorldPos, chunk_origin
from terrain.quantize import Quantizer
from terrain.world import ChunkCacheError, World


class CountingGenerator(ChunkGenerator):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls: list[ChunkPos] = []

    def generate(self, position: ChunkPos) -> Chunk:
        self.calls.append(ChunkPos(*position))
        return super().generate(position)


class MisplacedGenerator:
    chunk_size = 8

    def __init__(self, result: Chunk | None):
        self.result = result

    def generate(self, position: ChunkPos) -> Chunk | None:
        return self.result


def _world(chunk_size: int = 16) -> tuple[World, CountingGenerator]:
    source = NoiseSource(seed=21, frequency=0.04)
    gen = CountingGenerator(source, Quantizer.named("blocks"), chunk_size=chunk_size)
    return World(gen), gen


def test_repeated_acquire_returns_cached_chunk() -> None:
    world, gen = _world()
    a = world.acquire(ChunkPos(2, 3))
    b = world.acquire(ChunkPos(2, 3))
    assert a is b
    assert np.array_equal(a.cells, b.cells)
    assert gen.calls == [ChunkPos(2, 3)]
    assert (world.hits, world.misses) == (1, 1)


def test_generation_count_equals_distinct_positions() -> None:
    world, gen = _world()
    requests = [(0, 0), (1, 0), (0, 0), (-1, -1), (1, 0), (5, -7), (-1, -1), (0, 0)]
    for pos in requests:
        world.acquire(ChunkPos(*pos))
    assert len(gen.calls) == len(set(requests))
    assert len(set(gen.calls)) == len(gen.calls)
    assert len(world) == len(set(requests))
    assert world.hits + world.misses == len(requests)


def test_acquire_accepts_plain_tuples() -> None:
    world, gen = _world()
    world.acquire((4, -4))
    assert ChunkPos(4, -4) in world
    assert world.acquire(ChunkPos(4, -4)).position == ChunkPos(4, -4)
    assert len(gen.calls) == 1


def test_glyph_at_reads_owning_chunk() -> None:
    world, gen = _world(chunk_size=16)
    for pos in (WorldPos(0, 0), WorldPos(-1, -1), WorldPos(-17, 40), WorldPos(15, 16)):
        value = gen.source.evaluate(pos.x, pos.y)
        assert world.glyph_at(pos) == gen.quantizer.glyph(value)
    assert ChunkPos(-2, 2) in world


def test_cached_chunk_matches_fresh_generation() -> None:
    world, gen = _world()
    cached = world.acquire(ChunkPos(-3, 1))
    fresh = gen.generate(ChunkPos(-3, 1))
    assert cached.rows == fresh.rows


def test_generator_returning_wrong_chunk_is_a_defect() -> None:
    other = Chunk(
        position=ChunkPos(9, 9),
        cells=np.zeros((8, 8), dtype=np.uint8),
        rows=(" " * 8,) * 8,
    )
    world = World(MisplacedGenerator(other))
    with pytest.raises(ChunkCacheError):
        world.acquire(ChunkPos(0, 0))
    assert len(world) == 0


def test_generator_returning_nothing_is_a_defect() -> None:
    world = World(MisplacedGenerator(None))
    with pytest.raises(ChunkCacheError):
        world.acquire(ChunkPos(1, 1))
    assert ChunkPos(1, 1) not in world


def test_chunk_origin_of_cached_chunk() -> None:
    world, _ = _world(chunk_size=16)
    chunk = world.acquire(ChunkPos(-1, 2))
    assert chunk_origin(chunk.position, chunk_size=world.chunk_size) == WorldPos(-16, 32)
