from __future__ import annotations

import numpy as np
import pytest

from noisefield.source import NoiseSource
from terrain.chunks import ChunkGenerator
from terrain.coords import (
    ChunkPos,
    WorldPos,
    chunk_origin,
    chunk_position,
    local_offset,
)
from terrain.quantize import Quantizer


def _generator(seed: int = 0, chunk_size: int = 16) -> ChunkGenerator:
    source = NoiseSource(seed=seed, frequency=0.05, basis="perlin", octaves=2)
    return ChunkGenerator(source, Quantizer.named("ascii"), chunk_size=chunk_size)


def test_chunk_position_floors_negative_coordinates() -> None:
    assert chunk_position(WorldPos(0, 0), chunk_size=128) == ChunkPos(0, 0)
    assert chunk_position(WorldPos(127, 128), chunk_size=128) == ChunkPos(0, 1)
    assert chunk_position(WorldPos(-1, -128), chunk_size=128) == ChunkPos(-1, -1)
    assert chunk_position(WorldPos(-129, -10), chunk_size=128) == ChunkPos(-2, -1)


def test_chunk_origin() -> None:
    assert chunk_origin(ChunkPos(-2, 3), chunk_size=128) == WorldPos(-256, 384)


@pytest.mark.parametrize("chunk_size", [1, 7, 16, 128])
def test_coordinate_round_trip(chunk_size: int) -> None:
    for x in range(-300, 300, 17):
        for y in (-257, -128, -1, 0, 1, 127, 128, 999):
            pos = WorldPos(x, y)
            cpos = chunk_position(pos, chunk_size=chunk_size)
            lx, ly = local_offset(pos, chunk_size=chunk_size)
            assert 0 <= lx < chunk_size
            assert 0 <= ly < chunk_size
            origin = chunk_origin(cpos, chunk_size=chunk_size)
            assert (origin.x + lx, origin.y + ly) == (x, y)


def test_generate_chunk_deterministic_for_same_inputs() -> None:
    a = _generator(seed=3).generate(ChunkPos(1, -2))
    b = _generator(seed=3).generate(ChunkPos(1, -2))
    assert np.array_equal(a.cells, b.cells)
    assert a.rows == b.rows


def test_generate_chunk_shape_and_rows() -> None:
    chunk = _generator(chunk_size=24).generate(ChunkPos(0, 0))
    assert chunk.size == 24
    assert chunk.cells.shape == (24, 24)
    assert len(chunk.rows) == 24
    assert all(len(row) == 24 for row in chunk.rows)
    assert set("".join(chunk.rows)) <= set(" .-=#")


def test_chunk_cells_match_noise_at_world_cells() -> None:
    gen = _generator(seed=8, chunk_size=16)
    pos = ChunkPos(-3, 2)
    chunk = gen.generate(pos)
    origin = chunk_origin(pos, chunk_size=16)
    for ly in (0, 5, 15):
        for lx in (0, 9, 15):
            value = gen.source.evaluate(origin.x + lx, origin.y + ly)
            assert chunk.cells[ly, lx] == gen.quantizer.index(value)
            assert chunk.glyph(lx, ly) == gen.quantizer.glyph(value)


def test_neighbouring_chunks_are_distinct() -> None:
    gen = _generator(seed=1, chunk_size=32)
    a = gen.generate(ChunkPos(0, 0))
    b = gen.generate(ChunkPos(1, 0))
    assert not np.array_equal(a.cells, b.cells)


def test_chunk_is_read_only() -> None:
    chunk = _generator().generate(ChunkPos(0, 0))
    with pytest.raises(ValueError):
        chunk.cells[0, 0] = 1


def test_invalid_chunk_size() -> None:
    with pytest.raises(ValueError):
        _generator(chunk_size=0)
