from __future__ import annotations

import time

from noisefield.source import BASES, NoiseSource
from terrain.chunks import ChunkGenerator
from terrain.coords import ChunkPos, WorldPos
from terrain.quantize import Quantizer
from terrain.viewport import render_viewport
from terrain.world import World
from tui.scroll import build_frame


class _NullSurface:
    def move_to(self, col: int, row: int) -> None:
        pass

    def write(self, text: str) -> None:
        pass


def _timeit(label: str, fn) -> float:
    t0 = time.perf_counter()
    fn()
    t1 = time.perf_counter()
    ms = (t1 - t0) * 1000.0
    print(f"{label}: {ms:.2f} ms")
    return ms


def main() -> None:
    """Quick CPU benchmark.

    Intended targets (laptop-class CPU, perlin basis):
    - one 128x128 chunk: < ~20ms
    - full 200x60 viewport on a cold world: < ~100ms
    """

    seed = 0
    quantizer = Quantizer.named("ascii")

    for basis in BASES:
        source = NoiseSource(seed=seed, frequency=0.01, basis=basis)
        generator = ChunkGenerator(source, quantizer, chunk_size=128)
        _timeit(
            f"Chunk: {basis} 128x128",
            lambda: generator.generate(ChunkPos(3, -2)),
        )

    source = NoiseSource(seed=seed, frequency=0.01, basis="perlin", octaves=4)
    world = World(ChunkGenerator(source, quantizer, chunk_size=128))
    camera = WorldPos(-100, -30)
    _timeit(
        "Viewport: 200x60 cold (fbm x4)",
        lambda: render_viewport(_NullSurface(), world, camera, (200, 60)),
    )
    _timeit(
        "Viewport: 200x60 warm (fbm x4)",
        lambda: render_viewport(_NullSurface(), world, camera, (200, 60)),
    )
    _timeit(
        "Scroll: frame 200x60 (fbm x4)",
        lambda: build_frame(source, quantizer, width=200, height=60, offset=0),
    )


if __name__ == "__main__":
    main()
