"""Interactive chunked world viewer (``noise-world``).

Keys: WASD or arrows move the camera (uppercase WASD moves faster);
Esc, q or Ctrl-C quit.
"""

from __future__ import annotations

import logging
import sys

from noisefield.source import NoiseSource
from terrain.chunks import ChunkGenerator
from terrain.coords import WorldPos
from terrain.quantize import Quantizer
from terrain.viewport import render_viewport
from terrain.world import World
from tui.config import ViewerConfig, load_config
from tui.logging_config import setup_logging
from tui.terminal import KeyEvent, Terminal, TerminalError

logger = logging.getLogger(__name__)

FAST_FACTOR = 8

QUIT_KEYS = {
    KeyEvent("named", "escape"),
    KeyEvent("named", "interrupt"),
    KeyEvent("char", "q"),
}

_MOVES: dict[KeyEvent, tuple[int, int]] = {
    KeyEvent("named", "up"): (0, -1),
    KeyEvent("named", "down"): (0, 1),
    KeyEvent("named", "left"): (-1, 0),
    KeyEvent("named", "right"): (1, 0),
    KeyEvent("char", "w"): (0, -1),
    KeyEvent("char", "s"): (0, 1),
    KeyEvent("char", "a"): (-1, 0),
    KeyEvent("char", "d"): (1, 0),
    KeyEvent("char", "W"): (0, -FAST_FACTOR),
    KeyEvent("char", "S"): (0, FAST_FACTOR),
    KeyEvent("char", "A"): (-FAST_FACTOR, 0),
    KeyEvent("char", "D"): (FAST_FACTOR, 0),
}


def is_quit(event: KeyEvent) -> bool:
    return event in QUIT_KEYS


def move_camera(camera: WorldPos, event: KeyEvent, *, step: int) -> WorldPos:
    """Camera after ``event``; keys without a binding leave it unchanged."""

    dx, dy = _MOVES.get(event, (0, 0))
    return WorldPos(camera.x + dx * int(step), camera.y + dy * int(step))


def build_world(config: ViewerConfig, *, seed: int) -> World:
    source = NoiseSource(
        seed=seed,
        frequency=config.frequency,
        basis=config.basis,
        octaves=config.octaves,
    )
    generator = ChunkGenerator(
        source, Quantizer.named(config.palette), chunk_size=config.chunk_size
    )
    return World(generator)


def explore(
    terminal: Terminal, world: World, *, step: int, camera: WorldPos = WorldPos(0, 0)
) -> WorldPos:
    """Run the render/input loop until a quit key; return the final camera."""

    size: tuple[int, int] | None = None
    while True:
        current = terminal.size()
        if current != size:
            logger.info("viewport %dx%d", current[0], current[1])
            terminal.clear()
            size = current
        render_viewport(terminal, world, camera, current)
        terminal.flush()

        event = terminal.read_key()
        if is_quit(event):
            return camera
        camera = move_camera(camera, event, step=step)


def run(config: ViewerConfig, terminal: Terminal) -> int:
    seed = config.resolve_seed()
    world = build_world(config, seed=seed)
    logger.info("world seed=%d %r", seed, world.generator.source)

    with terminal.session():
        camera = explore(terminal, world, step=config.step)

    logger.info(
        "quit at %s: %d chunks, %d hits, %d misses",
        tuple(camera),
        len(world),
        world.hits,
        world.misses,
    )
    return 0


def main() -> None:
    config = load_config()
    setup_logging(config.log_level_number, config.log_dir)
    try:
        code = run(config, Terminal())
    except TerminalError as exc:
        logger.error("terminal failure: %s", exc)
        print(f"noise-world: {exc}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
