"""Fixed-camera animated noise scroll (``noise-scroll``).

Each frame samples the noise directly for every screen cell, without chunks
or caching, and reports the mean draw time at the end.
"""

from __future__ import annotations

import logging
import sys
import time

import numpy as np

from noisefield.source import NoiseSource
from terrain.quantize import Quantizer
from tui.config import ANIMATED_SEED, ViewerConfig, load_config
from tui.logging_config import setup_logging
from tui.terminal import Terminal, TerminalError

logger = logging.getLogger(__name__)


def build_frame(
    source: NoiseSource,
    quantizer: Quantizer,
    *,
    width: int,
    height: int,
    offset: int,
) -> str:
    width = int(width)
    height = int(height)
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")

    xs = np.arange(width, dtype=np.float64)
    ys = np.arange(height, dtype=np.float64) + float(offset)
    cells = quantizer.indices(source.grid(xs, ys))
    # Raw mode turns off newline translation.
    return "\r\n".join(quantizer.rows(cells))


def animate(
    terminal: Terminal,
    source: NoiseSource,
    quantizer: Quantizer,
    *,
    frames: int,
    interval_s: float,
) -> list[float]:
    """Draw ``frames`` frames and return each frame's draw time in seconds."""

    frame_times: list[float] = []
    for offset in range(int(frames)):
        t0 = time.perf_counter()
        width, height = terminal.size()
        terminal.move_to(0, 0)
        terminal.write(
            build_frame(source, quantizer, width=width, height=height, offset=offset)
        )
        terminal.flush()
        frame_times.append(time.perf_counter() - t0)

        if interval_s > 0.0:
            time.sleep(interval_s)
    return frame_times


def run(config: ViewerConfig, terminal: Terminal) -> int:
    seed = config.resolve_seed(ANIMATED_SEED)
    source = NoiseSource(
        seed=seed,
        frequency=config.frequency,
        basis=config.basis,
        octaves=config.octaves,
    )
    quantizer = Quantizer.named(config.palette)
    logger.info("scroll %r frames=%d", source, config.frames)

    with terminal.session():
        frame_times = animate(
            terminal,
            source,
            quantizer,
            frames=config.frames,
            interval_s=config.frame_ms / 1000.0,
        )

    mean_ms = float(np.mean(frame_times)) * 1000.0
    logger.info("average frame time %.3f ms over %d frames", mean_ms, len(frame_times))
    print(f"Average frame time: {mean_ms:.3f} ms")
    return 0


def main() -> None:
    config = load_config()
    setup_logging(config.log_level_number, config.log_dir)
    try:
        code = run(config, Terminal())
    except TerminalError as exc:
        logger.error("terminal failure: %s", exc)
        print(f"noise-scroll: {exc}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
