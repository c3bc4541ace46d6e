from __future__ import annotations

import logging
import os
import random
from collections.abc import Mapping
from dataclasses import dataclass

from noisefield.source import BASES
from terrain.chunks import CHUNK_SIZE
from terrain.quantize import PALETTES

ENV_PREFIX = "NOISE_TERRAIN_"

# Default seed of the noise library the animated demo was first written against.
ANIMATED_SEED = 1337

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ViewerConfig:
    seed: int | None = None
    frequency: float = 0.01
    basis: str = "perlin"
    octaves: int = 1
    palette: str = "ascii"
    chunk_size: int = CHUNK_SIZE
    step: int = 4
    frames: int = 100
    frame_ms: int = 100
    log_level: str = "WARNING"
    log_dir: str | None = None

    def resolve_seed(self, default: int | None = None) -> int:
        if self.seed is not None:
            return int(self.seed)
        if default is not None:
            return int(default)
        return random.randrange(2**31)

    @property
    def log_level_number(self) -> int:
        return int(getattr(logging, self.log_level, logging.WARNING))


def _env_get(environ: Mapping[str, str], name: str) -> str | None:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _env_int(
    environ: Mapping[str, str],
    name: str,
    default: int,
    *,
    min_value: int,
    max_value: int,
) -> int:
    raw = _env_get(environ, name)
    if raw is None:
        return default
    try:
        v = int(float(raw))
    except (ValueError, OverflowError):
        v = default
    return max(min_value, min(max_value, v))


def _env_float(
    environ: Mapping[str, str],
    name: str,
    default: float,
    *,
    min_value: float,
    max_value: float,
) -> float:
    raw = _env_get(environ, name)
    if raw is None:
        return default
    try:
        v = float(raw)
    except ValueError:
        v = default
    if v != v:
        v = default
    return max(min_value, min(max_value, v))


def _env_choice(
    environ: Mapping[str, str], name: str, default: str, choices: tuple[str, ...]
) -> str:
    raw = _env_get(environ, name)
    if raw is None:
        return default
    return raw if raw in choices else default


def load_config(environ: Mapping[str, str] | None = None) -> ViewerConfig:
    """Read ``NOISE_TERRAIN_*`` variables; bad values fall back to defaults."""

    env = os.environ if environ is None else environ
    d = ViewerConfig()

    seed: int | None = None
    if _env_get(env, "SEED") is not None:
        seed = _env_int(env, "SEED", 0, min_value=0, max_value=2**31 - 1)

    return ViewerConfig(
        seed=seed,
        frequency=_env_float(
            env, "FREQUENCY", d.frequency, min_value=1e-4, max_value=1.0
        ),
        basis=_env_choice(env, "BASIS", d.basis, BASES),
        octaves=_env_int(env, "OCTAVES", d.octaves, min_value=1, max_value=8),
        palette=_env_choice(env, "PALETTE", d.palette, tuple(PALETTES)),
        chunk_size=_env_int(
            env, "CHUNK_SIZE", d.chunk_size, min_value=8, max_value=1024
        ),
        step=_env_int(env, "STEP", d.step, min_value=1, max_value=256),
        frames=_env_int(env, "FRAMES", d.frames, min_value=1, max_value=100_000),
        frame_ms=_env_int(env, "FRAME_MS", d.frame_ms, min_value=0, max_value=10_000),
        log_level=_env_choice(env, "LOG_LEVEL", d.log_level, _LOG_LEVELS),
        log_dir=_env_get(env, "LOG_DIR"),
    )
