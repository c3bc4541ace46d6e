from __future__ import annotations

import logging
import os
import tempfile

LOG_FILE_NAME = "noise_terrain.log"

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _writable_dir(path: str) -> bool:
    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        return False
    return os.access(path, os.W_OK)


def pick_log_file(log_dir: str | None = None) -> str | None:
    """First writable of: ``log_dir``, ``~/.cache/noise_terrain``, temp dir."""

    candidates = [
        os.path.join(os.path.expanduser("~"), ".cache", "noise_terrain"),
        os.path.join(tempfile.gettempdir(), "noise_terrain"),
    ]
    if log_dir:
        candidates.insert(0, log_dir)
    for path in candidates:
        if _writable_dir(path):
            return os.path.join(path, LOG_FILE_NAME)
    return None


def setup_logging(
    level: int = logging.WARNING, log_dir: str | None = None
) -> str | None:
    """Log to a file only; the terminal belongs to the renderer.

    Safe to call more than once. Returns the log file path, or None when no
    directory was writable.
    """

    root = logging.getLogger()
    root.setLevel(level)

    if getattr(root, "_noise_terrain_configured", False):
        # Later calls only move the level; root and handler stay in step.
        existing = getattr(root, "_noise_terrain_handler", None)
        if existing is not None:
            existing.setLevel(level)
        return getattr(root, "_noise_terrain_log_file", None)

    log_file = pick_log_file(log_dir)
    handler: logging.Handler
    if log_file is None:
        handler = logging.NullHandler()
    else:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    handler.setLevel(level)
    root.addHandler(handler)

    root._noise_terrain_configured = True  # type: ignore[attr-defined]
    root._noise_terrain_handler = handler  # type: ignore[attr-defined]
    root._noise_terrain_log_file = log_file  # type: ignore[attr-defined]
    return log_file
