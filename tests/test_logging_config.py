from __future__ import annotations

import logging
import os

from tui.logging_config import LOG_FILE_NAME, pick_log_file, setup_logging


def test_pick_log_file_prefers_configured_dir(tmp_path) -> None:
    target = tmp_path / "logs"
    assert pick_log_file(str(target)) == os.path.join(str(target), LOG_FILE_NAME)
    assert target.is_dir()


def test_pick_log_file_falls_back_when_dir_unusable(tmp_path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x")
    path = pick_log_file(str(blocker / "sub"))
    assert path is not None
    assert not path.startswith(str(blocker))


def test_setup_logging_writes_file_and_is_idempotent(tmp_path, monkeypatch) -> None:
    root = logging.getLogger()
    monkeypatch.delattr(root, "_noise_terrain_configured", raising=False)
    monkeypatch.delattr(root, "_noise_terrain_log_file", raising=False)
    monkeypatch.delattr(root, "_noise_terrain_handler", raising=False)
    before = list(root.handlers)
    old_level = root.level
    try:
        path = setup_logging(logging.INFO, str(tmp_path))
        again = setup_logging(logging.INFO, str(tmp_path))
        assert path == again == os.path.join(str(tmp_path), LOG_FILE_NAME)
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1

        logging.getLogger("terrain.world").info("hello from the world")
        added[0].flush()
        with open(path, encoding="utf-8") as fh:
            assert "INFO | terrain.world | hello from the world" in fh.read()
    finally:
        for h in root.handlers[:]:
            if h not in before:
                root.removeHandler(h)
                h.close()
        root.setLevel(old_level)
        for attr in (
            "_noise_terrain_configured",
            "_noise_terrain_handler",
            "_noise_terrain_log_file",
        ):
            if hasattr(root, attr):
                delattr(root, attr)


def test_setup_logging_second_call_moves_handler_level(tmp_path, monkeypatch) -> None:
    root = logging.getLogger()
    for attr in (
        "_noise_terrain_configured",
        "_noise_terrain_handler",
        "_noise_terrain_log_file",
    ):
        monkeypatch.delattr(root, attr, raising=False)
    before = list(root.handlers)
    old_level = root.level
    try:
        setup_logging(logging.WARNING, str(tmp_path))
        setup_logging(logging.DEBUG, str(tmp_path))
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        assert root.level == logging.DEBUG
        assert added[0].level == logging.DEBUG

        logging.getLogger("tui.explore").debug("camera moved")
        added[0].flush()
        with open(os.path.join(str(tmp_path), LOG_FILE_NAME), encoding="utf-8") as fh:
            assert "DEBUG | tui.explore | camera moved" in fh.read()
    finally:
        for h in root.handlers[:]:
            if h not in before:
                root.removeHandler(h)
                h.close()
        root.setLevel(old_level)
        for attr in (
            "_noise_terrain_configured",
            "_noise_terrain_handler",
            "_noise_terrain_log_file",
        ):
            if hasattr(root, attr):
                delattr(root, attr)
