from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Callable

import pytest

from native_launch.config import AppSettings, load_settings

REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture()
def settings(monkeypatch: pytest.MonkeyPatch) -> AppSettings:
    for key in list(os.environ):
        if key.startswith("NATIVE_LAUNCH_"):
            monkeypatch.delenv(key, raising=False)
    return load_settings(config_file=REPO_ROOT / "configs" / "settings.yaml")


@pytest.fixture()
def test_logger() -> logging.Logger:
    logger = logging.getLogger("native_launch.tests")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture()
def make_file(tmp_path: Path) -> Callable[..., Path]:
    """Create a file under tmp_path with ``size`` bytes or explicit text."""

    def _make(relative: str, size: int = 0, text: str | None = None, executable: bool = False) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if text is not None:
            path.write_text(text, encoding="utf-8")
        else:
            path.write_bytes(b"\0" * size)
        if executable:
            path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make
