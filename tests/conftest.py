"""Shared test fixtures.

Every test runs with a clean ``WSM_*`` environment, a fresh settings cache and
the current directory set to its own ``tmp_path`` so no stray ``.env`` or
workspace file leaks in.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from workspace_manager.settings import get_settings


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for key in list(os.environ):
        if key.upper().startswith("WSM_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    # Sinks added by the CLI point at streams that CliRunner closes.
    logger.remove()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """``proj/`` with child dirs ``a`` and ``c``, a hidden dir and a plain file ``b``."""
    root = tmp_path / "proj"
    root.mkdir()
    (root / "a").mkdir()
    (root / "c").mkdir()
    (root / ".hidden").mkdir()
    (root / "b").write_text("not a directory", encoding="utf-8")
    return root
