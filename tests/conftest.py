"""Shared pytest fixtures and configuration for the odo test suite.

Guidelines
----------
* Every test gets its own data directory under ``tmp_path``; the real
  per-user database is never touched.
* Core parser tests must be pure — no store, no side effects.
* Service and infra tests run against a real SQLite file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from odo.core.task_service import TaskService
from odo.infra.sqlite_store import SqliteStore, open_store


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point ``ODO_DATA_DIR`` at a private directory and clear other settings."""
    data_dir = tmp_path / "odo-data"
    monkeypatch.setenv("ODO_DATA_DIR", str(data_dir))
    monkeypatch.delenv("ODO_LOG_LEVEL", raising=False)
    monkeypatch.delenv("ODO_BUSY_TIMEOUT", raising=False)
    yield data_dir

    # The CLI configures the "odo" logger tree; undo it between tests.
    logger = logging.getLogger("odo")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture()
def store(isolated_env: Path) -> Iterator[SqliteStore]:
    with open_store(isolated_env) as opened:
        opened.initialize_schema()
        yield opened


@pytest.fixture()
def service(store: SqliteStore) -> TaskService:
    return TaskService(store)
