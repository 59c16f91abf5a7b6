"""Pytest configuration for test isolation.

- The shared SQLAlchemy engine in ``db.client`` is process-global and refuses
  to rebind to a different URL, while each test builds its own SQLite file.
  The engine is reset around every test.
- Environment variables read by the package (``DATABASE_URL``,
  ``POS_CATALOG_PATH``, ``POS_LOG_LEVEL``) are cleared so a developer's
  ``.env`` or shell cannot leak into assertions.
- ``configure_logging`` runs once per process and turns off propagation on the
  package logger; its effects are undone after each test so ``caplog`` keeps
  seeing package records.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# Make sure the workspace `packages/` and `libs/db/src` dirs are importable
_ROOT = Path(__file__).resolve().parents[1]
sys.path[:0] = [
    p
    for p in [str(_ROOT / "packages"), str(_ROOT / "libs" / "db" / "src"), str(_ROOT)]
    if p not in sys.path
]


@pytest.fixture(autouse=True)
def _isolate_db_engine():
    from db.client import reset_engine

    reset_engine()
    yield
    reset_engine()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DATABASE_URL", "POS_CATALOG_PATH", "POS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _isolate_package_logging(monkeypatch: pytest.MonkeyPatch):
    from point_of_sale import logging_setup

    pkg_logger = logging.getLogger("point_of_sale")
    saved_handlers = list(pkg_logger.handlers)
    saved_propagate = pkg_logger.propagate
    saved_level = pkg_logger.level
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    yield
    pkg_logger.handlers[:] = saved_handlers
    pkg_logger.propagate = saved_propagate
    pkg_logger.setLevel(saved_level)
