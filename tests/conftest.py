"""
Shared pytest fixtures for the SQLEase test suite.

Autouse fixtures below isolate tests from the host environment:
  - MySQL env vars -> removed     (prevents a developer's SQLEASE_MYSQL_* leaking in)
  - Logging        -> reset       (configure_logging() turns off propagation)
"""

import logging
from unittest.mock import MagicMock

import pytest
import structlog

from sqlease import SQLiteBuilder

TWO_TABLE_SCHEMA = """
CREATE TABLE "TestTable1" (
  "id" INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
  "Item1" TEXT NOT NULL,
  "Item2" TEXT NOT NULL
);
SPLIT
CREATE TABLE "TestTable2" (
  "id" INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
  "Item1" TEXT NOT NULL,
  "Item2" TEXT NOT NULL
);
"""

_ENV_NAMES = ("HOST", "PORT", "SCHEMA", "USER", "PASSWORD", "PASSWORD_ENV")


@pytest.fixture(autouse=True)
def _isolate_mysql_env(monkeypatch):
    """Strip SQLEASE_MYSQL_* variables so from_env() sees only what a test sets."""
    for name in _ENV_NAMES:
        monkeypatch.delenv(f"SQLEASE_MYSQL_{name}", raising=False)
    monkeypatch.delenv("SQLEASE_TEST_PASSWORD", raising=False)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo configure_logging() so caplog keeps working in later tests."""
    yield
    package_logger = logging.getLogger("sqlease")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
    structlog.reset_defaults()


@pytest.fixture
def schema_script():
    return TWO_TABLE_SCHEMA


@pytest.fixture
def store(tmp_path, schema_script):
    """Fresh SQLite store with two tables in a temp directory."""
    return SQLiteBuilder(tmp_path / "data", "test.sqlite", schema_script).build()


@pytest.fixture
def fake_mysql():
    """Stand-in for drivers.connect_mysql.

    ``fake_mysql.conn`` is the connection every call returns and
    ``fake_mysql.cursor`` its cursor.
    """
    cursor = MagicMock(name="cursor")
    cursor.fetchone.return_value = None
    conn = MagicMock(name="conn")
    conn.cursor.return_value = cursor
    connect = MagicMock(name="connect", return_value=conn)
    connect.conn = conn
    connect.cursor = cursor
    return connect
