"""
Tests for the per-engine connect functions.
"""

import sqlite3
from unittest.mock import MagicMock

import pytest

from sqlease import drivers


class TestConnectSQLite:

    def test_autocommit_plain_tuples(self, tmp_path):
        conn = drivers.connect_sqlite(tmp_path / "plain.sqlite")
        try:
            assert conn.isolation_level is None
            assert conn.row_factory is None
            assert conn.execute("PRAGMA foreign_keys").fetchone() == (0,)
        finally:
            conn.close()

    def test_foreign_keys_pragma(self, tmp_path):
        conn = drivers.connect_sqlite(tmp_path / "fk.sqlite", use_foreign_keys=True)
        try:
            assert conn.execute("PRAGMA foreign_keys").fetchone() == (1,)
        finally:
            conn.close()

    def test_only_known_options(self, tmp_path):
        with pytest.raises(TypeError):
            drivers.connect_sqlite(tmp_path / "x.sqlite", row_factory=True)


class TestConnectMySQL:

    def test_passes_fixed_options(self, monkeypatch):
        fake_connect = MagicMock()
        monkeypatch.setattr(drivers.pymysql, "connect", fake_connect)

        drivers.connect_mysql(host="db", port=3306, user="app", password="pw")

        fake_connect.assert_called_once_with(
            host="db",
            port=3306,
            user="app",
            password="pw",
            database=None,
            autocommit=True,
            charset="utf8mb4",
        )

    def test_no_timeout_option(self):
        with pytest.raises(TypeError):
            drivers.connect_mysql(
                host="db", port=3306, user="app", password="pw", connect_timeout=5
            )

    def test_driver_errors_cover_both_engines(self):
        assert issubclass(sqlite3.OperationalError, drivers.DRIVER_ERRORS)
        assert issubclass(drivers.pymysql.err.OperationalError, drivers.DRIVER_ERRORS)
