# Driver Layer
# One function per engine that opens a raw DB-API connection.
#
# Handles bind one of these (or a caller-supplied replacement) in their
# constructor; nothing is registered at import time. Every call returns a
# brand-new connection in autocommit mode. Nothing here pools or caches.

import sqlite3
from pathlib import Path
from typing import Optional, Union

import pymysql

# Exceptions a statement can raise, across the supported drivers.
DRIVER_ERRORS = (sqlite3.Error, pymysql.err.Error)


def connect_sqlite(
    db_path: Union[str, Path],
    *,
    use_foreign_keys: bool = False,
) -> sqlite3.Connection:
    """Open a SQLite connection in autocommit mode.

    Args:
        db_path: Path to the database file (created if absent).
        use_foreign_keys: If True, enable ``PRAGMA foreign_keys`` on this connection.

    Returns:
        sqlite3.Connection with ``isolation_level=None``.
    """
    conn = sqlite3.connect(str(db_path), isolation_level=None)
    try:
        if use_foreign_keys:
            conn.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error:
        conn.close()
        raise
    return conn


def connect_mysql(
    *,
    host: str,
    port: int,
    user: str,
    password: str,
    database: Optional[str] = None,
) -> "pymysql.connections.Connection":
    """Open a PyMySQL connection in autocommit mode.

    ``database=None`` gives a server-level connection with no schema
    selected.
    """
    return pymysql.connect(
        host=host,
        port=port,
        user=user,
        password=password,
        database=database,
        autocommit=True,
        charset="utf8mb4",
    )
