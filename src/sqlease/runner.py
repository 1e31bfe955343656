# Statement Runner
# Stateless execution protocol on top of a DatabaseHandle.
#
# Scripts may hold several statements separated by a line containing only
# the delimiter token (default: SPLIT):
#
#     CREATE TABLE a (x TEXT);
#     SPLIT
#     CREATE TABLE b (y TEXT);
#
# The split is purely textual. The delimiter must never appear alone on a
# line inside a statement (e.g. within a multi-line string literal).
#
# Operation families:
#   exec_update   -> StatementError on the first failure
#   write_update  -> raw driver exception on the first failure
#   get_result_set / query_rows -> RowCursor, caller closes
#   read_data     -> first column of first row as str, "" when no rows
#   read_value    -> ReadResult, distinguishes "no row" from "empty value"
#
# Every operation opens its own connection. All but get_result_set close
# it before returning, on success and failure alike.

import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from .drivers import DRIVER_ERRORS
from .errors import StatementError

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = "SPLIT"


# ---------------------------------------------------------------------------
# Script splitting
# ---------------------------------------------------------------------------

def split_script(script: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """Split a script on standalone delimiter lines.

    Whitespace-only segments are dropped, so a trailing delimiter line is
    harmless. A script without any delimiter line is a single statement.
    """
    if not delimiter:
        raise ValueError("delimiter must be a non-empty string")
    pattern = re.compile(rf"^[ \t]*{re.escape(delimiter)}[ \t]*\r?$", re.MULTILINE)
    parts = pattern.split(script)
    return [part.strip() for part in parts if part.strip()]


def _statements_or_raise(script: str) -> List[str]:
    statements = split_script(script)
    if not statements:
        raise ValueError("script contains no statements")
    return statements


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ReadResult:
    """Outcome of read_value.

    found is False when the query returned no rows. value is None when the
    first column of the first row was SQL NULL.
    """
    found: bool = False
    value: Optional[str] = None


class RowCursor:
    """Live cursor that owns the connection it was opened on.

    Closing the cursor closes the connection too. Usable as a context
    manager and as an iterator over rows.
    """

    def __init__(self, conn: Any, cursor: Any):
        self._conn = conn
        self._cursor = cursor
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def description(self):
        return self._cursor.description

    def fetchone(self):
        return self._cursor.fetchone()

    def fetchmany(self, size: int = 1) -> list:
        return list(self._cursor.fetchmany(size))

    def fetchall(self) -> list:
        return list(self._cursor.fetchall())

    def __iter__(self):
        while True:
            row = self._cursor.fetchone()
            if row is None:
                return
            yield row

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._cursor.close()
        finally:
            self._conn.close()

    def __enter__(self) -> "RowCursor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Update operations
# ---------------------------------------------------------------------------

def _run_statements(handle, statements: List[str], wrap_errors: bool) -> bool:
    conn = handle.get_conn()
    try:
        cursor = conn.cursor()
        try:
            for index, statement in enumerate(statements):
                try:
                    cursor.execute(statement)
                except DRIVER_ERRORS as e:
                    logger.error(
                        f"Statement {index + 1}/{len(statements)} failed on {handle.target}: {e}"
                    )
                    if wrap_errors:
                        raise StatementError(statement, index, e) from e
                    raise
        finally:
            cursor.close()
    finally:
        conn.close()
    logger.debug(f"Executed {len(statements)} statement(s) on {handle.target}")
    return True


def exec_update(handle, script: str) -> bool:
    """Run every statement of a split script, in order, on one connection.

    Returns:
        True when all statements succeeded

    Raises:
        StatementError: On the first failing statement; later statements
            are not run. Earlier ones stay applied (autocommit).
        ConnectivityError: If the connection cannot be opened
    """
    return _run_statements(handle, _statements_or_raise(script), wrap_errors=True)


def write_update(handle, script: str) -> bool:
    """Same as exec_update, but the driver's own exception propagates.

    For callers that want to recover locally from e.g. an
    ``sqlite3.IntegrityError`` or ``pymysql.err.IntegrityError``.
    """
    return _run_statements(handle, _statements_or_raise(script), wrap_errors=False)


# ---------------------------------------------------------------------------
# Query operations
# ---------------------------------------------------------------------------

def get_result_set(handle, query: str) -> RowCursor:
    """Execute one query and hand its live cursor to the caller.

    The connection stays open until the returned RowCursor is closed.
    """
    conn = handle.get_conn()
    try:
        cursor = conn.cursor()
        try:
            cursor.execute(query)
        except Exception:
            cursor.close()
            raise
    except Exception:
        conn.close()
        raise
    return RowCursor(conn, cursor)


query_rows = get_result_set


def _to_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def read_value(handle, query: str) -> ReadResult:
    """First column of the first row, with an explicit found flag.

    Byte values are decoded as UTF-8; invalid sequences become U+FFFD, so
    binary columns should be read through get_result_set instead.
    """
    with get_result_set(handle, query) as rows:
        row = rows.fetchone()
    if row is None:
        return ReadResult(found=False, value=None)
    return ReadResult(found=True, value=_to_text(row[0]))


def read_data(handle, query: str) -> str:
    """First column of the first row as a string.

    Returns "" when the query yields no rows (and for SQL NULL), so "no
    data" and "empty data" look the same here. Use read_value to tell
    them apart.

    Byte values that are not valid UTF-8 come back with U+FFFD in place of
    the bad sequences.
    """
    result = read_value(handle, query)
    return result.value or ""
