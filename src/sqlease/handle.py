# Database Handles
# A handle wraps one validated config and knows how to open connections.
#
#   SQLiteHandle -> bootstraps the backing file on construction:
#       1. Resolve folder + file name to an absolute path
#       2. Existing file  -> accept it, never re-run the bootstrap script
#       3. Missing file   -> create parent dirs, open (creates the file),
#                            run each split statement of the script in order
#   MySQLHandle  -> no I/O on construction; creates schemas on request
#
# Handles never pool: get_conn() returns a new connection on every call.
# The driver connect function is bound once in the constructor, either the
# engine default from .drivers or one supplied by the caller.

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Optional

from . import runner
from .config import FileConfig, NetworkConfig
from .drivers import DRIVER_ERRORS, connect_mysql, connect_sqlite
from .errors import BootstrapError, ConfigValidationError, ConnectivityError

logger = logging.getLogger(__name__)

_SIDECAR_SUFFIXES = ("-journal", "-wal", "-shm")


class DatabaseHandle(ABC):
    """Common surface of both engines.

    The statement operations are thin wrappers over ``sqlease.runner``.
    """

    @property
    @abstractmethod
    def target(self) -> str:
        """Display name of what this handle connects to (no secrets)."""

    @abstractmethod
    def get_conn(self) -> Any:
        """Open and return a new DB-API connection in autocommit mode.

        Raises:
            ConnectivityError: If the driver cannot open the connection
        """

    def exec_update(self, script: str) -> bool:
        return runner.exec_update(self, script)

    def write_update(self, script: str) -> bool:
        return runner.write_update(self, script)

    def get_result_set(self, query: str) -> runner.RowCursor:
        return runner.get_result_set(self, query)

    query_rows = get_result_set

    def read_data(self, query: str) -> str:
        return runner.read_data(self, query)

    def read_value(self, query: str) -> runner.ReadResult:
        return runner.read_value(self, query)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.target!r})"


# ---------------------------------------------------------------------------
# SQLite
# ---------------------------------------------------------------------------

class SQLiteHandle(DatabaseHandle):
    """File-backed store. Construction bootstraps the file if needed.

    Args:
        config: FileConfig describing the store
        connect: Callable ``(path, use_foreign_keys=bool) -> connection``;
            defaults to drivers.connect_sqlite

    Raises:
        BootstrapError: If the directory or file cannot be created, or a
            bootstrap statement fails (earlier statements stay applied)
    """

    def __init__(self, config: FileConfig, connect: Optional[Callable[..., Any]] = None):
        self.config = config
        self._connect = connect or connect_sqlite
        self._path: Optional[Path] = None
        self._bootstrap()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def file_path(self) -> str:
        """Absolute path of the store file, or "" if never resolved."""
        return str(self._path) if self._path is not None else ""

    @property
    def database_name(self) -> Optional[str]:
        return self.config.database_name

    @property
    def target(self) -> str:
        return self.file_path

    def exists(self) -> bool:
        return self._path is not None and self._path.is_file()

    def _open(self, path: Path) -> Any:
        return self._connect(path, use_foreign_keys=self.config.use_foreign_keys)

    def _bootstrap(self) -> None:
        problems = self.config.missing_fields()
        if problems:
            raise BootstrapError(
                "Cannot locate database file:\n" + ConfigValidationError.format_problems(problems)
            )

        path = self.config.path
        if path.exists():
            if not path.is_file():
                raise BootstrapError(f"Database path is not a file: {path}", path=str(path))
            self._path = path
            logger.info(f"Using existing database file: {path}")
            return

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BootstrapError(
                f"Could not create directory {path.parent}: {e}", path=str(path)
            ) from e

        try:
            conn = self._open(path)
        except (OSError, *DRIVER_ERRORS) as e:
            raise BootstrapError(
                f"Database file does not exist and could not be created: {path}", path=str(path)
            ) from e

        try:
            self._path = path
            script = self.config.schema_script
            if script and script.strip():
                self._apply_script(conn, path, runner.split_script(script))
        finally:
            conn.close()
        logger.info(f"Created database file: {path}")

    @staticmethod
    def _apply_script(conn: Any, path: Path, statements) -> None:
        cursor = conn.cursor()
        try:
            for index, statement in enumerate(statements):
                try:
                    cursor.execute(statement)
                except DRIVER_ERRORS as e:
                    raise BootstrapError(
                        f"Bootstrap statement {index + 1}/{len(statements)} failed for {path}: {e}",
                        path=str(path),
                        statement_index=index,
                    ) from e
        finally:
            cursor.close()
        logger.debug(f"Applied {len(statements)} bootstrap statement(s) to {path}")

    def get_conn(self) -> Any:
        if not self.exists():
            raise ConnectivityError(
                f"Database file no longer exists: {self._path}", target=self.file_path
            )
        try:
            return self._open(self._path)
        except (OSError, *DRIVER_ERRORS) as e:
            raise ConnectivityError(
                f"Could not open database file {self._path}: {e}", target=self.file_path
            ) from e

    def delete_file(self) -> bool:
        """Remove the store file (and any journal sidecars).

        The handle stays usable only for file_path and exists(). Later
        connections raise ConnectivityError instead of recreating an empty,
        unbootstrapped file; build a new handle to start over.

        Returns:
            True if the file existed and was removed, False if absent

        Raises:
            OSError: If the file exists but cannot be removed
        """
        if not self.exists():
            return False
        self._path.unlink()
        for suffix in _SIDECAR_SUFFIXES:
            sidecar = self._path.with_name(self._path.name + suffix)
            if sidecar.exists():
                sidecar.unlink()
        logger.info(f"Deleted database file: {self._path}")
        return True


# ---------------------------------------------------------------------------
# MySQL
# ---------------------------------------------------------------------------

def quote_identifier(name: str) -> str:
    """Backtick-quote a MySQL identifier."""
    return "`" + name.replace("`", "``") + "`"


class MySQLHandle(DatabaseHandle):
    """Network store on a MySQL/MariaDB server.

    The password is resolved on every connection, so rotating the value of
    ``password_env`` takes effect without rebuilding the handle.

    Args:
        config: Validated NetworkConfig
        connect: Callable taking the keyword arguments of
            drivers.connect_mysql; defaults to it
    """

    def __init__(self, config: NetworkConfig, connect: Optional[Callable[..., Any]] = None):
        self.config = config
        self._connect = connect or connect_mysql
        self._schema = config.schema

    @property
    def schema(self) -> Optional[str]:
        return self._schema

    @property
    def connection_url(self) -> str:
        cfg = self.config
        return f"mysql://{cfg.username}@{cfg.host}:{cfg.port}/{self._schema or ''}"

    @property
    def target(self) -> str:
        return self.connection_url

    def _open(self, database: Optional[str]) -> Any:
        cfg = self.config
        try:
            return self._connect(
                host=cfg.host,
                port=cfg.port_number,
                user=cfg.username,
                password=cfg.resolve_password(),
                database=database,
            )
        except DRIVER_ERRORS as e:
            raise ConnectivityError(
                f"Could not connect to {self.connection_url}: {e}", target=self.connection_url
            ) from e

    def get_conn(self) -> Any:
        return self._open(self._schema)

    def create_schema(self, name: str) -> bool:
        """Create ``name`` on the server if absent and select it.

        Uses a server-level connection (no schema). On success the handle
        remembers ``name`` for later get_conn() calls.

        Returns:
            True on success, False if the server rejected it or was unreachable
        """
        if not name:
            raise ValueError("schema name must be non-empty")

        try:
            conn = self._open(None)
        except ConnectivityError as e:
            logger.error(f"Schema {name!r} not created: {e}")
            return False

        try:
            cursor = conn.cursor()
            try:
                cursor.execute(f"CREATE SCHEMA IF NOT EXISTS {quote_identifier(name)}")
            finally:
                cursor.close()
        except DRIVER_ERRORS as e:
            logger.error(f"Schema {name!r} not created on {self.config.host}: {e}")
            return False
        finally:
            conn.close()

        self._schema = name
        logger.info(f"Schema ready: {self.connection_url}")
        return True
