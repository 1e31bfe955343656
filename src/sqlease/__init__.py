# SQLEase - Main Package
#
# Configuration-and-lifecycle layer over MySQL (PyMySQL) and SQLite:
# describe the connection once, validate it, open connections on demand,
# and run SPLIT-separated multi-statement scripts.

__version__ = "1.0.0"
__description__ = "Builder-validated MySQL and SQLite connection handles"

from .builder import MySQLBuilder, SQLiteBuilder
from .config import FileConfig, NetworkConfig
from .errors import (
    BootstrapError,
    ConfigValidationError,
    ConnectivityError,
    SQLEaseError,
    StatementError,
)
from .handle import DatabaseHandle, MySQLHandle, SQLiteHandle
from .log import configure_logging
from .runner import (
    ReadResult,
    RowCursor,
    exec_update,
    get_result_set,
    query_rows,
    read_data,
    read_value,
    split_script,
    write_update,
)

__all__ = [
    "__version__",
    # Builders & configs
    "MySQLBuilder",
    "SQLiteBuilder",
    "NetworkConfig",
    "FileConfig",
    # Handles
    "DatabaseHandle",
    "MySQLHandle",
    "SQLiteHandle",
    # Statements
    "split_script",
    "exec_update",
    "write_update",
    "get_result_set",
    "query_rows",
    "read_data",
    "read_value",
    "ReadResult",
    "RowCursor",
    # Errors
    "SQLEaseError",
    "ConfigValidationError",
    "BootstrapError",
    "ConnectivityError",
    "StatementError",
    # Logging
    "configure_logging",
]
