# SQLEase - Command Line Entry Point
#
#   sqlease help                                   -> runtime requirements
#   sqlease sqlite --folder F --file N exec S.sql  -> run a SPLIT script
#   sqlease sqlite --folder F --file N read "SQL"  -> print first value
#   sqlease sqlite --folder F --file N delete      -> remove the store file

import argparse
import sys
from pathlib import Path

from . import __version__
from .builder import SQLiteBuilder
from .config import FileConfig
from .errors import SQLEaseError
from .log import configure_logging, get_logger

HELP_TEXT = """\
SQLEase needs these packages at runtime:

    PyMySQL         MySQL / MariaDB driver (network stores)
    structlog       log rendering
    python-dotenv   .env loading for MySQLBuilder.from_env()

SQLite support uses the sqlite3 module from the standard library.

Typical use:

    from sqlease import MySQLBuilder, SQLiteBuilder

    db = (MySQLBuilder()
          .set_host("localhost")
          .set_username("app")
          .set_password_env("APP_DB_PASSWORD")
          .build())
    db.create_schema("app")

    store = SQLiteBuilder("~/.myapp", "data.sqlite", schema_sql).build()
    store.exec_update("INSERT INTO t(x) VALUES('a');\\nSPLIT\\nINSERT INTO t(x) VALUES('b');")
    print(store.read_data("SELECT x FROM t"))
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlease",
        description="SQLEase - validated MySQL/SQLite handles and SPLIT scripts",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level for sqlease messages (default: WARNING)"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"SQLEase v{__version__}"
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("help", help="Show runtime requirements and a usage sketch")

    sqlite = sub.add_parser("sqlite", help="Work with a SQLite store")
    sqlite.add_argument("--folder", required=True, help="Folder holding the database file")
    sqlite.add_argument("--file", required=True, help="Database file name")
    sqlite.add_argument("--schema-file", help="Bootstrap script used when the file is created")
    sqlite.add_argument("--foreign-keys", action="store_true", help="Enforce foreign keys")

    actions = sqlite.add_subparsers(dest="action", required=True)
    exec_p = actions.add_parser("exec", help="Run a SPLIT-separated script file")
    exec_p.add_argument("script", type=Path)
    read_p = actions.add_parser("read", help="Print the first value of a query")
    read_p.add_argument("query")
    actions.add_parser("delete", help="Delete the database file")
    return parser


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(level=args.log_level, json=args.json_logs)
    log = get_logger("sqlease.cli")

    if args.command == "help":
        print(HELP_TEXT)
        return 0

    if args.action == "delete" and not FileConfig(args.folder, args.file).path.exists():
        # Building would create the file first; nothing to delete.
        print("not found")
        return 0

    try:
        builder = SQLiteBuilder(args.folder, args.file).use_foreign_keys(args.foreign_keys)
        if args.schema_file:
            builder.set_schema_file(args.schema_file)
        store = builder.build()

        if args.action == "exec":
            store.exec_update(args.script.read_text(encoding="utf-8"))
            print("OK")
        elif args.action == "read":
            print(store.read_data(args.query))
        elif args.action == "delete":
            print("deleted" if store.delete_file() else "not found")
    except (SQLEaseError, OSError) as e:
        log.error("command_failed", action=args.action, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
