# Connection Configuration
# Immutable parameter sets for the two supported engines.
#
#   NetworkConfig -> MySQL / MariaDB server (host, port, credentials)
#   FileConfig    -> SQLite file (folder, file name, bootstrap script)
#
# Configs are frozen. A password that lives in an environment variable is
# looked up each time it is needed and never written back into the config.

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = "3306"
DEFAULT_ENV_PREFIX = "SQLEASE_MYSQL_"


def _blank(value: Optional[str]) -> bool:
    return value is None or str(value) == ""


@dataclass(frozen=True)
class NetworkConfig:
    """Where and how to reach a MySQL server.

    Attributes:
        host: Server hostname or IP address
        port: Server port, kept as a string (default: 3306)
        schema: Schema to select on connect; may be None until created
        username: Login user
        password: Literal password
        password_env: Name of an environment variable holding the password
    """

    host: Optional[str] = DEFAULT_HOST
    port: Optional[str] = DEFAULT_PORT
    schema: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    password_env: Optional[str] = None

    def missing_fields(self) -> List[str]:
        """Return one message per missing or malformed required field."""
        problems: List[str] = []
        if _blank(self.port):
            problems.append("No port number provided")
        elif not str(self.port).isdigit() or int(self.port) <= 0:
            problems.append(f"Port must be numeric: {self.port}")
        if _blank(self.host):
            problems.append("No host provided")
        if _blank(self.username):
            problems.append("No username provided")
        if _blank(self.password) and _blank(self.password_env):
            problems.append("No password provided")
        return problems

    def resolve_password(self) -> str:
        """Literal password if set, otherwise the current env var value.

        Returns an empty string when neither yields anything.
        """
        if not _blank(self.password):
            return self.password
        if not _blank(self.password_env):
            return os.environ.get(self.password_env, "")
        return ""

    @property
    def port_number(self) -> int:
        return int(self.port)

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_ENV_PREFIX,
        env_file: Optional[Union[str, Path]] = None,
    ) -> "NetworkConfig":
        """Read connection parameters from the environment.

        A .env file is loaded first (python-dotenv); variables already set
        in the process take precedence over the file.

        Recognised names (after ``prefix``): HOST, PORT, SCHEMA, USER,
        PASSWORD, PASSWORD_ENV.
        """
        load_dotenv(env_file, override=False)
        return cls(
            host=os.getenv(f"{prefix}HOST", DEFAULT_HOST),
            port=os.getenv(f"{prefix}PORT", DEFAULT_PORT),
            schema=os.getenv(f"{prefix}SCHEMA") or None,
            username=os.getenv(f"{prefix}USER"),
            password=os.getenv(f"{prefix}PASSWORD"),
            password_env=os.getenv(f"{prefix}PASSWORD_ENV"),
        )


@dataclass(frozen=True)
class FileConfig:
    """Where a SQLite store lives and how to initialise it.

    Attributes:
        folder_path: Directory that holds the database file
        file_name: Database file name
        database_name: Logical schema label (SQLite has only ``main``)
        schema_script: SQL run once when the file is first created
        use_foreign_keys: Turn on ``PRAGMA foreign_keys`` for every connection
    """

    folder_path: Optional[str] = None
    file_name: Optional[str] = None
    database_name: Optional[str] = None
    schema_script: Optional[str] = field(default=None, repr=False)
    use_foreign_keys: bool = False

    def missing_fields(self) -> List[str]:
        problems: List[str] = []
        if _blank(self.folder_path):
            problems.append("No folder path provided")
        if _blank(self.file_name):
            problems.append("No file name provided")
        return problems

    @property
    def path(self) -> Path:
        return (Path(self.folder_path).expanduser() / self.file_name).absolute()
