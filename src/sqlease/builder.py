# Config Builders
# Mutable staging objects that produce a validated config wrapped in a handle.
#
# Usage:
#     handle = (MySQLBuilder()
#               .set_host("db.internal")
#               .set_username("app")
#               .set_password_env("APP_DB_PASSWORD")
#               .build())
#
#     store = SQLiteBuilder("~/.myapp", "data.sqlite", schema_sql).build()
#
# MySQLBuilder.build() validates every required field at once and raises a
# single ConfigValidationError listing all of them. SQLiteBuilder.build()
# has no such step; problems show up as a BootstrapError from the handle.

import logging
import os
from pathlib import Path
from typing import Any, Callable, Optional, Union

from .config import DEFAULT_ENV_PREFIX, DEFAULT_HOST, DEFAULT_PORT, FileConfig, NetworkConfig
from .errors import ConfigValidationError
from .handle import MySQLHandle, SQLiteHandle

logger = logging.getLogger(__name__)


class MySQLBuilder:
    """Stage MySQL connection parameters, then build() a MySQLHandle.

    Passing ``password_env`` while leaving ``password`` empty makes the
    handle read the password from that environment variable.
    """

    def __init__(
        self,
        host: Optional[str] = DEFAULT_HOST,
        port: Optional[Union[str, int]] = DEFAULT_PORT,
        schema: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        password_env: Optional[str] = None,
    ):
        self.host = host
        self.port = port
        self.schema = schema
        self.username = username
        self.password = password
        self.password_env = password_env

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_ENV_PREFIX,
        env_file: Optional[Union[str, Path]] = None,
    ) -> "MySQLBuilder":
        cfg = NetworkConfig.from_env(prefix=prefix, env_file=env_file)
        return cls(
            host=cfg.host,
            port=cfg.port,
            schema=cfg.schema,
            username=cfg.username,
            password=cfg.password,
            password_env=cfg.password_env,
        )

    def set_host(self, host: str) -> "MySQLBuilder":
        self.host = host
        return self

    def set_port(self, port: Union[str, int]) -> "MySQLBuilder":
        self.port = port
        return self

    def set_schema(self, schema: str) -> "MySQLBuilder":
        """Schema must already exist; otherwise leave it unset and call
        MySQLHandle.create_schema() after building."""
        self.schema = schema
        return self

    def set_username(self, username: str) -> "MySQLBuilder":
        self.username = username
        return self

    def set_password(self, password: str) -> "MySQLBuilder":
        self.password = password
        return self

    def set_password_env(self, env: str) -> "MySQLBuilder":
        self.password_env = env
        return self

    def build(self, connect: Optional[Callable[..., Any]] = None) -> MySQLHandle:
        """Validate the staged fields and return a ready MySQLHandle.

        Only the presence of a password *or* an env var name is checked.
        An env var that is unset at build time still passes (a warning is
        logged) and resolves to an empty password at connect time.

        Raises:
            ConfigValidationError: Listing every missing required field
        """
        config = NetworkConfig(
            host=self.host,
            port=None if self.port is None else str(self.port),
            schema=self.schema or None,
            username=self.username,
            password=self.password,
            password_env=self.password_env,
        )

        problems = config.missing_fields()
        if problems:
            raise ConfigValidationError(problems)

        if not config.password and config.password_env:
            if not os.environ.get(config.password_env):
                logger.warning(
                    f"Password variable {config.password_env} is not set; "
                    "connections will use an empty password until it is"
                )

        handle = MySQLHandle(config, connect=connect)
        logger.debug(f"Built MySQL handle for {handle.connection_url}")
        return handle


class SQLiteBuilder:
    """Stage SQLite parameters, then build() a bootstrapped SQLiteHandle.

    ``schema`` here is the bootstrap SQL script (statements separated by
    SPLIT lines), applied only when the database file is first created.
    """

    def __init__(
        self,
        folder_path: Optional[Union[str, Path]] = None,
        file_name: Optional[str] = None,
        schema: Optional[str] = None,
        use_foreign_keys: bool = False,
    ):
        self.database_name: Optional[str] = None
        self.folder_path = None if folder_path is None else str(folder_path)
        self.file_name = file_name
        self.schema = schema
        self.foreign_keys = use_foreign_keys

    def set_database_name(self, database_name: str) -> "SQLiteBuilder":
        self.database_name = database_name
        return self

    def set_folder_path(self, folder_path: Union[str, Path]) -> "SQLiteBuilder":
        self.folder_path = str(folder_path)
        return self

    def set_file_name(self, file_name: str) -> "SQLiteBuilder":
        self.file_name = file_name
        return self

    def set_schema(self, schema: str) -> "SQLiteBuilder":
        self.schema = schema
        return self

    def set_schema_file(self, path: Union[str, Path]) -> "SQLiteBuilder":
        self.schema = Path(path).read_text(encoding="utf-8")
        return self

    def use_foreign_keys(self, use_foreign_keys: bool = True) -> "SQLiteBuilder":
        self.foreign_keys = use_foreign_keys
        return self

    def build(self, connect: Optional[Callable[..., Any]] = None) -> SQLiteHandle:
        """Return a SQLiteHandle, creating the database file if needed.

        Raises:
            BootstrapError: See SQLiteHandle
        """
        config = FileConfig(
            folder_path=self.folder_path,
            file_name=self.file_name,
            database_name=self.database_name or None,
            schema_script=self.schema or None,
            use_foreign_keys=self.foreign_keys,
        )
        return SQLiteHandle(config, connect=connect)
