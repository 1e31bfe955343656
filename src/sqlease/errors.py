# SQLEase Errors
# Exception hierarchy shared by the config, handle and runner layers.
#
# Configuration and bootstrap failures always surface to the caller.
# Statement failures surface as StatementError from the exec family only;
# the write family lets the driver's own exception through.

from typing import List, Optional


class SQLEaseError(Exception):
    """Base exception for SQLEase."""


class ConfigValidationError(SQLEaseError):
    """Raised by a builder when required connection fields are missing.

    Carries every problem found, not just the first one.
    """

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__(self.format_problems(self.problems))

    @staticmethod
    def format_problems(problems: List[str]) -> str:
        return "\n".join(f"\t- {p}" for p in problems)


class BootstrapError(SQLEaseError):
    """Raised when a file-backed store cannot be created or initialised."""

    def __init__(self, message: str, path: Optional[str] = None, statement_index: Optional[int] = None):
        self.path = path
        self.statement_index = statement_index
        super().__init__(message)


class ConnectivityError(SQLEaseError):
    """Raised when a connection cannot be opened."""

    def __init__(self, message: str, target: str = ""):
        self.target = target
        super().__init__(message)


class StatementError(SQLEaseError):
    """Raised when a statement in a split script fails (exec family)."""

    def __init__(self, statement: str, index: int, cause: Optional[BaseException] = None):
        self.statement = statement
        self.index = index
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Statement {index + 1} failed{detail}")
