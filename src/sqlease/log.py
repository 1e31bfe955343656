# Logging Setup
# structlog pipeline for the sqlease package and its CLI.
#
# Library modules log through the standard ``logging.getLogger(__name__)``.
# configure_logging() attaches one handler to the "sqlease" logger whose
# formatter runs records through structlog, so stdlib records and
# structlog events render identically (console or JSON).

import logging
import sys
from typing import IO, Optional, Union

import structlog

_HANDLER_NAME = "sqlease-structlog"

_SHARED_PROCESSORS = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
]


def configure_logging(
    level: Union[int, str] = "INFO",
    json: bool = False,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Route sqlease logs through structlog.

    Safe to call more than once; the previous handler is replaced rather
    than stacked.

    Args:
        level: Log level name or number for the "sqlease" logger
        json: Render JSON lines instead of the console format
        stream: Output stream (default: stderr)

    Returns:
        The configured "sqlease" stdlib logger
    """
    if json:
        render_chain = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        render_chain = [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=_SHARED_PROCESSORS + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *render_chain,
        ],
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger("sqlease")
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper() if isinstance(level, str) else level)
    package_logger.propagate = False
    return package_logger


def get_logger(name: str = "sqlease"):
    """structlog logger bound to a stdlib logger under ``name``."""
    return structlog.get_logger(name)
