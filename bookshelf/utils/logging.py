"""Centralized logging configuration for the Bookshelf application."""

import logging
import sys
from typing import Literal

from bookshelf.config import get_settings


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None
) -> None:
    """Configure logging for the application.

    Args:
        level: Override log level (default: LOG_LEVEL setting, else INFO for
            production and DEBUG for development)
    """
    settings = get_settings()

    if level is None:
        level = settings.log_level or ("INFO" if settings.is_production else "DEBUG")

    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    # DATABASE_ECHO turns SQL statement logging back on
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger.

    Args:
        name: Dotted logger name, normally the caller's ``__name__``

    Returns:
        The stdlib logger, configured by setup_logging()
    """
    return logging.getLogger(name)


class LogContext:
    """Logger wrapper that tags every message with ``[key=value]`` pairs.

    Used around a single NDL lookup so every line carries the ISBN:

        log = LogContext(logger, isbn="9784000000001")
        log.info("lookup started")  # [isbn=9784000000001] lookup started
    """

    def __init__(self, logger: logging.Logger, **context: str) -> None:
        """Wrap a logger.

        Args:
            logger: Logger that receives the messages
            **context: Pairs rendered in front of each message, in order
        """
        self.logger = logger
        self.context = context
        self.prefix = " ".join(f"[{k}={v}]" for k, v in context.items())

    def bind(self, **context: str) -> "LogContext":
        """Return a new LogContext with extra pairs appended to this one."""
        return LogContext(self.logger, **{**self.context, **context})

    def _log(self, level: int, msg: str, *args, **kwargs) -> None:
        self.logger.log(level, f"{self.prefix} {msg}", *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        """Log at DEBUG with the context prefix."""
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        """Log at INFO with the context prefix."""
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        """Log at WARNING with the context prefix."""
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        """Log at ERROR with the context prefix."""
        self._log(logging.ERROR, msg, *args, **kwargs)
