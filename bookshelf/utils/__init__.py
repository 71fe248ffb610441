"""Utility modules for the Bookshelf application."""

from bookshelf.utils.http_client import close_all_clients, get_general_client
from bookshelf.utils.logging import LogContext, get_logger, setup_logging

__all__ = [
    # HTTP
    "close_all_clients",
    "get_general_client",
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
]
