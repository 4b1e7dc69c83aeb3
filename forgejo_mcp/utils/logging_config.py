"""Logging configuration for the MCP server."""

import logging
from typing import Optional, Union

from .errors import ConfigError


# Used when no level or an unknown level name is given
DEFAULT_LOG_LEVEL = logging.INFO


def resolve_log_level(log_level: Union[int, str, None]) -> int:
    """
    Turn a level name ("debug", "INFO") or number into a logging level.

    Unknown names fall back to DEFAULT_LOG_LEVEL.
    """
    if log_level is None:
        return DEFAULT_LOG_LEVEL
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(log_level.strip().upper())
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL


def setup_logging(log_level: Union[int, str, None] = None, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the MCP server.

    Logs are written to a file or suppressed entirely to avoid interfering
    with MCP protocol communication on stdout/stderr.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs to. If not provided, logs are suppressed.
    """
    level = resolve_log_level(log_level)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers
    root_logger.handlers.clear()

    # NullHandler by default: stdout carries the MCP stdio transport
    root_logger.addHandler(logging.NullHandler())

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError as e:
            raise ConfigError(f"cannot open log file {log_file}: {e}", "FORGEJO_LOG_FILE")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Set specific loggers to WARNING to minimize noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__ from module)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
