import logging
import os

from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.logging import RichHandler


def get_logger(name: str = "websearch_mcp") -> logging.Logger:
    """Create a configured logger with Rich output on stderr.

    stdout is reserved for the stdio MCP stream, so nothing may log there.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    # loggers can be built at import time, before load_settings has read .env
    load_dotenv(find_dotenv(usecwd=True))
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logger.setLevel(level if level in logging.getLevelNamesMapping() else logging.INFO)
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def set_level(level: str) -> None:
    """Apply a level to every logger already created by get_logger."""
    os.environ["LOG_LEVEL"] = level.upper()
    for logger in logging.Logger.manager.loggerDict.values():
        if isinstance(logger, logging.Logger) and any(isinstance(h, RichHandler) for h in logger.handlers):
            logger.setLevel(level.upper())
