import logging
import sys
from typing import Optional

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", console: bool = True) -> None:
    """
    Configure the package loggers.

    Logs go to stderr so that stdout stays reserved for the JSON output.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        console: Attach a stderr handler when True
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    package_logger = logging.getLogger("iwsearch")
    package_logger.handlers.clear()
    package_logger.setLevel(log_level)

    if console:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(log_level)
        handler.setFormatter(
            logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        package_logger.addHandler(handler)
    else:
        package_logger.addHandler(logging.NullHandler())

    # Third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("markdown_it").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance for a module."""
    return logging.getLogger(name or "iwsearch")
