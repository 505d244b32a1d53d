"""
Logger configuration for couchrepo.

Installs the stdout handler repository and store client logs go to, at the
level configured by LOG_LEVEL, and quiets the httpx transport loggers.

Dependencies: logging (stdlib), couchrepo.configs
System role: Centralized logging configuration
"""

import logging
import sys

from couchrepo.configs import get_settings


def configure_logging(level: str | int | None = None) -> None:
    """
    Configure root logging with ISO timestamps on stdout.

    Args:
        level: Root log level, name or numeric value; defaults to the
            log_level setting
    """
    if level is None:
        level = get_settings().log_level

    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # Keep per-request transport lines out of the store logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the named logger, usually for a couchrepo module's __name__."""
    return logging.getLogger(name)
