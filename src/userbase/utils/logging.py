"""Logging setup shared by every userbase module."""

import logging
import sys

ROOT_LOGGER_NAME = "userbase"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def _ensure_handler() -> None:
    global _configured
    if _configured:
        return
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.INFO)
    _configured = True


def configure_logging(level: str = "INFO") -> None:
    """Set the level of the userbase logger hierarchy (e.g. DEBUG, INFO)."""
    _ensure_handler()
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(resolved)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger nested under the userbase root logger.

    Module loggers from inside the package (``userbase.*``) are used as-is;
    anything else is prefixed so it shares the same handler.
    """
    _ensure_handler()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
