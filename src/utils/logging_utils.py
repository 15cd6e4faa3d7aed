import logging
import os

from src.exceptions import ConfigurationError

LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL: str = "WARNING"

_configured_loggers: list[logging.Logger] = []


def resolve_log_level(level: str | None = None) -> int:
    """
    Turns a level name such as "debug" into its logging constant, reading LOG_LEVEL when none is passed in
    """
    name: str = (level or os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    resolved: int | str = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ConfigurationError(f"LOG_LEVEL must be a logging level name, got {name!r}")
    return resolved


def setup_logging(logger: logging.Logger, level: str | None = None) -> logging.Logger:
    """
    Attaches a single stderr handler to the logger, so stdout only carries the report
    Runs at import time, so an unknown LOG_LEVEL leaves the logger at WARNING until apply_log_level validates it
    """
    if not logger.handlers:
        handler: logging.StreamHandler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    if logger not in _configured_loggers:
        _configured_loggers.append(logger)

    try:
        logger.setLevel(resolve_log_level(level))
    except ConfigurationError:
        logger.setLevel(DEFAULT_LOG_LEVEL)
    return logger


def apply_log_level(level: str | None = None) -> int:
    """
    Re-applies the level to every logger set up so far, for settings loaded after import (e.g. from .env)
    """
    resolved: int = resolve_log_level(level)
    for logger in _configured_loggers:
        logger.setLevel(resolved)
    return resolved
