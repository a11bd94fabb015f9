"""Package loggers for quasifit.

Modules log through ``get_logger(__name__)``. Each logger writes to its own
stream handler and does not propagate, so an application's root logging
setup is left alone; :func:`configure_logging` redirects all of them at once.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_ROOT = "quasifit"
_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

# settings applied to loggers created from now on
_settings: dict = {"level": logging.WARNING, "format": _FORMAT, "stream": None}
_loggers: dict[str, logging.Logger] = {}


def _level_number(level: int | str) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level {level!r}.")
    return number


def _attach_handler(logger: logging.Logger) -> None:
    for old in logger.handlers[:]:
        logger.removeHandler(old)
    handler = logging.StreamHandler(_settings["stream"] or sys.stderr)
    handler.setLevel(_settings["level"])
    handler.setFormatter(logging.Formatter(_settings["format"]))
    logger.addHandler(handler)
    logger.setLevel(_settings["level"])


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached logger for ``name`` under the ``quasifit`` namespace.

    Args:
        name: Usually ``__name__``. Names outside the package are prefixed
            with ``quasifit.``; None gives the package logger.

    Example:
        >>> from quasifit.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Starting BFGS on %d parameters", 3)
    """
    if name is None or name == _ROOT:
        full_name = _ROOT
    elif name.startswith(_ROOT + "."):
        full_name = name
    else:
        full_name = f"{_ROOT}.{name}"

    logger = _loggers.get(full_name)
    if logger is None:
        logger = logging.getLogger(full_name)
        if not logger.handlers:
            _attach_handler(logger)
            logger.propagate = False
        _loggers[full_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of every quasifit logger, keeping their handlers.

    Args:
        level: A ``logging`` constant or its name, e.g. ``"DEBUG"``.

    Raises:
        ValueError: If ``level`` is a name ``logging`` does not know.
    """
    _settings["level"] = _level_number(level)
    for logger in _loggers.values():
        logger.setLevel(_settings["level"])
        for handler in logger.handlers:
            handler.setLevel(_settings["level"])


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Replace the handler of every quasifit logger.

    Loggers created later inherit these settings.

    Args:
        level: Logging level (default: WARNING).
        format_string: Record format; ``[LEVEL] name: message`` when None.
        stream: Output stream; ``sys.stderr`` when None.
    """
    _settings.update(
        level=_level_number(level),
        format=format_string or _FORMAT,
        stream=stream,
    )
    for logger in _loggers.values():
        _attach_handler(logger)


__all__ = ["configure_logging", "get_logger", "set_log_level"]
