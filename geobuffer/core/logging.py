"""
Logging for the geobuffer package.

Library modules log through `logging.getLogger(__name__)`, all below the
`geobuffer` logger. `setup_default_logging` gives that logger its own stderr
handler; the root logger of the host application is left alone.
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "geobuffer"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _level(level: int | str) -> int:
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        return value if isinstance(value, int) else logging.WARNING
    return int(level)


def setup_default_logging(level: int | str = "WARNING") -> logging.Logger:
    """Attach a stderr handler to the `geobuffer` logger once and set its level.

    Records stop at the package logger so a host's root handlers do not print
    them twice. Unknown level names fall back to WARNING.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_level(level))
    if not any(getattr(h, "_geobuffer_default", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._geobuffer_default = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
        logger.propagate = False
    return logger


__all__ = ["LOG_FORMAT", "PACKAGE_LOGGER", "setup_default_logging"]
