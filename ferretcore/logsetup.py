"""Process-wide logging configuration for development use."""

from __future__ import annotations

import logging

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "dpanic": logging.CRITICAL,
    "panic": logging.CRITICAL,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
}

_FORMAT = "%(asctime)s\t%(levelname)s\t%(name)s\t%(message)s"


class _SetupHandler(logging.StreamHandler):
    """Stream handler installed by setup(); replaced on every call."""


def _parse_level(level: int | str) -> int:
    if isinstance(level, bool):
        raise ValueError(f"invalid log level: {level!r}")
    if isinstance(level, int):
        if level < 0:
            raise ValueError(f"invalid log level: {level}")
        return level
    if isinstance(level, str):
        try:
            return _LEVELS[level.strip().lower()]
        except KeyError:
            raise ValueError(f"invalid log level: {level!r}") from None
    raise ValueError(f"invalid log level: {level!r}")


def setup(level: int | str) -> logging.Logger:
    """Configure the root logger to write to stderr at the given level and return it.

    Warnings issued through the warnings module are routed to logging as well.
    """
    numeric = _parse_level(level)
    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h, _SetupHandler)]:
        root.removeHandler(handler)
        handler.close()

    handler = _SetupHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    root.setLevel(numeric)
    logging.captureWarnings(True)
    return root