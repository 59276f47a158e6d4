"""Logging setup shared by the CLI and the API server."""

from __future__ import annotations

import logging

from docschema.config import DOCSCHEMA_LOG_LEVEL

_ROOT_LOGGER = "docschema"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name``."""
    return logging.getLogger(name)


def configure_logging(level: str | int | None = None) -> None:
    """Attach a single stream handler to the package loggers.

    Calling this more than once only updates the level.
    """
    resolved = level if level is not None else DOCSCHEMA_LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING

    for name in (_ROOT_LOGGER, "server"):
        logger = logging.getLogger(name)
        logger.setLevel(resolved)
        if not any(getattr(handler, "_docschema", False) for handler in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(_FORMAT))
            handler._docschema = True  # type: ignore[attr-defined]
            logger.addHandler(handler)
