"""Logging utilities for concourse_resource.

Concourse parses stdout as the step response, so diagnostics must only ever
reach stderr, which the host shows verbatim in the build log.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from concourse_resource.config import resolve_log_level

LOGGER_NAME = "concourse_resource"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_HANDLER_MARKER = "_concourse_resource_stderr"


def configure_logging(
    level: Optional[int] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling it again updates the level and stream of the existing handler
    instead of adding another one.

    Args:
        level: Log level; defaults to ``CONCOURSE_RESOURCE_LOG_LEVEL``.
        stream: Output stream; defaults to ``sys.stderr``.

    Returns:
        The configured ``concourse_resource`` logger.
    """
    if level is None:
        level = resolve_log_level()
    if stream is None:
        stream = sys.stderr

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    # stdout belongs to the host protocol
    logger.propagate = False

    for handler in logger.handlers:
        if getattr(handler, _HANDLER_MARKER, False):
            handler.setLevel(level)
            handler.setStream(stream)
            return logger

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _HANDLER_MARKER, True)
    logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "LOGGER_NAME", "LOG_FORMAT"]
