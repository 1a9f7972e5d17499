"""Diagnostic sinks threaded through decoding and transport calls."""

from __future__ import annotations

import logging
from typing import Callable

DiagnosticSink = Callable[[str, str], None]
"""Callable receiving ``(level, message)``; level is a logging level name."""

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def logger_sink(logger: logging.Logger) -> DiagnosticSink:
    """Build a sink that forwards diagnostics to ``logger``."""

    def _emit(level: str, message: str) -> None:
        logger.log(_LEVELS.get(level, logging.DEBUG), "%s", message)

    return _emit
