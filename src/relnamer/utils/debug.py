"""Logging helpers shared by the relnamer engine and CLI.

Module loggers (``logging.getLogger(__name__)``) live under the ``relnamer``
logger configured here, so they share one handler and one level.
- debug(): inference traces, emitted only when RELNAMER_DEBUG=1.
- warn(): recoverable input problems (ignored reports, skipped fields).
"""

import logging
import os
import sys
from typing import Optional

ENV_DEBUG = "RELNAMER_DEBUG"
LOGGER_NAME = "relnamer"

_logger: Optional[logging.Logger] = None


def debug_enabled() -> bool:
    """Return True when RELNAMER_DEBUG=1 is set in the environment."""
    return os.getenv(ENV_DEBUG, "0") == "1"


def setup_logger() -> logging.Logger:
    """Attach a stderr handler to the ``relnamer`` logger once and return it."""
    global _logger
    if _logger is not None:
        return _logger
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("[%(levelname)s] %(asctime)s %(name)s %(message)s")
        )
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)
    _logger = logger
    return logger


def debug(msg: str, *args: object) -> None:
    """Trace an inference step when debugging is on.

    The line is also echoed to stderr because stdout carries ``--json`` output.
    """
    if not debug_enabled():
        return
    logging.getLogger(LOGGER_NAME).debug(msg, *args)
    print(f"[DEBUG] {msg % args if args else msg}", file=sys.stderr, flush=True)


def warn(msg: str, *args: object, source: Optional[str] = None) -> None:
    """Report a recoverable input problem.

    Args:
        msg: %-style message.
        *args: Message arguments.
        source: Dotted module name to log under; defaults to ``relnamer``.
    """
    name = source if source and source.startswith(LOGGER_NAME) else LOGGER_NAME
    logging.getLogger(name).warning(msg, *args)
