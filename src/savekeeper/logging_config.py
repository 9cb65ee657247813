"""Opt-in log output for the ``savekeeper`` logger.

Every module logs through ``logging.getLogger(__name__)``, so all records
land under the ``savekeeper`` logger. Importing the package only attaches a
NullHandler there; applications that want to see saves and evictions call
configure_logging(), which leaves the root logger alone.
"""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "savekeeper"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_HANDLER_MARK = "_savekeeper_handler"


def package_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def install_null_handler() -> None:
    """Keep "No handlers could be found" noise away when the app configures nothing."""
    logger = package_logger()
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())


def configure_logging(
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
    propagate: bool = True,
) -> logging.Handler:
    """Write savekeeper records to stream (stderr by default).

    Calling it again swaps the handler it installed earlier rather than
    adding a second one. Set propagate=False when the root logger already
    prints, to avoid each line appearing twice.
    """
    logger = package_logger()
    for h in list(logger.handlers):
        if getattr(h, _HANDLER_MARK, False):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _HANDLER_MARK, True)

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
    return handler
