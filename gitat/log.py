"""Logging setup for gitat.

Log records go to stderr so stdout only ever carries the commit id.
"""

import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "gitat"

_handler: Optional[logging.Handler] = None


def setup_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """Configure the gitat logger.

    Each call replaces the handler installed by the previous one, so the
    logger always writes to the sys.stderr current at the time of the call.

    Args:
        level: Log level as a number or a name like "DEBUG".

    Returns:
        The package logger.
    """
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(_handler)
    logger.propagate = False
    logger.setLevel(level)
    return logger
