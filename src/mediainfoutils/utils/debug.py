"""Logging setup for mediainfoutils.

Configures the ``mediainfoutils`` package logger once, writing to stderr so
that diagnostics never mix with command output on stdout. Debug output is
controlled by the MEDIAINFOUTILS_DEBUG environment variable or the CLI
``--debug`` flag.
"""

import logging
import os
import sys
from typing import Optional

DEBUG_ON = os.getenv("MEDIAINFOUTILS_DEBUG", "0") == "1"

_logger: Optional[logging.Logger] = None
_handler: Optional[logging.StreamHandler] = None


def setup_logger(debug: bool | None = None) -> logging.Logger:
    """Return the package logger, attaching a stderr handler on first use.

    The handler is re-pointed at the current ``sys.stderr`` on every call,
    so a swapped stream (e.g. under ``CliRunner``) receives the output.

    Args:
        debug: Force DEBUG (True) or INFO (False) level. None keeps the level
            chosen from MEDIAINFOUTILS_DEBUG.
    """
    global _logger, _handler
    if _logger is None:
        logger = logging.getLogger("mediainfoutils")
        _handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(message)s")
        _handler.setFormatter(formatter)
        logger.addHandler(_handler)
        logger.setLevel(logging.DEBUG if DEBUG_ON else logging.INFO)
        _logger = logger
    elif _handler is not None:
        _handler.stream = sys.stderr
    if debug is not None:
        _logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return _logger
