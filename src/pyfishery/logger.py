"""Centralized logging configuration for pyfishery.

Every module logs through a child of the ``pyfishery`` logger. Output goes
to stdout at INFO; the CLI lowers or raises that with :func:`set_log_level`.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("pyfishery")
logger.setLevel(logging.DEBUG)

# Engines log clamping at DEBUG; only the console threshold changes at run time
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.INFO)
console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
logger.addHandler(console_handler)


def get_logger(name: str = None):
    """Get a logger instance.

    Parameters
    ----------
    name : str, optional
        Logger name (typically __name__). If None, returns the package logger.

    Returns
    -------
    logging.Logger
        Configured logger instance
    """
    if name:
        if name.startswith('pyfishery.'):
            return logging.getLogger(name)
        return logging.getLogger(f'pyfishery.{name}')
    return logger


def set_log_level(level) -> None:
    """Set the console verbosity of the package logger.

    Parameters
    ----------
    level : int or str
        A ``logging`` level, e.g. ``logging.DEBUG`` or ``"WARNING"``.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    console_handler.setLevel(level)
