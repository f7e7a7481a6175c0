""" jvmcode.logger

This module contains the setup of the logging of the command line tool.
The library itself only logs through loguru, and leaves the sinks to the
application.
"""

import sys
from loguru import logger


log = logger

LEVELS = ["SUCCESS", "INFO", "DEBUG", "TRACE"]

COMPACT = "<red>{extra[process]:<8}</red>: <level>{message}</level>"
DETAILED = (
    "<green>{elapsed}</green> | <level>{level: <8}</level> | "
    "<red>{extra[process]:<8}</red> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def initialize(verbose: int, sink=None):
    """Replace the sinks with one writing to `sink` (stderr by default),
    showing more with every `-v`."""
    level = LEVELS[min(verbose, len(LEVELS) - 1)]

    log.remove()
    log.add(
        sink or sys.stderr,
        format=DETAILED if verbose >= 2 else COMPACT,
        level=level,
    )
    log.configure(extra={"process": "main"})
