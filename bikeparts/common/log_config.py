"""
Logging Configuration

Configures logging for the resolver.
Output goes to stderr to keep stdout clean for the bill-of-materials report.
Verbose mode adds the thread name so interleaved fetch tasks can be told apart.
"""

import logging
import sys

DEFAULT_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
VERBOSE_FORMAT = "%(levelname)-8s [%(threadName)s] %(name)s: %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure the "bikeparts" logger.

    Args:
        verbose: If True, set level to DEBUG and include thread names
        quiet: If True, set level to WARNING
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(VERBOSE_FORMAT if verbose else DEFAULT_FORMAT))

    logger = logging.getLogger("bikeparts")
    logger.setLevel(level)

    # Avoid duplicate handlers if called multiple times
    logger.handlers.clear()
    logger.addHandler(handler)
