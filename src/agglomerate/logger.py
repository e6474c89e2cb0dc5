"""
Logging setup for the package.

Library modules only ask for a logger; the console handler is installed by
whoever runs the clustering (the command line entry point, usually):

    from agglomerate.logger import get_logger, setup_logging

    setup_logging("DEBUG")
    logger = get_logger(__name__)
"""

import logging
import sys
from typing import Union

import colorlog

__all__ = ["PACKAGE_LOGGER", "get_logger", "setup_logging"]

PACKAGE_LOGGER = "agglomerate"

LOG_FORMAT = "%(log_color)s%(asctime)s | %(levelname).3s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def get_logger(name: str) -> logging.Logger:
    """
    Return the logger for a module of this package.

    @param name: module name, usually __name__. Names outside the package are
                 nested under it so one handler covers everything.
    @return: logging.Logger
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Install a colorized stderr handler on the package logger.

    Calling it again only changes the level, handlers are never duplicated.

    @param level: logging level, as int or level name
    @return: the package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.propagate = False

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            colorlog.ColoredFormatter(
                fmt=LOG_FORMAT,
                datefmt=DATE_FORMAT,
                log_colors=LOG_COLORS,
                reset=True,
                style="%",
            )
        )
        package_logger.addHandler(handler)

    for handler in package_logger.handlers:
        handler.setLevel(level)
    return package_logger
