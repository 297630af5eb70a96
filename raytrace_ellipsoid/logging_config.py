"""
logging_config.py - Console/file logging for the raytrace_ellipsoid package

Modules log through `logging.getLogger(__name__)`; setup_logging() attaches
handlers to the package logger so driver scripts see tracing diagnostics.

Project: Ellipsoid Dome Ray Tracer
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = "raytrace_ellipsoid"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach handlers to the package logger.

    Calling it again replaces the handlers from the previous call.

    Parameters
    ----------
    level : int, optional
        Threshold for the logger and its handlers (default: logging.INFO)
    log_file : str, optional
        Also write records to this file, truncating it first

    Returns
    -------
    logging.Logger
        The 'raytrace_ellipsoid' logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %d handler(s) at level %s", len(handlers), logging.getLevelName(level))
    return logger
