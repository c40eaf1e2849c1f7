"""
Diagnostic logging setup.

The terminal belongs to the UI, so diagnostics go to a file.
"""

import logging

from .config import Config


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(config: Config) -> logging.Logger:
    """
    Configure the ``logpeek`` logger from the configuration.

    Args:
        config: Loaded configuration

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("logpeek")
    logger.setLevel(config.log_level_number)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if config.has_log_file:
        handler: logging.Handler = logging.FileHandler(config.log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()
    logger.addHandler(handler)

    return logger
