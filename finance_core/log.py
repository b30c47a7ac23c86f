import logging
import sys

from finance_core import config

LOG_FORMAT = '[%(asctime)s] <%(module)s> %(levelname)s:  %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'

_LEVELS = (
    logging.DEBUG,
    logging.INFO,
    logging.WARNING,
    logging.ERROR,
    logging.CRITICAL,
)


def set_logging_level(level):
    """
    Sets the logging level for the root logger.

    Args:
        level (int): One of the standard logging levels.
    """
    if not isinstance(level, int) or isinstance(level, bool):
        raise ValueError("Logging level must be an integer.")
    if level not in _LEVELS:
        raise ValueError('Invalid logging level. Use one of the standard logging levels, e.g., logging.DEBUG.')

    logging.getLogger().setLevel(level)


def setup_logging(level=None):
    """
    Configures the root logger with a single stdout handler, replacing any
    handlers already attached.
    """
    if level is None:
        level = config.log_level()

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    set_logging_level(level)
