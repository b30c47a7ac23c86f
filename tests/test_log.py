import logging

import pytest

from finance_core import config
from finance_core.log import LOG_FORMAT, set_logging_level, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_single_handler(restore_root_logger):
    setup_logging(logging.WARNING)
    setup_logging(logging.WARNING)

    root = restore_root_logger
    assert len(root.handlers) == 1
    assert root.level == logging.WARNING
    assert root.handlers[0].formatter._fmt == LOG_FORMAT


def test_set_logging_level(restore_root_logger):
    set_logging_level(logging.DEBUG)
    assert restore_root_logger.level == logging.DEBUG


@pytest.mark.parametrize("level", [15, "DEBUG", None, True])
def test_set_logging_level_rejects_invalid(level, restore_root_logger):
    with pytest.raises(ValueError):
        set_logging_level(level)


def test_config_log_level():
    assert config.log_level("debug") == logging.DEBUG
    assert config.log_level("ERROR") == logging.ERROR
    with pytest.raises(ValueError):
        config.log_level("LOUD")


def test_config_defaults():
    assert config.SEED_PATH
    assert config.CURRENCY_SYMBOL
