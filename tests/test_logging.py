import logging
from unittest.mock import patch

import pytest
from txn_studio.core.logging import DEFAULT_LOG_LEVEL, LOG_FORMAT, NOISY_LIBRARIES, setup_logging


# Ensure clean logging state between tests
@pytest.fixture(autouse=True)
def reset_logging():
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    root.handlers.clear()

    yield

    root.handlers.clear()
    root.handlers.extend(original_handlers)
    root.setLevel(original_level)


@patch("txn_studio.core.logging.Settings")
def test_setup_logging_default_level(MockSettings):
    MockSettings.return_value.get_log_level.return_value = DEFAULT_LOG_LEVEL

    setup_logging()

    root_logger = logging.getLogger()
    assert root_logger.level == logging.INFO
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0], logging.StreamHandler)
    assert root_logger.handlers[0].formatter._fmt == LOG_FORMAT
    for lib_name in NOISY_LIBRARIES:
        assert logging.getLogger(lib_name).level == logging.WARNING


@patch("txn_studio.core.logging.Settings")
def test_setup_logging_specific_level(MockSettings):
    MockSettings.return_value.get_log_level.return_value = "DEBUG"

    setup_logging()

    assert logging.getLogger().level == logging.DEBUG


@patch("txn_studio.core.logging.Settings")
def test_setup_logging_invalid_level_falls_back(MockSettings, capsys):
    MockSettings.return_value.get_log_level.return_value = "LOUD"

    setup_logging()

    assert logging.getLogger().level == logging.INFO
    assert "Invalid LOG_LEVEL 'LOUD'" in capsys.readouterr().err


@patch("txn_studio.core.logging.Settings")
def test_setup_logging_replaces_existing_handlers(MockSettings):
    MockSettings.return_value.get_log_level.return_value = "INFO"
    logging.getLogger().addHandler(logging.NullHandler())

    setup_logging()

    assert not any(isinstance(h, logging.NullHandler) for h in logging.getLogger().handlers)
