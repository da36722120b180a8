"""Tests for the tenant_clone logging setup."""

import logging

import pytest

from tenant_clone.core.logging_config import LOGGER_NAME, LoggerMixin, configure_logging, get_logger


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    related = {name: logging.getLogger(name).level for name in ("sqlalchemy.engine", "sqlalchemy.pool")}
    saved = (logger.level, list(logger.handlers))
    logger.handlers.clear()
    yield logger
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]
    for name, level in related.items():
        logging.getLogger(name).setLevel(level)


def test_get_logger_names():
    assert get_logger().name == "tenant_clone"
    assert get_logger("assets").name == "tenant_clone.assets"


def test_configure_logging_sets_levels(clean_logger):
    handler = logging.NullHandler()
    logger = configure_logging(level=logging.DEBUG, sqlalchemy_level=logging.INFO, handler=handler)

    assert logger is clean_logger
    assert logger.level == logging.DEBUG
    assert logger.handlers == [handler]
    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO


def test_configure_logging_does_not_stack_handlers(clean_logger):
    configure_logging()
    configure_logging()

    assert len(clean_logger.handlers) == 1
    assert logging.getLogger("sqlalchemy.pool").level == logging.WARNING


def test_logger_mixin_uses_class_name():
    class CopyStep(LoggerMixin):
        pass

    assert CopyStep()._logger.name == "tenant_clone.CopyStep"
