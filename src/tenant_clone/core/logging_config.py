"""Logging setup for tenant_clone.

Every module logs under the ``tenant_clone`` namespace, either through
``get_logger("<module>")`` or through ``LoggerMixin`` for classes. The
command-line entry point calls ``configure_logging`` once; library users may
configure the namespace themselves instead.

Example:
    >>> import logging
    >>> from tenant_clone.core.logging_config import configure_logging, get_logger
    >>>
    >>> configure_logging(level=logging.DEBUG)
    >>> get_logger("assets").debug("Skipping sites")
"""

import logging

# The standard logger name used throughout tenant_clone
LOGGER_NAME = "tenant_clone"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# SQLAlchemy loggers that follow sqlalchemy_level
RELATED_LOGGERS = [
    "sqlalchemy.engine",
    "sqlalchemy.pool",
]


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the tenant_clone logger, or the child logger ``tenant_clone.<name>``."""
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(
    level: int = logging.INFO,
    sqlalchemy_level: int | None = None,
    format_string: str = DEFAULT_FORMAT,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """Configure the tenant_clone and SQLAlchemy loggers.

    Args:
        level: Level of the tenant_clone logger. INFO shows the table plan of
            a dry run.
        sqlalchemy_level: Level of the SQLAlchemy engine and pool loggers.
            Defaults to WARNING; INFO echoes every statement.
        format_string: Format of the default stream handler.
        handler: Handler to attach instead of a stderr StreamHandler. Ignored
            if the logger already has handlers.

    Returns:
        The tenant_clone logger.
    """
    if sqlalchemy_level is None:
        sqlalchemy_level = logging.WARNING

    logger = get_logger()
    logger.setLevel(level)

    if not logger.handlers:
        if handler is None:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(handler)

    for logger_name in RELATED_LOGGERS:
        logging.getLogger(logger_name).setLevel(sqlalchemy_level)

    return logger


class LoggerMixin:
    """Gives a class a ``_logger`` named ``tenant_clone.<ClassName>``."""

    @property
    def _logger(self) -> logging.Logger:
        return get_logger(self.__class__.__name__)


__all__ = [
    "LOGGER_NAME",
    "get_logger",
    "configure_logging",
    "LoggerMixin",
]
