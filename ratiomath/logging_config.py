"""
Logging Configuration — structlog

Структурированное логирование для ratiomath.

События пакета выводятся через stdlib-логгеры в пространстве имён
"ratiomath" (JSON-строка в качестве сообщения). Пока приложение не вызвало
configure_logging(), действует стандартная иерархия logging: INFO и DEBUG
подавлены, WARNING и выше уходят в обработчики корневого логгера.

Usage:
    logger = get_logger(__name__)
    logger.info("precision_changed", previous=50, digits=100)
"""

import logging
import sys
from typing import Any, Final, Optional, TextIO

import structlog
from structlog.types import EventDict

from ratiomath.config import get_settings

PACKAGE_LOGGER_NAME: Final[str] = "ratiomath"


def add_log_level(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add log level to the event dict.
    """
    if method_name == "warn":
        method_name = "warning"
    event_dict["level"] = method_name.upper()
    return event_dict


_PROCESSORS: Final[list[Any]] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    structlog.processors.JSONRenderer(),
]


def configure_logging(log_level: Optional[str] = None, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Настроить вывод логов пакета.

    Конфигурируется только логгер "ratiomath": корневой логгер и
    глобальная конфигурация structlog приложения не затрагиваются.

    Args:
        log_level: Уровень (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            None: уровень из настроек (RATIOMATH_LOG_LEVEL)
        stream: Поток вывода (default: sys.stderr)

    Returns:
        Настроенный логгер пакета
    """
    if log_level is None:
        log_level = get_settings().log_level

    numeric_level = getattr(logging, log_level.upper(), logging.WARNING)

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger.addHandler(handler)
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False

    return package_logger


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance (structured logger).

    Args:
        name: Logger name (typically __name__)

    Returns:
        structlog.stdlib.BoundLogger: Logger bound to the stdlib logger `name`
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
