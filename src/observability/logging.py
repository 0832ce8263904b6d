"""
Structured logging для quote graph.

Структура записи:
    {
        "app": "xrate-graph",        # Идентификатор приложения
        "layer": "graph",            # Архитектурный слой
        "component": "quote-graph",  # Компонент
        "module": "...",             # Python module (optional)
        "event": "price_update_applied",
        ...
    }

Архитектурные слои:
    - domain: модели и контракты
    - graph: Graph Engine (update / best-rate)
    - validation: Validation Layer
    - cli: command loop и display
"""

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict

Layer = Literal["domain", "graph", "validation", "cli"]

APP_NAME = "xrate-graph"


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Добавляет идентификатор приложения в каждую запись."""
    event_dict["app"] = APP_NAME
    return event_dict


def setup_logging(
    level: str = "WARNING",
    json_logs: bool = False,
    include_timestamp: bool = True,
) -> None:
    """
    Конфигурация structlog поверх stdlib logging.

    Логи пишутся в stderr, чтобы не смешиваться с выводом command loop.

    Args:
        level: Уровень логирования (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: True — JSON, False — человекочитаемый console renderer
        include_timestamp: Добавлять ISO timestamp
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: str | None = None,
    layer: Layer | None = None,
    component: str | None = None,
    **initial_context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Логгер с привязанным архитектурным контекстом.

    Args:
        name: Имя логгера (обычно __name__)
        layer: Архитектурный слой
        component: Компонент внутри слоя
        **initial_context: Дополнительный контекст

    Usage:
        >>> log = get_logger(__name__, layer="graph", component="quote-graph")
        >>> log.debug("price_update_applied", exchange="KRAKEN")
    """
    context: dict[str, Any] = {}
    if layer:
        context["layer"] = layer
    if component:
        context["component"] = component
    if name:
        context["module"] = name
    context.update(initial_context)

    # Контекст передаётся как initial values: bind() на lazy proxy собрал бы
    # логгер из конфигурации structlog по умолчанию до вызова setup_logging
    return structlog.get_logger(name, **context)
