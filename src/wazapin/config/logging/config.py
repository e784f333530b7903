"""Instalação opcional de um handler JSON.

O SDK só emite via ``logging.getLogger(__name__)`` e não instala handlers
sozinho. Aplicações que não têm configuração própria chamam:

    from wazapin.config.logging import configure_logging

    configure_logging(level="INFO", service_name="minha_app")

Por padrão o handler vai para o root logger; ``logger_name="wazapin"``
restringe a saída JSON aos logs do SDK.
"""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING

from wazapin.config.logging.filters import CorrelationIdFilter, SensitiveDataFilter
from wazapin.config.logging.formatters import create_json_formatter
from wazapin.observability import get_correlation_id

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "wazapin"


def _normalize_level(level: str) -> str:
    normalized = level.strip().upper()
    if normalized not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )
    return normalized


def build_json_handler(
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    stream: IO[str] | None = None,
    static_fields: Mapping[str, str] | None = None,
) -> logging.Handler:
    """StreamHandler com formatter JSON, correlation_id e redação de segredos."""
    handler = logging.StreamHandler(stream)
    handler.setFormatter(create_json_formatter(static_fields))
    handler.addFilter(
        CorrelationIdFilter(service_name, correlation_id_getter or get_correlation_id)
    )
    handler.addFilter(SensitiveDataFilter())
    return handler


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    *,
    logger_name: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Substitui os handlers de ``logger_name`` (root se None) por um handler JSON.

    Args:
        level: DEBUG, INFO, WARNING, ERROR ou CRITICAL (case-insensitive).
        service_name: Valor do campo ``service``.
        correlation_id_getter: Fonte do ``correlation_id``; padrão é a
            ContextVar de ``wazapin.observability``.
        logger_name: Logger alvo.
        stream: Destino (padrão: stderr).

    Returns:
        O handler instalado.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    normalized = _normalize_level(level)
    handler = build_json_handler(service_name, correlation_id_getter, stream)
    handler.setLevel(normalized)

    target = logging.getLogger(logger_name)
    target.setLevel(normalized)
    target.handlers = [handler]
    if logger_name is not None:
        # evita saída duplicada quando o root também tem handler
        target.propagate = False
    return handler
