"""Filters de logging para injeção de contexto e redação de segredos.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço

Campos redigidos: qualquer atributo do record cujo nome termine com um dos
nomes sensíveis (token, secret, authorization...).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

REDACTED = "[REDACTED]"

SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "accesstoken",
        "access_token",
        "password",
        "secret",
        "app_secret",
        "token",
        "apikey",
        "api_key",
        "authorization",
        "auth",
    }
)

# Atributos padrão do LogRecord nunca são redigidos
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


def is_sensitive_key(key: str, sensitive: Iterable[str] = SENSITIVE_FIELDS) -> bool:
    """True se ``key`` for sensível (igual ou terminando com nome sensível)."""
    lowered = key.lower()
    return any(lowered == name or lowered.endswith(name) for name in sensitive)


def redact(value: Any, sensitive: Iterable[str] = SENSITIVE_FIELDS) -> Any:
    """Redige recursivamente chaves sensíveis em dicts/listas."""
    if isinstance(value, dict):
        return {
            key: REDACTED if is_sensitive_key(str(key), sensitive) else redact(item, sensitive)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(redact(item, sensitive) for item in value)
    return value


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveDataFilter(logging.Filter):
    """Redige campos sensíveis passados via ``extra``.

    Nunca descarta records; apenas substitui valores por ``[REDACTED]``.
    """

    def __init__(self, sensitive_fields: Iterable[str] = SENSITIVE_FIELDS) -> None:
        super().__init__()
        self._sensitive = frozenset(name.lower() for name in sensitive_fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in list(vars(record).items()):
            if key in _RESERVED_ATTRS:
                continue
            if is_sensitive_key(key, self._sensitive):
                setattr(record, key, REDACTED)
            elif isinstance(value, (dict, list, tuple)):
                setattr(record, key, redact(value, self._sensitive))
        return True
