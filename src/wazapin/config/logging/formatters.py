"""Formatter JSON dos logs do SDK (python-json-logger)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pythonjsonlogger.json import JsonFormatter

if TYPE_CHECKING:
    from collections.abc import Mapping

# Ordem das chaves no JSON emitido
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter(static_fields: Mapping[str, str] | None = None) -> JsonFormatter:
    """Formatter com os campos obrigatórios e ``extra`` achatado no JSON.

    ``static_fields`` entra em todo registro (ex: ``{"env": "prod"}``).

    Exemplo de saída:
        {"asctime": "2026-02-02 10:30:00,123", "level": "WARNING",
         "logger": "wazapin.http.hooks", "message": "graph_request_failed",
         "correlation_id": "abc-123", "service": "wazapin", "error_kind": "api"}
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
        static_fields=dict(static_fields or {}),
    )
