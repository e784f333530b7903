"""Pontos de extensão do transporte (pré-request, pós-response, erro).

O transporte não loga diretamente: chama um objeto que implementa
``TransportHooks``. O padrão ``LoggingHooks`` registra logs estruturados
sem tokens nem corpo das mensagens.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from wazapin.errors import WhatsAppError

logger = logging.getLogger(__name__)


class TransportHooks(Protocol):
    """Contrato mínimo dos hooks chamados pelo transporte."""

    def on_request(self, method: str, url: str) -> None: ...

    def on_response(
        self,
        method: str,
        url: str,
        status_code: int,
        elapsed_ms: float,
    ) -> None: ...

    def on_error(self, method: str, url: str, error: WhatsAppError) -> None: ...


class LoggingHooks:
    """Hooks padrão: logs sem PII via ``logging``."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def on_request(self, method: str, url: str) -> None:
        self._logger.debug(
            "graph_request_started",
            extra={"method": method, "endpoint": url},
        )

    def on_response(
        self,
        method: str,
        url: str,
        status_code: int,
        elapsed_ms: float,
    ) -> None:
        self._logger.debug(
            "graph_request_succeeded",
            extra={
                "method": method,
                "endpoint": url,
                "status_code": status_code,
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )

    def on_error(self, method: str, url: str, error: WhatsAppError) -> None:
        extra: dict[str, object] = {
            "method": method,
            "endpoint": url,
            "error_kind": error.kind.value,
            "error_code": error.code,
        }
        status_code = getattr(error, "status_code", None)
        if status_code is not None:
            extra["status_code"] = status_code
        fbtrace_id = getattr(error, "fbtrace_id", None)
        if fbtrace_id:
            extra["fbtrace_id"] = fbtrace_id
        self._logger.warning("graph_request_failed", extra=extra)


class NullHooks:
    """Hooks que não fazem nada."""

    def on_request(self, method: str, url: str) -> None:
        return None

    def on_response(
        self,
        method: str,
        url: str,
        status_code: int,
        elapsed_ms: float,
    ) -> None:
        return None

    def on_error(self, method: str, url: str, error: WhatsAppError) -> None:
        return None
