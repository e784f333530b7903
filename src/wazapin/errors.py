"""Taxonomia de erros do SDK.

Toda falha da camada de transporte vira exatamente uma das variantes abaixo.
As variantes são irmãs (nenhuma herda da outra) e carregam um discriminante
``kind``, permitindo ``match err.kind`` exaustivo além de ``isinstance``.
Os atributos são definidos na construção e não devem ser alterados depois.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Discriminante das variantes de erro."""

    VALIDATION = "validation"
    NETWORK = "network"
    API = "api"
    RATE_LIMIT = "rate_limit"


class WhatsAppError(Exception):
    """Base de todos os erros do SDK."""

    kind: ErrorKind

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ValidationError(WhatsAppError):
    """Dados fornecidos pelo chamador estão estruturalmente errados.

    Nunca é retentado: sinaliza bug do chamador, não falha transitória.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field
        self.details = details


class NetworkError(WhatsAppError):
    """Falha de transporte: timeout, DNS, conexão recusada, resposta ilegível."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message, "NETWORK_ERROR")
        self.cause = cause


class ApiError(WhatsAppError):
    """Erro estruturado devolvido pela Graph API."""

    kind = ErrorKind.API

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: int,
        error_subcode: int | None = None,
        fbtrace_id: str | None = None,
        error_type: str | None = None,
    ) -> None:
        super().__init__(message, f"API_ERROR_{error_code}")
        self.status_code = status_code
        self.error_code = error_code
        self.error_subcode = error_subcode
        self.fbtrace_id = fbtrace_id
        self.error_type = error_type


class RateLimitError(WhatsAppError):
    """HTTP 429. ``retry_after_seconds`` vem do header ``retry-after``."""

    kind = ErrorKind.RATE_LIMIT

    def __init__(self, message: str, retry_after_seconds: int | None = None) -> None:
        super().__init__(message, "RATE_LIMIT_ERROR")
        self.status_code = 429
        self.retry_after_seconds = retry_after_seconds


__all__ = [
    "ApiError",
    "ErrorKind",
    "NetworkError",
    "RateLimitError",
    "ValidationError",
    "WhatsAppError",
]
