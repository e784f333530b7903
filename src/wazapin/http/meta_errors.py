"""Parsing do corpo de erro da Graph API e classificação na taxonomia."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from wazapin.errors import ApiError, RateLimitError, WhatsAppError

if TYPE_CHECKING:
    import httpx

RATE_LIMIT_STATUS = 429


@dataclass(frozen=True)
class MetaErrorBody:
    """Campos relevantes de ``{"error": {...}}`` da Meta."""

    message: str | None
    code: int
    error_subcode: int | None = None
    fbtrace_id: str | None = None
    error_type: str | None = None


def is_permanent_error(error_code: int, error_type: str | None) -> bool:
    """Classifica erro como permanente ou transitório.

    Erros permanentes: 400, 401, 403, 404, 413
    Erros transitórios: 429 (rate limit), 500+ (server errors)

    A política de retry não consulta esta função; ela existe para chamadores
    que queiram tratar códigos específicos como terminais.
    """
    permanent_codes = {400, 401, 403, 404, 413}
    if error_code in permanent_codes:
        return True

    permanent_types = {"OAuthException", "InvalidRequest"}
    return error_type in permanent_types


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def parse_meta_error(response_data: Any) -> MetaErrorBody | None:
    """Extrai informações de erro do response da Meta.

    Args:
        response_data: JSON já decodificado do response

    Returns:
        MetaErrorBody se houver objeto ``error``, None caso contrário
    """
    if not isinstance(response_data, dict):
        return None
    error_obj = response_data.get("error")
    if not error_obj or not isinstance(error_obj, dict):
        return None

    message = error_obj.get("message")
    error_type = error_obj.get("type")
    fbtrace_id = error_obj.get("fbtrace_id")
    return MetaErrorBody(
        message=message if isinstance(message, str) and message else None,
        code=_as_int(error_obj.get("code")) or 0,
        error_subcode=_as_int(error_obj.get("error_subcode")),
        fbtrace_id=fbtrace_id if isinstance(fbtrace_id, str) else None,
        error_type=error_type if isinstance(error_type, str) else None,
    )


def parse_retry_after(value: str | None) -> int | None:
    """Converte header ``retry-after`` (segundos) em int; ignora datas HTTP."""
    if value is None:
        return None
    return _as_int(value)


def classify_error_response(response: httpx.Response) -> WhatsAppError:
    """Converte um response não-2xx em RateLimitError ou ApiError.

    Corpo não-JSON nunca quebra a classificação: a mensagem é sintetizada a
    partir da status line.
    """
    status_line = f"HTTP {response.status_code}: {response.reason_phrase}"
    try:
        meta_error = parse_meta_error(response.json())
    except ValueError:
        meta_error = None

    message = (meta_error.message if meta_error else None) or status_line

    if response.status_code == RATE_LIMIT_STATUS:
        return RateLimitError(
            message,
            retry_after_seconds=parse_retry_after(response.headers.get("retry-after")),
        )

    return ApiError(
        message,
        status_code=response.status_code,
        error_code=meta_error.code if meta_error else 0,
        error_subcode=meta_error.error_subcode if meta_error else None,
        fbtrace_id=meta_error.fbtrace_id if meta_error else None,
        error_type=meta_error.error_type if meta_error else None,
    )
