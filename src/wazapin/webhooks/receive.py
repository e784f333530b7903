"""Entrada do webhook: assinatura, JSON e parsing (sem PII)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from wazapin.webhooks.parser import parse_webhook
from wazapin.webhooks.signature import SIGNATURE_HEADER, verify_webhook_signature

if TYPE_CHECKING:
    from collections.abc import Mapping

    from wazapin.validation import Validator
    from wazapin.webhooks.models import WebhookEvent


@dataclass(frozen=True)
class SignatureResult:
    """Resultado da checagem de assinatura para logging."""

    valid: bool
    skipped: bool = False
    error: str | None = None


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def check_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Verifica ``X-Hub-Signature-256``; sem secret configurado a checagem é pulada."""
    if not secret:
        return SignatureResult(valid=True, skipped=True)

    signature = _get_header(headers, SIGNATURE_HEADER)
    if not signature:
        return SignatureResult(valid=False, error="missing_signature")

    if not verify_webhook_signature(raw_body, signature, secret):
        return SignatureResult(valid=False, error="invalid_signature")

    return SignatureResult(valid=True)


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
    validator: Validator | None = None,
) -> tuple[WebhookEvent, SignatureResult]:
    """Valida assinatura, decodifica JSON e retorna o evento tipado.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        secret: App secret (None/vazio pula a assinatura, uso local)
        validator: Estratégia de validação profunda (opcional)

    Raises:
        InvalidSignatureError: Se assinatura for inválida
        InvalidJsonError: Se o JSON estiver inválido
        ValidationError: Se a estrutura do payload for inválida

    Returns:
        (evento, SignatureResult)
    """
    signature_result = check_signature(raw_body, headers, secret)
    if not signature_result.valid:
        raise InvalidSignatureError(signature_result.error or "invalid_signature")

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    return parse_webhook(payload, validator), signature_result
