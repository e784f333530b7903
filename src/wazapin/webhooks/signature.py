"""Validação de assinatura HMAC-SHA256 para webhooks."""

from __future__ import annotations

import hashlib
import hmac

SIGNATURE_HEADER = "x-hub-signature-256"
SIGNATURE_PREFIX = "sha256="


def compute_signature(raw_body: bytes | bytearray | str, app_secret: str) -> str:
    """Retorna o HMAC-SHA256 em hex de ``raw_body`` com ``app_secret``."""
    body = raw_body.encode("utf-8") if isinstance(raw_body, str) else raw_body
    return hmac.new(app_secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_webhook_signature(
    raw_body: bytes | bytearray | str,
    signature_header: str | None,
    app_secret: str | None,
) -> bool:
    """Valida assinatura HMAC-SHA256 do Meta.

    Header ausente/malformado ou secret vazio retornam False; nunca lança.

    Args:
        raw_body: Corpo bruto da requisição (bytes ou str UTF-8)
        signature_header: Header X-Hub-Signature-256 (prefixo sha256= opcional)
        app_secret: App secret do Meta

    Returns:
        True se assinatura válida
    """
    if not app_secret or not isinstance(app_secret, str):
        return False
    if not signature_header or not isinstance(signature_header, str):
        return False
    if not isinstance(raw_body, (bytes, bytearray, str)):
        return False

    received = signature_header.strip()
    if received.startswith(SIGNATURE_PREFIX):
        received = received[len(SIGNATURE_PREFIX):]
    if not received:
        return False

    try:
        expected = compute_signature(raw_body, app_secret)
        # compare_digest exige ASCII em str; hex inválido cai no except
        return hmac.compare_digest(expected, received.lower())
    except (TypeError, ValueError, UnicodeError):
        return False
