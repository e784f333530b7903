"""Parsing estrutural do payload de webhook em evento tipado.

Passo único e puro: rejeita entradas malformadas cedo, aplica o validator
opcional e retipa o payload como MessageEvent, StatusEvent ou AccountEvent.
Não verifica assinatura (ver ``wazapin.webhooks.signature``).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from wazapin.errors import ValidationError
from wazapin.validation.schemas import WebhookPayloadSchema
from wazapin.webhooks.models import (
    WHATSAPP_BUSINESS_ACCOUNT,
    AccountEvent,
    MessageEvent,
    StatusEvent,
)

if TYPE_CHECKING:
    from wazapin.validation import Validator
    from wazapin.webhooks.models import WebhookEvent

logger = logging.getLogger(__name__)


def _iter_change_values(payload: dict[str, Any]) -> list[dict[str, Any]]:
    values: list[dict[str, Any]] = []
    for entry in payload["entry"]:
        if not isinstance(entry, dict):
            continue
        changes = entry.get("changes")
        if not isinstance(changes, list):
            continue
        for change in changes:
            if isinstance(change, dict) and isinstance(change.get("value"), dict):
                values.append(change["value"])
    return values


def classify_event(payload: dict[str, Any]) -> type[MessageEvent | StatusEvent | AccountEvent]:
    """Escolhe a variante do evento a partir do conteúdo das changes."""
    values = _iter_change_values(payload)
    if any("messages" in value or "contacts" in value for value in values):
        return MessageEvent
    if any("statuses" in value for value in values):
        return StatusEvent
    return AccountEvent


def parse_webhook(payload: Any, validator: Validator | None = None) -> WebhookEvent:
    """Valida estrutura mínima e retorna o evento tipado.

    Args:
        payload: JSON já decodificado do webhook
        validator: Estratégia de validação profunda (opcional)

    Returns:
        MessageEvent, StatusEvent ou AccountEvent

    Raises:
        ValidationError: Com ``field`` apontando o campo inválido
    """
    if not isinstance(payload, dict):
        raise ValidationError("Webhook payload must be an object", field="payload")

    if payload.get("object") != WHATSAPP_BUSINESS_ACCOUNT:
        raise ValidationError(
            f'Invalid webhook object type. Expected "{WHATSAPP_BUSINESS_ACCOUNT}"',
            field="object",
        )

    if not isinstance(payload.get("entry"), list):
        raise ValidationError('Webhook payload must have an "entry" array', field="entry")

    if validator is not None:
        validator.validate(WebhookPayloadSchema, payload)

    event_cls = classify_event(payload)
    try:
        event = event_cls.model_validate(payload)
    except PydanticValidationError as exc:
        errors = exc.errors(include_url=False)
        field = ".".join(str(part) for part in errors[0]["loc"]) if errors else None
        raise ValidationError(
            errors[0]["msg"] if errors else "Invalid webhook payload",
            field=field or "payload",
            details=errors,
        ) from exc

    logger.debug(
        "webhook_parsed",
        extra={"event_kind": event.kind, "entry_count": len(event.entry)},
    )
    return event
