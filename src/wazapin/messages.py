"""Builders mínimos de mensagens (texto e confirmação de leitura)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from wazapin.errors import ValidationError
from wazapin.validation.schemas import SendTextParams

if TYPE_CHECKING:
    from wazapin.http import GraphTransport
    from wazapin.validation import Validator


def build_text_payload(
    to: str,
    text: str,
    preview_url: bool = False,
    reply_to: str | None = None,
) -> dict[str, Any]:
    """Monta o corpo de ``POST /{phone_number_id}/messages`` para texto."""
    payload: dict[str, Any] = {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": to,
        "type": "text",
        "text": {"preview_url": preview_url, "body": text},
    }
    if reply_to:
        payload["context"] = {"message_id": reply_to}
    return payload


async def send_text(
    transport: GraphTransport,
    phone_number_id: str,
    params: dict[str, Any],
    validator: Validator | None = None,
) -> dict[str, Any]:
    """Envia mensagem de texto.

    Sem validator (ou em modo off) só a presença de ``to`` e ``text`` é
    checada; formato e limites ficam para ``SendTextParams``.
    """
    if validator is not None:
        validator.validate(SendTextParams, params)
    for required in ("to", "text"):
        if not params.get(required):
            raise ValidationError(f"{required} é obrigatório", field=required)

    payload = build_text_payload(
        to=params["to"],
        text=params["text"],
        preview_url=bool(params.get("preview_url", False)),
        reply_to=params.get("reply_to"),
    )
    return await transport.post(f"{phone_number_id}/messages", payload)


async def mark_as_read(
    transport: GraphTransport,
    phone_number_id: str,
    message_id: str,
) -> dict[str, Any]:
    if not message_id:
        raise ValidationError("message_id é obrigatório", field="message_id")
    payload = {
        "messaging_product": "whatsapp",
        "status": "read",
        "message_id": message_id,
    }
    await transport.post(f"{phone_number_id}/messages", payload)
    return {"success": True}
