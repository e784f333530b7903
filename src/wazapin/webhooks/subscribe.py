"""Assinatura do app nos webhooks de uma WABA."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from wazapin.errors import ValidationError

if TYPE_CHECKING:
    from wazapin.http import GraphTransport


def _subscribed_apps_path(waba_id: str) -> str:
    if not waba_id or not waba_id.strip():
        raise ValidationError("waba_id é obrigatório", field="waba_id")
    return f"{waba_id.strip()}/subscribed_apps"


async def subscribe_to_waba(transport: GraphTransport, waba_id: str) -> dict[str, Any]:
    """Inscreve o app para receber webhooks de todos os números da WABA."""
    return await transport.post(_subscribed_apps_path(waba_id))


async def list_subscribed_apps(transport: GraphTransport, waba_id: str) -> dict[str, Any]:
    return await transport.get(_subscribed_apps_path(waba_id))


async def unsubscribe_from_waba(transport: GraphTransport, waba_id: str) -> dict[str, Any]:
    return await transport.delete(_subscribed_apps_path(waba_id))
