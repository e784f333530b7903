"""Corpo mínimo de webhook (sem metadata nem ids) pelas três portas de entrada."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
from starlette.requests import Request

from wazapin import MessageEvent, WhatsAppClient, WhatsAppSettings
from wazapin.http import NullHooks
from wazapin.routes import create_webhook_router
from wazapin.webhooks import parse_webhook

MINIMAL_BODY = (
    b'{"object":"whatsapp_business_account","entry":[{"changes":[{"field":"messages",'
    b'"value":{"messages":[{"type":"text","text":{"body":"hi"}}]}}]}]}'
)

SETTINGS = WhatsAppSettings(access_token="tok", verify_token="token")


def _request(body: bytes) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "headers": [(b"content-type", b"application/json")],
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


async def _via_parser() -> Any:
    return parse_webhook(json.loads(MINIMAL_BODY))


async def _via_client() -> Any:
    client = WhatsAppClient(
        SETTINGS,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200))),
        hooks=NullHooks(),
    )
    async with client:
        return client.parse_webhook(json.loads(MINIMAL_BODY))


async def _via_route() -> Any:
    handled: list[Any] = []
    router = create_webhook_router(SETTINGS, on_event=handled.append)
    receive = next(route.endpoint for route in router.routes if "POST" in route.methods)

    result = await receive(_request(MINIMAL_BODY))

    assert result["status"] == "received"
    assert len(handled) == 1
    return handled[0]


@pytest.mark.asyncio
@pytest.mark.parametrize("entrypoint", [_via_parser, _via_client, _via_route])
async def test_minimal_text_message_keeps_body(entrypoint) -> None:
    event = await entrypoint()

    assert isinstance(event, MessageEvent)
    [message] = event.iter_messages()
    assert message.type == "text"
    assert message.text.body == "hi"
    assert message.id is None
