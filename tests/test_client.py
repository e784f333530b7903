"""Testes ponta a ponta do WhatsAppClient com transporte simulado."""

from __future__ import annotations

import hashlib
import hmac
import json
from typing import Any

import httpx
import pytest

from wazapin import (
    ApiError,
    MessageEvent,
    NetworkError,
    RateLimitError,
    RetryConfig,
    RetryPolicy,
    ValidationError,
    WhatsAppClient,
    WhatsAppSettings,
)
from wazapin.http import NullHooks

SETTINGS = WhatsAppSettings(
    access_token="token-abc",
    phone_number_id="106540352242922",
    business_account_id="waba-77",
    app_secret="segredo",
)


class ScriptedHandler:
    """Responde com a sequência dada; exceções são levantadas."""

    def __init__(self, *outcomes: Any) -> None:
        self._outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _client(handler: Any, recording_sleep: Any, **kwargs: Any) -> WhatsAppClient:
    config = kwargs.pop("retry_config", RetryConfig(initial_delay_seconds=0.1))
    return WhatsAppClient(
        kwargs.pop("settings", SETTINGS),
        retry_policy=RetryPolicy(config, sleep=recording_sleep),
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        hooks=NullHooks(),
        **kwargs,
    )


def _sent(ok_id: str = "wamid.ok") -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "messaging_product": "whatsapp",
            "contacts": [{"input": "5511999998888", "wa_id": "5511999998888"}],
            "messages": [{"id": ok_id}],
        },
    )


class TestConstruction:
    """Criação do cliente."""

    def test_requires_access_token(self) -> None:
        with pytest.raises(ValueError, match="access_token"):
            WhatsAppClient(WhatsAppSettings(access_token="  "))

    def test_invalid_validation_mode(self) -> None:
        with pytest.raises(ValueError):
            WhatsAppClient(SETTINGS, validation="paranoid")

    @pytest.mark.asyncio
    async def test_owned_http_client_closed(self) -> None:
        async with WhatsAppClient(SETTINGS) as client:
            http_client = client._http_client
        assert http_client.is_closed

    @pytest.mark.asyncio
    async def test_external_http_client_left_open(self) -> None:
        http_client = httpx.AsyncClient()
        async with WhatsAppClient(SETTINGS, http_client=http_client):
            pass
        assert not http_client.is_closed
        await http_client.aclose()


class TestSendText:
    """Envio de texto com retry."""

    @pytest.mark.asyncio
    async def test_success_payload(self, recording_sleep) -> None:
        handler = ScriptedHandler(_sent())
        client = _client(handler, recording_sleep)

        result = await client.send_text("5511999998888", "Olá!", reply_to="wamid.prev")

        assert result["messages"][0]["id"] == "wamid.ok"
        request = handler.requests[0]
        assert str(request.url) == "https://graph.facebook.com/v18.0/106540352242922/messages"
        assert json.loads(request.content) == {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": "5511999998888",
            "type": "text",
            "text": {"preview_url": False, "body": "Olá!"},
            "context": {"message_id": "wamid.prev"},
        }

    @pytest.mark.asyncio
    async def test_recovers_after_two_network_failures(self, recording_sleep) -> None:
        request = httpx.Request("POST", "https://graph.facebook.com")
        handler = ScriptedHandler(
            httpx.ConnectError("refused", request=request),
            httpx.ConnectError("refused", request=request),
            _sent(),
        )
        client = _client(handler, recording_sleep)

        result = await client.send_text("5511999998888", "Olá!")

        assert result["messages"][0]["id"] == "wamid.ok"
        assert len(handler.requests) == 3
        assert recording_sleep.delays == pytest.approx([0.1, 0.2])

    @pytest.mark.asyncio
    async def test_rate_limit_honours_retry_after(self, recording_sleep) -> None:
        handler = ScriptedHandler(
            httpx.Response(429, headers={"retry-after": "5"}, json={"error": {"code": 4}}),
            _sent(),
        )
        client = _client(handler, recording_sleep)

        await client.send_text("5511999998888", "Olá!")

        assert recording_sleep.delays == [5.0]

    @pytest.mark.asyncio
    async def test_persistent_api_error_exhausts_attempts(self, recording_sleep) -> None:
        handler = ScriptedHandler(
            httpx.Response(500, json={"error": {"message": "Unknown", "code": 1}})
        )
        client = _client(handler, recording_sleep, retry_config=RetryConfig(max_retries=2))

        with pytest.raises(ApiError) as exc_info:
            await client.send_text("5511999998888", "Olá!")

        assert exc_info.value.status_code == 500
        assert len(handler.requests) == 3

    @pytest.mark.asyncio
    async def test_rate_limit_not_retried_when_disabled(self, recording_sleep) -> None:
        handler = ScriptedHandler(httpx.Response(429))
        client = _client(
            handler,
            recording_sleep,
            retry_config=RetryConfig(retry_on_rate_limit=False),
        )

        with pytest.raises(RateLimitError):
            await client.send_text("5511999998888", "Olá!")

        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("to", "text", "field"),
        [("abc", "Olá", "to"), ("5511999998888", "", "text"), ("5511999998888", "x" * 5000, "text")],
    )
    async def test_validation_error_never_hits_network(
        self, recording_sleep, to: str, text: str, field: str
    ) -> None:
        handler = ScriptedHandler(_sent())
        client = _client(handler, recording_sleep, validation="strict")

        with pytest.raises(ValidationError) as exc_info:
            await client.send_text(to, text)

        assert exc_info.value.field == field
        assert handler.requests == []
        assert recording_sleep.delays == []

    @pytest.mark.asyncio
    async def test_off_mode_still_requires_fields(self, recording_sleep) -> None:
        client = _client(ScriptedHandler(_sent()), recording_sleep, validation="off")

        with pytest.raises(ValidationError) as exc_info:
            await client.send_text("", "Olá")

        assert exc_info.value.field == "to"

    @pytest.mark.asyncio
    async def test_missing_phone_number_id(self, recording_sleep) -> None:
        settings = WhatsAppSettings(access_token="tok")
        client = _client(ScriptedHandler(_sent()), recording_sleep, settings=settings)

        with pytest.raises(ValueError, match="phone_number_id"):
            await client.send_text("5511999998888", "Olá")


class TestOtherOperations:
    """Leitura, mídia e assinatura de WABA."""

    @pytest.mark.asyncio
    async def test_mark_as_read(self, recording_sleep) -> None:
        handler = ScriptedHandler(httpx.Response(200, json={"success": True}))
        client = _client(handler, recording_sleep)

        assert await client.mark_as_read("wamid.1") == {"success": True}
        assert json.loads(handler.requests[0].content) == {
            "messaging_product": "whatsapp",
            "status": "read",
            "message_id": "wamid.1",
        }

    @pytest.mark.asyncio
    async def test_upload_media_multipart(self, recording_sleep) -> None:
        handler = ScriptedHandler(httpx.Response(200, json={"id": "media-1"}))
        client = _client(handler, recording_sleep)

        result = await client.upload_media(b"\x89PNG...", "image/png", filename="foto.png")

        assert result == {"id": "media-1"}
        request = handler.requests[0]
        assert request.url.path == "/v18.0/106540352242922/media"
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b'filename="foto.png"' in request.content

    @pytest.mark.asyncio
    async def test_upload_media_too_large(self, recording_sleep) -> None:
        handler = ScriptedHandler(httpx.Response(200, json={"id": "x"}))
        client = _client(handler, recording_sleep)

        with pytest.raises(ValidationError) as exc_info:
            await client.upload_media(b"0" * (500 * 1024 + 1), "image/webp")

        assert exc_info.value.field == "file"
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_download_media(self, recording_sleep) -> None:
        cdn_url = "https://lookaside.fbsbx.com/whatsapp_business/attachments/?mid=1"
        handler = ScriptedHandler(
            httpx.Response(
                200,
                json={
                    "url": cdn_url,
                    "mime_type": "image/jpeg",
                    "sha256": "abc",
                    "file_size": 4,
                    "id": "media-1",
                },
            ),
            httpx.Response(200, content=b"JPEG"),
        )
        client = _client(handler, recording_sleep)

        download = await client.download_media("media-1")

        assert download.content == b"JPEG"
        assert download.mime_type == "image/jpeg"
        assert download.file_size == 4
        assert str(handler.requests[1].url) == cdn_url

    @pytest.mark.asyncio
    async def test_delete_media(self, recording_sleep) -> None:
        handler = ScriptedHandler(httpx.Response(200, json={"success": True}))
        client = _client(handler, recording_sleep)

        assert await client.delete_media("media-1") == {"success": True}
        assert handler.requests[0].method == "DELETE"

    @pytest.mark.asyncio
    async def test_subscribe_defaults_to_configured_waba(self, recording_sleep) -> None:
        handler = ScriptedHandler(httpx.Response(200, json={"success": True}))
        client = _client(handler, recording_sleep)

        await client.subscribe_to_waba()

        assert handler.requests[0].method == "POST"
        assert handler.requests[0].url.path == "/v18.0/waba-77/subscribed_apps"

    @pytest.mark.asyncio
    async def test_subscribe_without_waba_is_validation_error(self, recording_sleep) -> None:
        settings = WhatsAppSettings(access_token="tok")
        client = _client(ScriptedHandler(httpx.Response(200)), recording_sleep, settings=settings)

        with pytest.raises(ValidationError) as exc_info:
            await client.subscribe_to_waba()

        assert exc_info.value.field == "waba_id"

    @pytest.mark.asyncio
    async def test_timeout_surfaces_network_error(self, recording_sleep) -> None:
        request = httpx.Request("GET", "https://graph.facebook.com")
        handler = ScriptedHandler(httpx.ReadTimeout("timed out", request=request))
        client = _client(handler, recording_sleep, retry_config=RetryConfig(max_retries=1))

        with pytest.raises(NetworkError, match="timeout"):
            await client.get_media_url("media-1")

        assert len(handler.requests) == 2


class TestLocalWebhookHelpers:
    """Parsing e verificação locais (sem retry nem rede)."""

    def test_parse_webhook(self, recording_sleep) -> None:
        client = _client(ScriptedHandler(httpx.Response(200)), recording_sleep)
        payload = {
            "object": "whatsapp_business_account",
            "entry": [
                {
                    "id": "waba-77",
                    "changes": [
                        {
                            "field": "messages",
                            "value": {
                                "messaging_product": "whatsapp",
                                "metadata": {
                                    "display_phone_number": "15550001111",
                                    "phone_number_id": "106540352242922",
                                },
                                "contacts": [{"profile": {"name": "Ana"}, "wa_id": "5511"}],
                            },
                        }
                    ],
                }
            ],
        }

        assert isinstance(client.parse_webhook(payload), MessageEvent)

    def test_verify_webhook_uses_settings_secret(self, recording_sleep) -> None:
        client = _client(ScriptedHandler(httpx.Response(200)), recording_sleep)
        body = b'{"object":"whatsapp_business_account"}'
        digest = hmac.new(b"segredo", body, hashlib.sha256).hexdigest()

        assert client.verify_webhook(body, f"sha256={digest}") is True
        assert client.verify_webhook(body, f"sha256={digest}", app_secret="outro") is False
