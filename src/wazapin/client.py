"""Cliente de alto nível da WhatsApp Business Cloud API.

Compõe transporte, política de retry e validator. Toda operação remota roda
sob a política de retry configurada; parsing e verificação de webhook são
locais e nunca são retentados.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from wazapin import media, messages
from wazapin.config.settings import WhatsAppSettings, get_whatsapp_settings
from wazapin.http import GraphTransport, RetryPolicy
from wazapin.validation import create_validator
from wazapin.webhooks import parse_webhook, verify_webhook_signature
from wazapin.webhooks.subscribe import subscribe_to_waba

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from wazapin.http import TransportHooks
    from wazapin.media import MediaDownload, MediaUrl
    from wazapin.webhooks import WebhookEvent

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WhatsAppClient:
    """Cliente WhatsApp.

    Args:
        settings: Configurações (padrão: carregadas do ambiente)
        retry_policy: Política de retry (padrão: derivada de settings)
        validation: Modo off | relaxed | strict (padrão: settings, que é ``off``)
        http_client: ``httpx.AsyncClient`` externo; sem ele o cliente cria e
            fecha o próprio em ``aclose()``
        hooks: Hooks do transporte

    Exemplo:
        async with WhatsAppClient(WhatsAppSettings(access_token=..., phone_number_id=...)) as wa:
            await wa.send_text("5511999998888", "Olá!")
    """

    def __init__(
        self,
        settings: WhatsAppSettings | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
        validation: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        hooks: TransportHooks | None = None,
    ) -> None:
        self._settings = settings or get_whatsapp_settings()
        if not self._settings.access_token or not self._settings.access_token.strip():
            raise ValueError(
                "access_token é obrigatório. "
                "Verifique se WHATSAPP_ACCESS_TOKEN está configurado."
            )

        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient()
        self._transport = GraphTransport(
            self._settings.to_transport_config(),
            http_client=self._http_client,
            hooks=hooks,
        )
        self._retry = retry_policy or RetryPolicy(self._settings.to_retry_config())
        self._validator = create_validator(validation or self._settings.validation_mode)
        logger.debug(
            "whatsapp_client_initialized",
            extra={
                "api_version": self._settings.api_version,
                "validation_mode": self._validator.mode,
                "max_retries": self._retry.config.max_retries,
            },
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> WhatsAppClient:
        return cls(get_whatsapp_settings(), **kwargs)

    @property
    def transport(self) -> GraphTransport:
        return self._transport

    @property
    def phone_number_id(self) -> str:
        if not self._settings.phone_number_id:
            raise ValueError("phone_number_id é obrigatório")
        return self._settings.phone_number_id

    async def __aenter__(self) -> WhatsAppClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()

    async def _call(self, operation: Callable[[], Awaitable[T]]) -> T:
        return await self._retry.run(operation)

    # Mensagens

    async def send_text(
        self,
        to: str,
        text: str,
        *,
        preview_url: bool = False,
        reply_to: str | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"to": to, "text": text, "preview_url": preview_url}
        if reply_to:
            params["reply_to"] = reply_to
        phone_number_id = self.phone_number_id
        return await self._call(
            lambda: messages.send_text(
                self._transport, phone_number_id, params, self._validator
            )
        )

    async def mark_as_read(self, message_id: str) -> dict[str, Any]:
        phone_number_id = self.phone_number_id
        return await self._call(
            lambda: messages.mark_as_read(self._transport, phone_number_id, message_id)
        )

    # Mídia

    async def upload_media(
        self,
        content: bytes,
        mime_type: str,
        filename: str = "file",
    ) -> dict[str, Any]:
        phone_number_id = self.phone_number_id
        return await self._call(
            lambda: media.upload_media(
                self._transport, phone_number_id, content, mime_type, filename
            )
        )

    async def get_media_url(self, media_id: str) -> MediaUrl:
        return await self._call(lambda: media.get_media_url(self._transport, media_id))

    async def download_media(self, media_id: str) -> MediaDownload:
        return await self._call(lambda: media.download_media(self._transport, media_id))

    async def delete_media(self, media_id: str) -> dict[str, Any]:
        return await self._call(lambda: media.delete_media(self._transport, media_id))

    # Webhooks

    async def subscribe_to_waba(self, waba_id: str | None = None) -> dict[str, Any]:
        target = waba_id or self._settings.business_account_id
        return await self._call(lambda: subscribe_to_waba(self._transport, target))

    def parse_webhook(self, payload: Any) -> WebhookEvent:
        return parse_webhook(payload, self._validator)

    def verify_webhook(
        self,
        raw_body: bytes | str,
        signature: str | None,
        app_secret: str | None = None,
    ) -> bool:
        return verify_webhook_signature(
            raw_body, signature, app_secret or self._settings.app_secret
        )
