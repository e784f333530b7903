"""Endpoints de webhook do WhatsApp (FastAPI).

Endpoints:
- GET  /: verificação de webhook (Meta challenge)
- POST /: recebimento de eventos

Segurança:
- Validação HMAC em POST (pulada apenas sem app_secret configurado)
- Após a assinatura, sempre 200 OK: a Meta reentrega qualquer não-2xx
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request, Response, status

from wazapin.config.settings import get_whatsapp_settings
from wazapin.errors import ValidationError
from wazapin.observability import correlation_scope
from wazapin.validation import create_validator
from wazapin.webhooks.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)
from wazapin.webhooks.verify import WebhookChallenge, WebhookChallengeError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from wazapin.config.settings import WhatsAppSettings
    from wazapin.validation import Validator
    from wazapin.webhooks.models import WebhookEvent

    EventHandler = Callable[[WebhookEvent], Awaitable[None] | None]

logger = logging.getLogger(__name__)


def create_webhook_router(
    settings: WhatsAppSettings | None = None,
    on_event: EventHandler | None = None,
) -> APIRouter:
    """Cria o router de webhook.

    Args:
        settings: Configurações (padrão: carregadas do ambiente na requisição)
        on_event: Handler chamado com o evento tipado; pode ser sync ou async.
            Exceções do handler são logadas e não alteram a resposta.
    """
    router = APIRouter()
    fixed_validator = _validator_for(settings.validation_mode) if settings else None

    def _settings() -> WhatsAppSettings:
        return settings or get_whatsapp_settings()

    @router.get("/")
    async def verify_webhook(request: Request) -> Response:
        handshake = WebhookChallenge.from_query(request.query_params)
        try:
            challenge = handshake.answer(_settings().verify_token)
        except WebhookChallengeError as exc:
            logger.warning("webhook_verification_failed", extra={"error": str(exc)})
            return Response(
                content="Forbidden",
                media_type="text/plain",
                status_code=status.HTTP_403_FORBIDDEN,
            )

        logger.info("webhook_verified", extra={"hub_mode": handshake.mode})
        # Meta espera o challenge como texto puro
        return Response(content=challenge, media_type="text/plain", status_code=status.HTTP_200_OK)

    @router.post("/", response_model=None)
    async def receive_webhook(request: Request) -> Response | dict[str, Any]:
        with correlation_scope(request.headers.get("x-correlation-id")) as correlation_id:
            current = _settings()
            raw_body = await request.body()
            try:
                event, signature_result = parse_webhook_request(
                    raw_body=raw_body,
                    headers=dict(request.headers),
                    secret=current.app_secret or None,
                    validator=fixed_validator or _validator_for(current.validation_mode),
                )
            except InvalidSignatureError as exc:
                logger.warning("webhook_signature_invalid", extra={"error": str(exc)})
                return Response(
                    content="Unauthorized",
                    media_type="text/plain",
                    status_code=status.HTTP_401_UNAUTHORIZED,
                )
            except (InvalidJsonError, ValidationError) as exc:
                logger.warning(
                    "webhook_payload_rejected",
                    extra={
                        "error": str(exc),
                        "field": getattr(exc, "field", None),
                        "payload_size": len(raw_body),
                    },
                )
                return {"status": "ignored", "correlation_id": correlation_id}

            logger.info(
                "webhook_received",
                extra={
                    "event_kind": event.kind,
                    "signature_skipped": signature_result.skipped,
                    "payload_size": len(raw_body),
                },
            )
            if on_event is not None:
                await _dispatch_event(on_event, event)

            return {"status": "received", "correlation_id": correlation_id}

    return router


def _validator_for(mode: str) -> Validator:
    """Modo inválido cai para ``off``: o POST nunca pode virar 500."""
    try:
        return create_validator(mode)
    except ValueError:
        logger.warning("webhook_validation_mode_invalid", extra={"validation_mode": mode})
        return create_validator("off")


async def _dispatch_event(handler: EventHandler, event: WebhookEvent) -> None:
    """Executa o handler sem propagar exceções (resposta já decidida)."""
    try:
        result = handler(event)
        if inspect.isawaitable(result):
            await result
    except Exception:
        logger.exception("webhook_handler_failed", extra={"event_kind": event.kind})
