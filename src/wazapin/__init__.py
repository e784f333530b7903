"""wazapin - SDK Python para a WhatsApp Business Cloud API.

Núcleo:
- Transporte HTTP resiliente (timeout, taxonomia de erros tipada)
- Retry com backoff exponencial
- Verificação HMAC e parsing tipado de webhooks
"""

import logging

from .client import WhatsAppClient
from .config.settings import WhatsAppSettings, get_whatsapp_settings
from .errors import (
    ApiError,
    ErrorKind,
    NetworkError,
    RateLimitError,
    ValidationError,
    WhatsAppError,
)
from .http import GraphTransport, RetryConfig, RetryPolicy, TransportConfig, with_retry
from .validation import create_validator
from .webhooks import (
    AccountEvent,
    MessageEvent,
    StatusEvent,
    WebhookEvent,
    parse_webhook,
    verify_webhook_signature,
)

# Biblioteca não configura handlers; a aplicação decide (ver config.logging)
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AccountEvent",
    "ApiError",
    "ErrorKind",
    "GraphTransport",
    "MessageEvent",
    "NetworkError",
    "RateLimitError",
    "RetryConfig",
    "RetryPolicy",
    "StatusEvent",
    "TransportConfig",
    "ValidationError",
    "WebhookEvent",
    "WhatsAppClient",
    "WhatsAppError",
    "WhatsAppSettings",
    "create_validator",
    "get_whatsapp_settings",
    "parse_webhook",
    "verify_webhook_signature",
    "with_retry",
]
