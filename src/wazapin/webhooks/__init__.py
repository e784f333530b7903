"""Webhook WhatsApp: assinatura, challenge e parsing seguro."""

from .models import (
    AccountEvent,
    MessageEvent,
    StatusEvent,
    WebhookContact,
    WebhookEvent,
    WebhookMessage,
    WebhookMetadata,
    WebhookStatus,
)
from .parser import classify_event, parse_webhook
from .receive import (
    InvalidJsonError,
    InvalidSignatureError,
    SignatureResult,
    WebhookRequestError,
    check_signature,
    parse_webhook_request,
)
from .signature import compute_signature, verify_webhook_signature
from .subscribe import list_subscribed_apps, subscribe_to_waba, unsubscribe_from_waba
from .verify import WebhookChallenge, WebhookChallengeError, verify_webhook_challenge

__all__ = [
    "AccountEvent",
    "InvalidJsonError",
    "InvalidSignatureError",
    "MessageEvent",
    "SignatureResult",
    "StatusEvent",
    "WebhookChallenge",
    "WebhookChallengeError",
    "WebhookContact",
    "WebhookEvent",
    "WebhookMessage",
    "WebhookMetadata",
    "WebhookRequestError",
    "WebhookStatus",
    "check_signature",
    "classify_event",
    "compute_signature",
    "list_subscribed_apps",
    "parse_webhook",
    "parse_webhook_request",
    "subscribe_to_waba",
    "unsubscribe_from_waba",
    "verify_webhook_challenge",
    "verify_webhook_signature",
]
