"""Handshake GET do webhook (``hub.mode``/``hub.verify_token``/``hub.challenge``).

A Meta chama a URL do webhook com esses três parâmetros de query ao
cadastrá-la; a resposta precisa ecoar ``hub.challenge`` em texto puro.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SUBSCRIBE_MODE = "subscribe"


class WebhookChallengeError(ValueError):
    """Handshake recusado (``missing_verify_token`` ou ``verification_failed``)."""


@dataclass(frozen=True)
class WebhookChallenge:
    """Parâmetros ``hub.*`` de uma chamada de verificação."""

    mode: str | None
    verify_token: str | None
    challenge: str | None

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> WebhookChallenge:
        return cls(
            mode=params.get("hub.mode"),
            verify_token=params.get("hub.verify_token"),
            challenge=params.get("hub.challenge"),
        )

    def answer(self, expected_token: str | None) -> str:
        """Retorna o texto a responder ou levanta WebhookChallengeError."""
        if not expected_token:
            raise WebhookChallengeError("missing_verify_token")
        received = (self.verify_token or "").encode("utf-8")
        if self.mode != SUBSCRIBE_MODE or not hmac.compare_digest(
            received, expected_token.encode("utf-8")
        ):
            raise WebhookChallengeError("verification_failed")
        return self.challenge or ""


def verify_webhook_challenge(
    hub_mode: str | None,
    hub_verify_token: str | None,
    hub_challenge: str | None,
    expected_token: str | None,
) -> str:
    """Atalho funcional para ``WebhookChallenge(...).answer(expected_token)``."""
    return WebhookChallenge(hub_mode, hub_verify_token, hub_challenge).answer(expected_token)
