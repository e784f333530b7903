"""Modelos tipados dos eventos de webhook.

Espelham o JSON da Meta de forma tolerante (campos opcionais, extras
preservados). A validação rigorosa fica em ``wazapin.validation.schemas``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

WHATSAPP_BUSINESS_ACCOUNT = "whatsapp_business_account"


class _Model(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class WebhookMetadata(_Model):
    display_phone_number: str | None = None
    phone_number_id: str | None = None


class WebhookProfile(_Model):
    name: str | None = None


class WebhookContact(_Model):
    profile: WebhookProfile | None = None
    wa_id: str | None = None


class WebhookText(_Model):
    body: str


class WebhookMedia(_Model):
    id: str | None = None
    mime_type: str | None = None
    sha256: str | None = None
    caption: str | None = None
    filename: str | None = None


class WebhookLocation(_Model):
    latitude: float | None = None
    longitude: float | None = None
    name: str | None = None
    address: str | None = None


class WebhookMessage(_Model):
    id: str | None = None
    from_: str | None = Field(default=None, alias="from")
    timestamp: str | None = None
    type: str = "unknown"
    context: dict[str, Any] | None = None
    errors: list[dict[str, Any]] | None = None
    text: WebhookText | None = None
    image: WebhookMedia | None = None
    video: WebhookMedia | None = None
    audio: WebhookMedia | None = None
    document: WebhookMedia | None = None
    sticker: WebhookMedia | None = None
    location: WebhookLocation | None = None
    interactive: dict[str, Any] | None = None
    button: dict[str, Any] | None = None
    reaction: dict[str, Any] | None = None


class WebhookStatus(_Model):
    id: str | None = None
    status: str | None = None
    timestamp: str | None = None
    recipient_id: str | None = None
    conversation: dict[str, Any] | None = None
    pricing: dict[str, Any] | None = None
    errors: list[dict[str, Any]] | None = None


class MessageValue(_Model):
    messaging_product: str | None = None
    metadata: WebhookMetadata | None = None
    contacts: list[WebhookContact] = Field(default_factory=list)
    messages: list[WebhookMessage] = Field(default_factory=list)
    statuses: list[WebhookStatus] = Field(default_factory=list)


class MessageChange(_Model):
    field: str = "messages"
    value: MessageValue


class AccountChange(_Model):
    field: str
    value: dict[str, Any] = Field(default_factory=dict)


class MessageEntry(_Model):
    id: str | None = None
    changes: list[MessageChange] = Field(default_factory=list)


class AccountEntry(_Model):
    id: str | None = None
    changes: list[AccountChange] = Field(default_factory=list)


class MessageEvent(_Model):
    """Evento com mensagens recebidas (e contatos)."""

    kind: Literal["message"] = "message"
    object: Literal["whatsapp_business_account"] = WHATSAPP_BUSINESS_ACCOUNT
    entry: list[MessageEntry]

    def iter_messages(self) -> list[WebhookMessage]:
        return [
            message
            for entry in self.entry
            for change in entry.changes
            for message in change.value.messages
        ]


class StatusEvent(_Model):
    """Evento com atualizações de status de mensagens enviadas."""

    kind: Literal["status"] = "status"
    object: Literal["whatsapp_business_account"] = WHATSAPP_BUSINESS_ACCOUNT
    entry: list[MessageEntry]

    def iter_statuses(self) -> list[WebhookStatus]:
        return [
            status
            for entry in self.entry
            for change in entry.changes
            for status in change.value.statuses
        ]


class AccountEvent(_Model):
    """Evento de conta (templates, qualidade do número, account_update...)."""

    kind: Literal["account"] = "account"
    object: Literal["whatsapp_business_account"] = WHATSAPP_BUSINESS_ACCOUNT
    entry: list[AccountEntry]


WebhookEvent = Annotated[
    Union[MessageEvent, StatusEvent, AccountEvent],
    Field(discriminator="kind"),
]
