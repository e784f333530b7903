"""Schemas pydantic para validação profunda.

Os nomes de campos seguem o JSON da Graph API (snake_case).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

MessageType = Literal[
    "text",
    "image",
    "video",
    "audio",
    "document",
    "sticker",
    "location",
    "contacts",
    "button",
    "interactive",
    "reaction",
    "order",
    "system",
    "unsupported",
    "unknown",
]

StatusType = Literal["sent", "delivered", "read", "failed"]


class _Schema(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class MetadataSchema(_Schema):
    display_phone_number: str
    phone_number_id: str


class ProfileSchema(_Schema):
    name: str


class ContactSchema(_Schema):
    profile: ProfileSchema
    wa_id: str


class MediaSchema(_Schema):
    id: str
    mime_type: str
    sha256: str | None = None
    caption: str | None = None
    filename: str | None = None


class LocationSchema(_Schema):
    latitude: float
    longitude: float
    name: str | None = None
    address: str | None = None


class ReplySchema(_Schema):
    id: str
    title: str
    description: str | None = None


class InteractiveSchema(_Schema):
    type: Literal["button_reply", "list_reply", "nfm_reply"]
    button_reply: ReplySchema | None = None
    list_reply: ReplySchema | None = None


class ErrorDataSchema(_Schema):
    details: str


class WebhookErrorSchema(_Schema):
    code: int
    title: str
    message: str | None = None
    error_data: ErrorDataSchema | None = None


class TextSchema(_Schema):
    body: str


class ButtonSchema(_Schema):
    text: str
    payload: str


class ReactionSchema(_Schema):
    message_id: str
    emoji: str | None = None


class ContextSchema(_Schema):
    from_: str | None = Field(default=None, alias="from")
    id: str


class MessageSchema(_Schema):
    id: str
    from_: str = Field(alias="from")
    timestamp: str
    type: MessageType
    context: ContextSchema | None = None
    errors: list[WebhookErrorSchema] | None = None
    text: TextSchema | None = None
    image: MediaSchema | None = None
    video: MediaSchema | None = None
    audio: MediaSchema | None = None
    document: MediaSchema | None = None
    sticker: MediaSchema | None = None
    location: LocationSchema | None = None
    contacts: list[dict[str, Any]] | None = None
    button: ButtonSchema | None = None
    interactive: InteractiveSchema | None = None
    reaction: ReactionSchema | None = None


class ConversationOriginSchema(_Schema):
    type: str


class ConversationSchema(_Schema):
    id: str
    origin: ConversationOriginSchema | None = None


class PricingSchema(_Schema):
    pricing_model: str | None = None
    billable: bool | None = None
    category: str


class StatusSchema(_Schema):
    id: str
    status: StatusType
    timestamp: str
    recipient_id: str
    conversation: ConversationSchema | None = None
    pricing: PricingSchema | None = None
    errors: list[WebhookErrorSchema] | None = None


class ChangeValueSchema(_Schema):
    """Valor de uma change.

    Mudanças de conta trazem campos livres (aceitos como extras); quando há
    mensagens ou status, ``metadata`` passa a ser obrigatório.
    """

    messaging_product: Literal["whatsapp"] | None = None
    metadata: MetadataSchema | None = None
    contacts: list[ContactSchema] | None = None
    messages: list[MessageSchema] | None = None
    statuses: list[StatusSchema] | None = None

    @model_validator(mode="after")
    def _require_metadata(self) -> ChangeValueSchema:
        has_traffic = self.messages is not None or self.statuses is not None
        if has_traffic and self.metadata is None:
            raise ValueError("metadata é obrigatório em changes de mensagens/status")
        return self


class ChangeSchema(_Schema):
    field: str
    value: ChangeValueSchema


class EntrySchema(_Schema):
    id: str
    changes: list[ChangeSchema]


class WebhookPayloadSchema(_Schema):
    object: Literal["whatsapp_business_account"]
    entry: list[EntrySchema]


class SendTextParams(_Schema):
    """Parâmetros de ``send_text``."""

    model_config = ConfigDict(extra="forbid")

    to: str = Field(pattern=r"^\+?[0-9]{6,15}$")
    text: str = Field(min_length=1, max_length=4096)
    preview_url: bool = False
    reply_to: str | None = None
