"""Validação de schema (estratégia injetada por modo)."""

from .schemas import SendTextParams, WebhookPayloadSchema
from .validator import (
    VALID_MODES,
    PassthroughValidator,
    SchemaValidator,
    ValidationMode,
    Validator,
    create_validator,
)

__all__ = [
    "VALID_MODES",
    "PassthroughValidator",
    "SchemaValidator",
    "SendTextParams",
    "ValidationMode",
    "Validator",
    "WebhookPayloadSchema",
    "create_validator",
]
