"""Estratégias de validação de schema injetadas no transporte e no parser.

O modo (``off`` | ``relaxed`` | ``strict``) escolhe a estratégia uma única vez,
em ``create_validator``; quem recebe o validator nunca ramifica por modo.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Protocol, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from wazapin.errors import ValidationError

logger = logging.getLogger(__name__)

ValidationMode = Literal["off", "relaxed", "strict"]
VALID_MODES: frozenset[str] = frozenset({"off", "relaxed", "strict"})

ModelT = TypeVar("ModelT", bound=BaseModel)


class Validator(Protocol):
    """Contrato mínimo de validação."""

    mode: ValidationMode

    def validate(self, schema: type[ModelT], data: Any) -> Any: ...


class PassthroughValidator:
    """Modo ``off``: devolve os dados sem validar."""

    mode: ValidationMode = "off"

    def validate(self, schema: type[ModelT], data: Any) -> Any:
        return data


class SchemaValidator:
    """Modos ``relaxed`` e ``strict``: validação completa via pydantic.

    Os dois modos se comportam igual; o modo fica registrado apenas para
    diagnóstico.
    """

    def __init__(self, mode: ValidationMode = "strict") -> None:
        if mode not in ("relaxed", "strict"):
            raise ValueError(f"SchemaValidator não suporta modo {mode!r}")
        self.mode: ValidationMode = mode

    def validate(self, schema: type[ModelT], data: Any) -> ModelT:
        """Valida ``data`` contra ``schema``.

        Raises:
            ValidationError: Com o caminho pontuado do primeiro campo inválido
                em ``field`` e a lista completa de erros em ``details``.
        """
        try:
            return schema.model_validate(data)
        except PydanticValidationError as exc:
            errors = exc.errors(include_url=False)
            first = errors[0] if errors else {}
            field = ".".join(str(part) for part in first.get("loc", ())) or None
            logger.debug(
                "schema_validation_failed",
                extra={
                    "schema": schema.__name__,
                    "field": field,
                    "error_count": len(errors),
                    "validation_mode": self.mode,
                },
            )
            raise ValidationError(
                first.get("msg", f"Validation failed in {self.mode} mode"),
                field=field,
                details=errors,
            ) from exc


def create_validator(mode: str = "strict") -> Validator:
    """Factory: mapeia o modo configurado para a estratégia.

    Raises:
        ValueError: Se o modo for desconhecido.
    """
    normalized = (mode or "").strip().lower()
    if normalized not in VALID_MODES:
        raise ValueError(
            f"Modo de validação inválido: {mode}. "
            f"Válidos: {', '.join(sorted(VALID_MODES))}"
        )
    if normalized == "off":
        return PassthroughValidator()
    return SchemaValidator(normalized)  # type: ignore[arg-type]
