"""Testes da taxonomia de erros."""

from __future__ import annotations

import pytest

from wazapin.errors import (
    ApiError,
    ErrorKind,
    NetworkError,
    RateLimitError,
    ValidationError,
    WhatsAppError,
)


def _describe(error: WhatsAppError) -> str:
    match error.kind:
        case ErrorKind.VALIDATION:
            return "validation"
        case ErrorKind.NETWORK:
            return "network"
        case ErrorKind.API:
            return "api"
        case ErrorKind.RATE_LIMIT:
            return "rate_limit"


class TestErrorTaxonomy:
    """Variantes, códigos e discriminante."""

    def test_validation_error_carries_field(self) -> None:
        error = ValidationError("to inválido", field="to")
        assert error.kind is ErrorKind.VALIDATION
        assert error.code == "VALIDATION_ERROR"
        assert error.field == "to"
        assert str(error) == "to inválido"

    def test_network_error_keeps_cause(self) -> None:
        cause = OSError("connection reset")
        error = NetworkError("Network request failed", cause=cause)
        assert error.kind is ErrorKind.NETWORK
        assert error.code == "NETWORK_ERROR"
        assert error.cause is cause

    def test_api_error_code_includes_provider_code(self) -> None:
        error = ApiError(
            "Invalid parameter",
            status_code=400,
            error_code=100,
            error_subcode=2494010,
            fbtrace_id="AbCdEf",
        )
        assert error.kind is ErrorKind.API
        assert error.code == "API_ERROR_100"
        assert error.status_code == 400
        assert error.error_subcode == 2494010
        assert error.fbtrace_id == "AbCdEf"

    def test_rate_limit_is_not_an_api_error(self) -> None:
        error = RateLimitError("Too many calls", retry_after_seconds=10)
        assert not isinstance(error, ApiError)
        assert error.kind is ErrorKind.RATE_LIMIT
        assert error.retry_after_seconds == 10
        assert error.status_code == 429

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (ValidationError("x"), "validation"),
            (NetworkError("x"), "network"),
            (ApiError("x", status_code=500, error_code=1), "api"),
            (RateLimitError("x"), "rate_limit"),
        ],
    )
    def test_kind_supports_exhaustive_match(self, error: WhatsAppError, expected: str) -> None:
        assert _describe(error) == expected

    def test_all_variants_share_base(self) -> None:
        for error in (
            ValidationError("x"),
            NetworkError("x"),
            ApiError("x", status_code=500, error_code=1),
            RateLimitError("x"),
        ):
            assert isinstance(error, WhatsAppError)
