"""Settings do SDK WhatsApp.

Configurações da Cloud API via Graph API, carregadas de variáveis de ambiente.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, TypeVar

from wazapin.http.retry import RetryConfig
from wazapin.http.transport import DEFAULT_API_VERSION, DEFAULT_BASE_URL, TransportConfig
from wazapin.validation.validator import VALID_MODES

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T", int, float)


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do canal WhatsApp.

    Attributes:
        access_token: Token de acesso à Graph API
        phone_number_id: ID do número de telefone no Meta Business
        business_account_id: ID da conta de negócios (WABA)
        app_secret: Secret para validação HMAC de payloads
        verify_token: Token para verificação de webhook
        api_version: Versão da Graph API (ex: v18.0)
        api_base_url: URL base da Graph API
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de retentativas em caso de erro
        retry_initial_delay_seconds: Delay da primeira retentativa
        retry_max_delay_seconds: Teto do backoff
        retry_backoff_multiplier: Multiplicador do backoff
        retry_on_rate_limit: Se 429 deve ser retentado
        validation_mode: off | relaxed | strict
    """

    # Credenciais
    access_token: str = ""
    phone_number_id: str = ""
    business_account_id: str = ""
    app_secret: str = ""
    verify_token: str = ""

    # API
    api_version: str = DEFAULT_API_VERSION
    api_base_url: str = DEFAULT_BASE_URL

    # Timeouts e retries
    request_timeout_seconds: float = 30.0
    max_retries: int = 3
    retry_initial_delay_seconds: float = 1.0
    retry_max_delay_seconds: float = 30.0
    retry_backoff_multiplier: float = 2.0
    retry_on_rate_limit: bool = True

    # Validação
    validation_mode: str = "off"

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url.rstrip('/')}/{self.api_version}"

    def to_transport_config(self) -> TransportConfig:
        return TransportConfig(
            access_token=self.access_token,
            base_url=self.api_base_url,
            api_version=self.api_version,
            timeout_seconds=self.request_timeout_seconds,
        )

    def to_retry_config(self) -> RetryConfig:
        return RetryConfig(
            max_retries=self.max_retries,
            initial_delay_seconds=self.retry_initial_delay_seconds,
            max_delay_seconds=self.retry_max_delay_seconds,
            backoff_multiplier=self.retry_backoff_multiplier,
            retry_on_rate_limit=self.retry_on_rate_limit,
        )

    def validate(self) -> list[str]:
        """Lista os problemas de configuração (vazia quando está tudo certo).

        Não levanta: quem chama decide se aborta o boot ou só loga.
        """
        checks = (
            (not self.access_token, "WHATSAPP_ACCESS_TOKEN não configurado"),
            (not self.phone_number_id, "WHATSAPP_PHONE_NUMBER_ID não configurado"),
            (
                self.request_timeout_seconds <= 0,
                "WHATSAPP_REQUEST_TIMEOUT_SECONDS deve ser > 0",
            ),
            (self.max_retries < 0, "WHATSAPP_MAX_RETRIES deve ser >= 0"),
            (
                self.retry_initial_delay_seconds < 0 or self.retry_max_delay_seconds < 0,
                "WHATSAPP_RETRY_*_DELAY_SECONDS devem ser >= 0",
            ),
            (
                self.retry_backoff_multiplier < 1,
                "WHATSAPP_RETRY_BACKOFF_MULTIPLIER deve ser >= 1",
            ),
            (
                self.validation_mode not in VALID_MODES,
                "WHATSAPP_VALIDATION_MODE deve ser 'off', 'relaxed' ou 'strict'",
            ),
        )
        return [message for failed, message in checks if failed]


_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_number(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} inválido: {raw!r}") from exc


def _load_from_env() -> WhatsAppSettings:
    """Lê as variáveis ``WHATSAPP_*``; ausentes ficam com o default do dataclass."""
    defaults = WhatsAppSettings()
    env = os.environ
    return WhatsAppSettings(
        access_token=env.get("WHATSAPP_ACCESS_TOKEN", ""),
        phone_number_id=env.get("WHATSAPP_PHONE_NUMBER_ID", ""),
        business_account_id=env.get("WHATSAPP_BUSINESS_ACCOUNT_ID", ""),
        app_secret=env.get("WHATSAPP_APP_SECRET", ""),
        verify_token=env.get("WHATSAPP_VERIFY_TOKEN", ""),
        api_version=env.get("WHATSAPP_API_VERSION", defaults.api_version),
        api_base_url=env.get("WHATSAPP_API_BASE_URL", defaults.api_base_url),
        request_timeout_seconds=_env_number(
            "WHATSAPP_REQUEST_TIMEOUT_SECONDS", defaults.request_timeout_seconds, float
        ),
        max_retries=_env_number("WHATSAPP_MAX_RETRIES", defaults.max_retries, int),
        retry_initial_delay_seconds=_env_number(
            "WHATSAPP_RETRY_INITIAL_DELAY_SECONDS", defaults.retry_initial_delay_seconds, float
        ),
        retry_max_delay_seconds=_env_number(
            "WHATSAPP_RETRY_MAX_DELAY_SECONDS", defaults.retry_max_delay_seconds, float
        ),
        retry_backoff_multiplier=_env_number(
            "WHATSAPP_RETRY_BACKOFF_MULTIPLIER", defaults.retry_backoff_multiplier, float
        ),
        retry_on_rate_limit=_env_bool(
            "WHATSAPP_RETRY_ON_RATE_LIMIT", defaults.retry_on_rate_limit
        ),
        validation_mode=env.get(
            "WHATSAPP_VALIDATION_MODE", defaults.validation_mode
        ).strip().lower(),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Settings do ambiente, lidas uma vez por processo.

    Testes que alteram o ambiente chamam ``get_whatsapp_settings.cache_clear()``.
    """
    return _load_from_env()
