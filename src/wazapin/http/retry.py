"""Política de retry com backoff exponencial.

Envolve qualquer operação assíncrona sem argumentos; a operação não precisa
saber que está sendo retentada. Tentativas são estritamente sequenciais.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from wazapin.errors import RateLimitError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryConfig:
    """Configuração do retry (durações em segundos)."""

    max_retries: int = 3
    initial_delay_seconds: float = 1.0
    max_delay_seconds: float = 30.0
    backoff_multiplier: float = 2.0
    retry_on_rate_limit: bool = True

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries deve ser >= 0")
        if self.initial_delay_seconds < 0 or self.max_delay_seconds < 0:
            raise ValueError("delays devem ser >= 0")
        if self.backoff_multiplier < 1:
            raise ValueError("backoff_multiplier deve ser >= 1")


DEFAULT_RETRY_CONFIG = RetryConfig()


def compute_backoff_delay(attempt: int, config: RetryConfig = DEFAULT_RETRY_CONFIG) -> float:
    """Delay (segundos) antes da retentativa seguinte à tentativa ``attempt``.

    ``min(initial * multiplier**attempt, max_delay)``, com ``attempt`` 0-indexado.
    """
    delay = config.initial_delay_seconds * (config.backoff_multiplier**attempt)
    return min(delay, config.max_delay_seconds)


def resolve_retry_delay(
    error: Exception,
    attempt: int,
    config: RetryConfig,
) -> float | None:
    """Decide se ``error`` é retentável e com qual delay.

    Returns:
        Delay em segundos, ou None se o erro não deve ser retentado.
    """
    if isinstance(error, ValidationError):
        return None
    if isinstance(error, RateLimitError):
        if not config.retry_on_rate_limit:
            return None
        if error.retry_after_seconds is not None:
            return float(error.retry_after_seconds)
    return compute_backoff_delay(attempt, config)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    config: RetryConfig | None = None,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Executa ``operation`` com retry e backoff exponencial.

    Args:
        operation: Callable sem argumentos que retorna um awaitable
        config: Configuração (padrão: ``RetryConfig()``)
        sleep: Função de espera (injetável para testes)

    Returns:
        Resultado da primeira tentativa bem-sucedida

    Raises:
        O último erro observado quando as tentativas se esgotam, ou o erro
        original quando ele não é retentável.
    """
    retry_config = config or DEFAULT_RETRY_CONFIG
    attempt = 0
    while True:
        try:
            return await operation()
        except Exception as exc:
            delay = resolve_retry_delay(exc, attempt, retry_config)
            if delay is None or attempt >= retry_config.max_retries:
                raise
            kind = getattr(exc, "kind", None)
            logger.info(
                "retry_scheduled",
                extra={
                    "attempt": attempt + 1,
                    "max_retries": retry_config.max_retries,
                    "delay_seconds": delay,
                    "error_kind": kind.value if kind is not None else type(exc).__name__,
                },
            )
        await sleep(delay)
        attempt += 1


class RetryPolicy:
    """Política reutilizável: apenas guarda a configuração imutável."""

    def __init__(
        self,
        config: RetryConfig | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._config = config or DEFAULT_RETRY_CONFIG
        self._sleep = sleep

    @property
    def config(self) -> RetryConfig:
        return self._config

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        return await with_retry(operation, self._config, sleep=self._sleep)
