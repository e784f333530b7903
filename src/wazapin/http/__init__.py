"""Camada de requisição resiliente para a Graph API.

- Transporte HTTP com timeout e classificação tipada de falhas
- Política de retry com backoff exponencial
- Hooks de observabilidade (pré-request, pós-response, erro)
"""

from .hooks import LoggingHooks, NullHooks, TransportHooks
from .meta_errors import (
    MetaErrorBody,
    classify_error_response,
    is_permanent_error,
    parse_meta_error,
)
from .retry import (
    DEFAULT_RETRY_CONFIG,
    RetryConfig,
    RetryPolicy,
    compute_backoff_delay,
    resolve_retry_delay,
    with_retry,
)
from .transport import GraphTransport, TransportConfig

__all__ = [
    "DEFAULT_RETRY_CONFIG",
    "GraphTransport",
    "LoggingHooks",
    "MetaErrorBody",
    "NullHooks",
    "RetryConfig",
    "RetryPolicy",
    "TransportConfig",
    "TransportHooks",
    "classify_error_response",
    "compute_backoff_delay",
    "is_permanent_error",
    "parse_meta_error",
    "resolve_retry_delay",
    "with_retry",
]
