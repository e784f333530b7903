"""Logging JSON do SDK: handler, filtros de contexto e redação.

Cada registro leva correlation_id, service, level, logger, message e asctime;
chaves de ``extra`` com nome de token ou secret saem como ``[REDACTED]``.
"""

from wazapin.config.logging.config import (
    DEFAULT_SERVICE_NAME,
    VALID_LOG_LEVELS,
    build_json_handler,
    configure_logging,
)
from wazapin.config.logging.filters import (
    REDACTED,
    SENSITIVE_FIELDS,
    CorrelationIdFilter,
    SensitiveDataFilter,
    redact,
)
from wazapin.config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "FIELD_RENAME_MAP",
    "REDACTED",
    "REQUIRED_LOG_FIELDS",
    "SENSITIVE_FIELDS",
    "VALID_LOG_LEVELS",
    "CorrelationIdFilter",
    "SensitiveDataFilter",
    "build_json_handler",
    "configure_logging",
    "create_json_formatter",
    "redact",
]
