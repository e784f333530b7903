"""Versão do SDK e montagem do User-Agent."""

from __future__ import annotations

import platform
from dataclasses import dataclass
from importlib import metadata

DISTRIBUTION_NAME = "wazapin"
FALLBACK_VERSION = "0.1.0"


@dataclass(frozen=True)
class PlatformInfo:
    """Informações do runtime que entram no User-Agent."""

    python_version: str
    system: str
    machine: str


@dataclass(frozen=True)
class SDKMetadata:
    """Metadados do SDK (versão, User-Agent e plataforma)."""

    version: str
    user_agent: str
    platform: PlatformInfo


_cached_metadata: SDKMetadata | None = None


def get_sdk_version() -> str:
    """Retorna a versão instalada do pacote ou o fallback."""
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return FALLBACK_VERSION


def get_platform_info() -> PlatformInfo:
    return PlatformInfo(
        python_version=platform.python_version(),
        system=platform.system().lower() or "unknown",
        machine=platform.machine() or "unknown",
    )


def get_user_agent(version: str | None = None, info: PlatformInfo | None = None) -> str:
    """Monta User-Agent no formato ``<produto>/<versão> (<comentário>)``.

    Sem argumentos usa a versão instalada e o runtime atual.

    Exemplo:
        wazapin/0.1.0 (Python/3.12.1; linux; x86_64)
    """
    version = version or get_sdk_version()
    info = info or get_platform_info()
    return (
        f"{DISTRIBUTION_NAME}/{version} "
        f"(Python/{info.python_version}; {info.system}; {info.machine})"
    )


def get_sdk_metadata() -> SDKMetadata:
    """Retorna metadados do SDK (cacheados após a primeira chamada)."""
    global _cached_metadata
    if _cached_metadata is None:
        version = get_sdk_version()
        info = get_platform_info()
        _cached_metadata = SDKMetadata(
            version=version,
            user_agent=get_user_agent(version, info),
            platform=info,
        )
    return _cached_metadata


def clear_metadata_cache() -> None:
    """Limpa o cache de metadados (útil em testes)."""
    global _cached_metadata
    _cached_metadata = None
