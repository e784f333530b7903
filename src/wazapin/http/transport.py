"""Transporte HTTP resiliente para a Graph API (WhatsApp Cloud API).

Responsabilidades:
- Emitir exatamente uma chamada de rede por invocação
- Aplicar timeout à chamada inteira (não só por fase do httpx)
- Traduzir TODA falha para a taxonomia de ``wazapin.errors``
- Nunca engolir erros: reclassifica e relança

Retry não é responsabilidade deste módulo (ver ``wazapin.http.retry``).
"""

from __future__ import annotations

import asyncio
import json
import time
from dataclasses import dataclass
from typing import Any

import httpx

from wazapin.errors import NetworkError, ValidationError, WhatsAppError
from wazapin.http.hooks import LoggingHooks, TransportHooks
from wazapin.http.meta_errors import classify_error_response
from wazapin.version import get_sdk_metadata

DEFAULT_BASE_URL = "https://graph.facebook.com"
DEFAULT_API_VERSION = "v18.0"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class TransportConfig:
    """Configuração imutável do transporte.

    Attributes:
        access_token: Bearer token da Graph API
        base_url: URL base (sem barra final)
        api_version: Segmento de versão (ex: v18.0)
        timeout_seconds: Timeout por chamada
        user_agent: User-Agent customizado; None usa o do SDK
        verify_ssl: Validação de certificado quando o cliente é criado aqui
    """

    access_token: str
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str | None = None
    verify_ssl: bool = True


class GraphTransport:
    """Cliente HTTP para a Graph API com classificação tipada de falhas.

    Não guarda estado mutável entre chamadas: uma instância pode ser
    compartilhada por quantas requisições concorrentes forem necessárias.

    Args:
        config: Configuração do transporte
        http_client: ``httpx.AsyncClient`` compartilhado (opcional). Sem ele,
            cada chamada abre e fecha o próprio cliente.
        hooks: Pontos de extensão (padrão: ``LoggingHooks``)
    """

    def __init__(
        self,
        config: TransportConfig,
        http_client: httpx.AsyncClient | None = None,
        hooks: TransportHooks | None = None,
    ) -> None:
        self._config = config
        self._http_client = http_client
        self._hooks: TransportHooks = hooks or LoggingHooks()

    @property
    def config(self) -> TransportConfig:
        return self._config

    def build_url(self, path: str) -> str:
        """Monta ``{base_url}/{api_version}/{path}``.

        Raises:
            ValidationError: Se path estiver vazio
        """
        if not isinstance(path, str) or not path.strip().strip("/"):
            raise ValidationError("path não pode ser vazio", field="path")
        base = self._config.base_url.rstrip("/")
        return f"{base}/{self._config.api_version}/{path.strip().lstrip('/')}"

    async def get(self, path: str) -> dict[str, Any]:
        return await self.request("GET", path)

    async def post(self, path: str, body: Any = None) -> dict[str, Any]:
        return await self.request("POST", path, body)

    async def delete(self, path: str) -> dict[str, Any]:
        return await self.request("DELETE", path)

    async def post_multipart(
        self,
        path: str,
        data: dict[str, str] | None = None,
        files: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """POST multipart/form-data.

        Content-Type não é definido aqui: o httpx gera o boundary.
        """
        url = self.build_url(path)
        response = await self._send(
            "POST",
            url,
            headers=self._build_headers(json_body=False),
            data=data,
            files=files,
        )
        return self._decode_json(response, "POST", url)

    async def request(self, method: str, path: str, body: Any = None) -> dict[str, Any]:
        """Executa request JSON e retorna o corpo decodificado.

        Raises:
            ValidationError: path vazio ou body não serializável em JSON
            NetworkError: timeout, falha de conexão ou 2xx com JSON inválido
            RateLimitError: HTTP 429
            ApiError: demais respostas não-2xx
        """
        url = self.build_url(path)
        kwargs: dict[str, Any] = {}
        if body is not None:
            try:
                kwargs["content"] = json.dumps(body).encode("utf-8")
            except (TypeError, ValueError) as exc:
                raise self._fail(
                    method,
                    url,
                    ValidationError(
                        f"body não serializável em JSON: {exc}",
                        field="body",
                    ),
                ) from exc
        response = await self._send(
            method,
            url,
            headers=self._build_headers(json_body=body is not None),
            **kwargs,
        )
        return self._decode_json(response, method, url)

    async def download(self, url: str) -> bytes:
        """Baixa conteúdo binário de URL absoluta (ex: CDN de mídia)."""
        if not url:
            raise ValidationError("url não pode ser vazia", field="url")
        response = await self._send(
            "GET",
            url,
            headers=self._build_headers(json_body=False),
        )
        return response.content

    def _build_headers(self, *, json_body: bool) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._config.access_token}",
            "User-Agent": self._config.user_agent or get_sdk_metadata().user_agent,
        }
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Executa a chamada e classifica o resultado."""
        self._hooks.on_request(method, url)
        started = time.perf_counter()
        try:
            # teto da chamada inteira; o timeout do httpx vale por fase
            response = await asyncio.wait_for(
                self._dispatch(method, url, **kwargs),
                timeout=self._config.timeout_seconds,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            raise self._fail(
                method,
                url,
                NetworkError(
                    f"Request timeout after {self._config.timeout_seconds}s",
                    cause=exc,
                ),
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            raise self._fail(
                method,
                url,
                NetworkError(f"Network request failed: {type(exc).__name__}", cause=exc),
            ) from exc

        if not response.is_success:
            raise self._fail(method, url, classify_error_response(response))

        elapsed_ms = (time.perf_counter() - started) * 1000
        self._hooks.on_response(method, url, response.status_code, elapsed_ms)
        return response

    async def _dispatch(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        timeout = self._config.timeout_seconds
        if self._http_client is not None:
            return await self._http_client.request(method, url, timeout=timeout, **kwargs)
        async with httpx.AsyncClient(verify=self._config.verify_ssl) as client:
            return await client.request(method, url, timeout=timeout, **kwargs)

    def _decode_json(self, response: httpx.Response, method: str, url: str) -> dict[str, Any]:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise self._fail(
                method,
                url,
                NetworkError("Response JSON inválido", cause=exc),
            ) from exc

    def _fail(self, method: str, url: str, error: WhatsAppError) -> WhatsAppError:
        self._hooks.on_error(method, url, error)
        return error
