"""Upload, consulta, download e remoção de mídia."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from wazapin.errors import ValidationError

if TYPE_CHECKING:
    from wazapin.http import GraphTransport

logger = logging.getLogger(__name__)

# Limites da Cloud API por tipo de mídia (bytes)
MAX_FILE_SIZES: dict[str, int] = {
    "image": 5 * 1024 * 1024,
    "video": 16 * 1024 * 1024,
    "audio": 16 * 1024 * 1024,
    "document": 100 * 1024 * 1024,
    "sticker": 500 * 1024,
}


@dataclass(frozen=True)
class MediaUrl:
    """Metadados retornados por ``GET /{media_id}``."""

    url: str
    mime_type: str
    sha256: str | None
    file_size: int | None


@dataclass(frozen=True)
class MediaDownload:
    """Conteúdo baixado e seus metadados."""

    content: bytes
    mime_type: str
    sha256: str | None
    file_size: int | None


def media_type_from_mime(mime_type: str) -> str:
    """Mapeia MIME type para a categoria usada nos limites de tamanho."""
    if mime_type.startswith("image/"):
        return "sticker" if mime_type == "image/webp" else "image"
    if mime_type.startswith("video/"):
        return "video"
    if mime_type.startswith("audio/"):
        return "audio"
    return "document"


def check_media_size(content: bytes, mime_type: str) -> None:
    """Raises ValidationError (field="file") se o arquivo exceder o limite."""
    media_type = media_type_from_mime(mime_type)
    max_size = MAX_FILE_SIZES[media_type]
    if len(content) > max_size:
        raise ValidationError(
            f"File size ({len(content)} bytes) exceeds maximum allowed size "
            f"for {media_type} ({max_size} bytes)",
            field="file",
        )


async def upload_media(
    transport: GraphTransport,
    phone_number_id: str,
    content: bytes,
    mime_type: str,
    filename: str = "file",
) -> dict[str, Any]:
    """Envia arquivo via multipart e retorna ``{"id": media_id}``."""
    if not mime_type:
        raise ValidationError("mime_type é obrigatório", field="mime_type")
    check_media_size(content, mime_type)

    return await transport.post_multipart(
        f"{phone_number_id}/media",
        data={"messaging_product": "whatsapp", "type": mime_type},
        files={"file": (filename, content, mime_type)},
    )


async def get_media_url(transport: GraphTransport, media_id: str) -> MediaUrl:
    if not media_id:
        raise ValidationError("media_id é obrigatório", field="media_id")
    data = await transport.get(media_id)
    return MediaUrl(
        url=data.get("url", ""),
        mime_type=data.get("mime_type", ""),
        sha256=data.get("sha256"),
        file_size=data.get("file_size"),
    )


async def download_media(transport: GraphTransport, media_id: str) -> MediaDownload:
    """Resolve a URL da mídia e baixa o conteúdo (a CDN exige o mesmo token)."""
    info = await get_media_url(transport, media_id)
    content = await transport.download(info.url)
    logger.debug(
        "media_downloaded",
        extra={"mime_type": info.mime_type, "size_bytes": len(content)},
    )
    return MediaDownload(
        content=content,
        mime_type=info.mime_type,
        sha256=info.sha256,
        file_size=info.file_size,
    )


async def delete_media(transport: GraphTransport, media_id: str) -> dict[str, Any]:
    if not media_id:
        raise ValidationError("media_id é obrigatório", field="media_id")
    return await transport.delete(media_id)
