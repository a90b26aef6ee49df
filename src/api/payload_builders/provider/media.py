"""Builder para mídia (image, video, document, audio, ...).

O conteúdo é indexado pelo próprio tipo informado no pedido:
{"image": <bytes>, "caption": ..., "mimetype": ...}.
"""

from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING, Any

from api.payload_builders.provider.base import as_text, copy_present
from utils.errors import ContentBuildError

if TYPE_CHECKING:
    from app.protocols.models import OutboundSendRequest

# Campo do pedido -> campo do conteúdo do provedor
_OPTIONAL_FIELDS = {
    "caption": "caption",
    "mimetype": "mimetype",
    "filename": "fileName",
    "ptt": "ptt",
    "gifPlayback": "gifPlayback",
}


def decode_base64(data: str) -> bytes:
    """Decodifica base64 (espaços e quebras de linha ignorados).

    Raises:
        ContentBuildError: Se `data` não for base64 válido.
    """
    compact = "".join(data.split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ContentBuildError("media.data não é base64 válido") from exc


class MediaContentBuilder:
    """Mídia com bytes inline decodificados de base64."""

    def applies(self, request: OutboundSendRequest) -> bool:
        media = request.media
        if not media:
            return False
        return bool(as_text(media.get("type"))) and bool(as_text(media.get("data")))

    def build(self, request: OutboundSendRequest) -> dict[str, Any]:
        media = request.media or {}
        media_type = as_text(media.get("type"))
        content: dict[str, Any] = {media_type: decode_base64(as_text(media.get("data")))}
        copy_present(content, media, _OPTIONAL_FIELDS)
        return content
