"""Resolução do MIME type de mídia inline em mensagens do provedor."""

from __future__ import annotations

from typing import Any

# Ordem de sondagem; o primeiro mimetype não-vazio vence.
# Subtipos fora desta lista (ex: sticker) contam como "sem mídia".
MEDIA_MIME_PATHS: tuple[tuple[str, ...], ...] = (
    ("imageMessage",),
    ("audioMessage",),
    ("videoMessage",),
    ("documentMessage",),
    ("documentWithCaptionMessage", "message", "documentMessage"),
)


def extract_media_mime_type(message: dict[str, Any]) -> str:
    """Retorna o mimetype da mídia da mensagem, ou "" se não houver."""
    body = message.get("message")
    if not isinstance(body, dict):
        return ""

    for path in MEDIA_MIME_PATHS:
        node: Any = body
        for key in path:
            node = node.get(key) if isinstance(node, dict) else None
        if isinstance(node, dict):
            mime_type = node.get("mimetype")
            if isinstance(mime_type, str) and mime_type:
                return mime_type
    return ""
