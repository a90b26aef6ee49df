"""Builder para mensagens de texto."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.provider.base import as_text

if TYPE_CHECKING:
    from app.protocols.models import OutboundSendRequest


class TextContentBuilder:
    """Texto simples; fallback quando nenhum outro tipo se aplica.

    Texto vazio é aceito: quem valida conteúdo é o provedor.
    """

    def applies(self, request: OutboundSendRequest) -> bool:
        return True

    def build(self, request: OutboundSendRequest) -> dict[str, Any]:
        return {"text": as_text(request.text)}
