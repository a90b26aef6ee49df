"""Factory: escolhe exatamente um builder por pedido.

Precedência: media → location → poll → contact → texto.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.provider.contact import ContactContentBuilder
from api.payload_builders.provider.location import LocationContentBuilder
from api.payload_builders.provider.media import MediaContentBuilder
from api.payload_builders.provider.poll import PollContentBuilder
from api.payload_builders.provider.text import TextContentBuilder

if TYPE_CHECKING:
    from api.payload_builders.provider.base import ContentBuilder
    from app.protocols.models import OutboundSendRequest

# Ordem = precedência; texto é o fallback
_BUILDERS: tuple[ContentBuilder, ...] = (
    MediaContentBuilder(),
    LocationContentBuilder(),
    PollContentBuilder(),
    ContactContentBuilder(),
)

_TEXT_BUILDER = TextContentBuilder()


def get_content_builder(request: OutboundSendRequest) -> ContentBuilder:
    """Retorna o primeiro builder aplicável ao pedido."""
    for builder in _BUILDERS:
        if builder.applies(request):
            return builder
    return _TEXT_BUILDER


def build_message_content(request: OutboundSendRequest) -> dict[str, Any]:
    """Constrói o conteúdo do provedor para o pedido.

    Raises:
        ContentBuildError: Se o conteúdo não puder ser formado.
    """
    return get_content_builder(request).build(request)
