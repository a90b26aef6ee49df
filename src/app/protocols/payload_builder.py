"""Protocolos de construção de conteúdo outbound."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .models import OutboundSendRequest


class ContentBuilderProtocol(Protocol):
    """Mapeia um pedido genérico em exatamente um conteúdo do provedor."""

    def __call__(self, request: OutboundSendRequest) -> dict[str, Any]: ...
