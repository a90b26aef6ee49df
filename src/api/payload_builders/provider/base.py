"""Base dos builders de conteúdo outbound do provedor."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.protocols.models import OutboundSendRequest


class ContentBuilder(Protocol):
    """Builder de um tipo de conteúdo.

    `applies` decide se o pedido é deste tipo; `build` monta o conteúdo.
    """

    def applies(self, request: OutboundSendRequest) -> bool: ...

    def build(self, request: OutboundSendRequest) -> dict[str, Any]: ...


def as_text(value: Any) -> str:
    """Converte valores opcionais em string ("" para None)."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def copy_present(target: dict[str, Any], source: dict[str, Any], fields: dict[str, str]) -> None:
    """Copia `source[origem]` para `target[destino]` apenas quando presente (não None)."""
    for source_key, target_key in fields.items():
        value = source.get(source_key)
        if value is not None:
            target[target_key] = value
