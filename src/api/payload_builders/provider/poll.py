"""Builder para enquetes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.provider.base import as_text

if TYPE_CHECKING:
    from app.protocols.models import OutboundSendRequest


def selectable_count(allow_multiple: Any, options: list[Any]) -> int:
    """Quantidade de opções selecionáveis.

    0 = resposta única (padrão). True libera todas as opções; um inteiro
    é usado como limite.
    """
    if allow_multiple is True:
        return len(options)
    if isinstance(allow_multiple, int) and not isinstance(allow_multiple, bool):
        return max(0, allow_multiple)
    return 0


class PollContentBuilder:
    """Enquete com nome, opções e limite de seleção."""

    def applies(self, request: OutboundSendRequest) -> bool:
        return bool(request.poll)

    def build(self, request: OutboundSendRequest) -> dict[str, Any]:
        poll = request.poll or {}
        raw_options = poll.get("options")
        options = list(raw_options) if isinstance(raw_options, list | tuple) else []
        return {
            "poll": {
                "name": as_text(poll.get("name")),
                "values": options,
                "selectableCount": selectable_count(poll.get("allowMultipleAnswers"), options),
            }
        }
