"""Builder para localização."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.provider.base import copy_present

if TYPE_CHECKING:
    from app.protocols.models import OutboundSendRequest

_FIELDS = {
    "name": "name",
    "url": "url",
    "address": "address",
    "latitude": "degreesLatitude",
    "longitude": "degreesLongitude",
}


class LocationContentBuilder:
    """Localização; campos extras do pedido seguem verbatim."""

    def applies(self, request: OutboundSendRequest) -> bool:
        return bool(request.location)

    def build(self, request: OutboundSendRequest) -> dict[str, Any]:
        location = request.location or {}
        content: dict[str, Any] = dict(location)
        copy_present(content, location, _FIELDS)
        return {"location": content}
