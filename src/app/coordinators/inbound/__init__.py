"""Roteamento de eventos inbound do provedor."""

from app.coordinators.inbound.media import MEDIA_MIME_PATHS, extract_media_mime_type
from app.coordinators.inbound.router import EventRouter

__all__ = [
    "MEDIA_MIME_PATHS",
    "EventRouter",
    "extract_media_mime_type",
]
