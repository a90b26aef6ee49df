"""Builders de conteúdo outbound do provedor."""

from api.payload_builders.provider.contact import build_vcard, normalize_phone
from api.payload_builders.provider.factory import (
    build_message_content,
    get_content_builder,
)
from api.payload_builders.provider.media import decode_base64
from api.payload_builders.provider.poll import selectable_count

__all__ = [
    "build_message_content",
    "build_vcard",
    "decode_base64",
    "get_content_builder",
    "normalize_phone",
    "selectable_count",
]
