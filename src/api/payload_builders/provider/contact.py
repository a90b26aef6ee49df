"""Builder para cartão de contato (vCard 3.0)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.provider.base import as_text

if TYPE_CHECKING:
    from app.protocols.models import OutboundSendRequest


def normalize_phone(phone: str) -> str:
    """Remove espaços e sinais de "+" do telefone."""
    return phone.replace(" ", "").replace("+", "")


def build_vcard(firstname: str, lastname: str, email: str, phone: str) -> str:
    """Monta o vCard; `waid` carrega o telefone normalizado."""
    display_name = f"{firstname} {lastname}"
    return (
        "BEGIN:VCARD\n"
        "VERSION:3.0\n"
        f"FN:{display_name}\n"
        f"EMAIL;TYPE=Work:{email}\n"
        f"TEL;type=CELL;type=VOICE;waid={phone}:{phone}\n"
        "END:VCARD"
    )


class ContactContentBuilder:
    """Um único contato embrulhado em conteúdo `contacts`."""

    def applies(self, request: OutboundSendRequest) -> bool:
        return bool(request.contact)

    def build(self, request: OutboundSendRequest) -> dict[str, Any]:
        contact = request.contact or {}
        firstname = as_text(contact.get("firstname"))
        lastname = as_text(contact.get("lastname"))
        email = as_text(contact.get("email"))
        phone = normalize_phone(as_text(contact.get("phone")))

        return {
            "contacts": {
                "displayName": f"{firstname} {lastname}",
                "contacts": [{"vcard": build_vcard(firstname, lastname, email, phone)}],
            }
        }
