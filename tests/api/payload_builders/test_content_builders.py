"""Testes dos builders de conteúdo outbound do provedor."""

from __future__ import annotations

import base64

import pytest

from api.payload_builders.provider import (
    build_message_content,
    build_vcard,
    decode_base64,
    get_content_builder,
    normalize_phone,
    selectable_count,
)
from api.payload_builders.provider.text import TextContentBuilder
from app.protocols.models import OutboundSendRequest
from utils.errors import ContentBuildError

PNG = base64.b64encode(b"\x89PNG").decode("ascii")


def _request(**fields) -> OutboundSendRequest:
    return OutboundSendRequest(chat_id="5511@s.whatsapp.net", **fields)


class TestPrecedence:
    def test_media_wins_over_every_other_kind(self) -> None:
        content = build_message_content(
            _request(
                text="ignored",
                media={"type": "image", "data": PNG},
                location={"latitude": 1},
                poll={"name": "p", "options": ["a"]},
                contact={"firstname": "A"},
            )
        )
        assert set(content) == {"image"}

    def test_location_before_poll_and_contact(self) -> None:
        content = build_message_content(
            _request(location={"latitude": 1}, poll={"name": "p"}, contact={"firstname": "A"})
        )
        assert "location" in content

    def test_poll_before_contact(self) -> None:
        content = build_message_content(_request(poll={"name": "p"}, contact={"firstname": "A"}))
        assert "poll" in content

    def test_text_is_fallback(self) -> None:
        assert build_message_content(_request(text="olá")) == {"text": "olá"}
        assert build_message_content(_request()) == {"text": ""}
        assert isinstance(get_content_builder(_request()), TextContentBuilder)

    def test_media_without_data_falls_through(self) -> None:
        content = build_message_content(
            _request(text="fallback", media={"type": "image", "data": ""})
        )
        assert content == {"text": "fallback"}


class TestMedia:
    def test_media_fields_are_mapped(self) -> None:
        content = build_message_content(
            _request(
                media={
                    "type": "document",
                    "data": PNG,
                    "caption": "nota",
                    "mimetype": "application/pdf",
                    "filename": "nota.pdf",
                }
            )
        )
        assert content == {
            "document": b"\x89PNG",
            "caption": "nota",
            "mimetype": "application/pdf",
            "fileName": "nota.pdf",
        }

    def test_audio_flags_are_kept(self) -> None:
        content = build_message_content(
            _request(media={"type": "audio", "data": PNG, "ptt": True})
        )
        assert content["ptt"] is True
        assert "caption" not in content

    def test_decode_base64_ignores_whitespace(self) -> None:
        assert decode_base64("YW\nJj ") == b"abc"

    def test_invalid_base64_raises(self) -> None:
        with pytest.raises(ContentBuildError):
            build_message_content(_request(media={"type": "image", "data": "@@not-base64@@"}))


class TestLocation:
    def test_coordinates_are_renamed_and_extras_kept(self) -> None:
        content = build_message_content(
            _request(
                location={
                    "latitude": -23.5,
                    "longitude": -46.6,
                    "name": "Escritório",
                    "address": "Av. Paulista",
                    "url": None,
                }
            )
        )
        location = content["location"]
        assert location["degreesLatitude"] == -23.5
        assert location["degreesLongitude"] == -46.6
        assert location["name"] == "Escritório"
        assert location["address"] == "Av. Paulista"
        assert location["latitude"] == -23.5


class TestPoll:
    @pytest.mark.parametrize(
        ("allow_multiple", "expected"),
        [(None, 0), (False, 0), (True, 3), (2, 2), (-1, 0), ("yes", 0)],
    )
    def test_selectable_count(self, allow_multiple: object, expected: int) -> None:
        assert selectable_count(allow_multiple, ["a", "b", "c"]) == expected

    def test_poll_content(self) -> None:
        content = build_message_content(
            _request(poll={"name": "Horário?", "options": ["9h", "14h"]})
        )
        assert content == {
            "poll": {"name": "Horário?", "values": ["9h", "14h"], "selectableCount": 0}
        }


class TestContact:
    def test_phone_is_normalized(self) -> None:
        assert normalize_phone("+123 4567") == "1234567"

    def test_contact_vcard(self) -> None:
        content = build_message_content(
            _request(
                contact={
                    "firstname": "A",
                    "lastname": "B",
                    "email": "a@b.example",
                    "phone": "+123 4567",
                }
            )
        )
        contacts = content["contacts"]
        assert contacts["displayName"] == "A B"
        vcard = contacts["contacts"][0]["vcard"]
        assert vcard == build_vcard("A", "B", "a@b.example", "1234567")
        assert "FN:A B\n" in vcard
        assert "TEL;type=CELL;type=VOICE;waid=1234567:1234567\n" in vcard
        assert vcard.startswith("BEGIN:VCARD\nVERSION:3.0\n")
        assert vcard.endswith("END:VCARD")
