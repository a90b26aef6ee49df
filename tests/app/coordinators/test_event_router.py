"""Testes do EventRouter (mensagens, chamadas, históricos e credenciais)."""

from __future__ import annotations

import asyncio
import base64
from typing import Any

import pytest

from api.connectors.provider import DefaultJidClassifier
from app.coordinators.inbound import EventRouter, extract_media_mime_type
from app.infra.stores import (
    MemoryChatContactStore,
    MemoryCredentialStore,
    MemoryWebhookRegistry,
)
from app.protocols.models import (
    CallReceived,
    ConnectionUpdated,
    CredentialsUpdated,
    HistorySet,
    MessagesUpserted,
)
from tests.fakes.fake_provider import FakeProviderClient, build_message

HOOK = "https://hooks.example/inbound"


class RecordingDispatcher:
    """Dispatcher fake: guarda (urls, payload) na ordem de entrega."""

    def __init__(self) -> None:
        self.deliveries: list[tuple[list[str], dict[str, Any]]] = []

    def deliver(self, urls: list[str], payload: dict[str, Any]) -> None:
        self.deliveries.append((list(urls), payload))

    async def drain(self, timeout: float | None = None) -> None:
        return None

    @property
    def payloads(self) -> list[dict[str, Any]]:
        return [payload for _, payload in self.deliveries]


class FailingCredentialStore(MemoryCredentialStore):
    async def save(self, state: Any) -> None:
        raise OSError("disk full")


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def registry() -> MemoryWebhookRegistry:
    return MemoryWebhookRegistry([HOOK])


@pytest.fixture
def chat_store() -> MemoryChatContactStore:
    return MemoryChatContactStore()


@pytest.fixture
def credential_store() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture
def router(
    registry: MemoryWebhookRegistry,
    dispatcher: RecordingDispatcher,
    chat_store: MemoryChatContactStore,
    credential_store: MemoryCredentialStore,
) -> EventRouter:
    return EventRouter(
        registry=registry,
        dispatcher=dispatcher,
        chat_store=chat_store,
        credential_store=credential_store,
        classifier=DefaultJidClassifier(),
    )


@pytest.fixture
def client() -> FakeProviderClient:
    return FakeProviderClient()


def _image(message_id: str, mime_type: str = "image/jpeg") -> dict[str, Any]:
    return build_message(
        message_id,
        content={"imageMessage": {"mimetype": mime_type, "caption": "foto"}},
    )


class TestMediaMimeType:
    def test_mime_lookup_order_and_nested_document(self) -> None:
        assert extract_media_mime_type(_image("1")) == "image/jpeg"
        nested = build_message(
            "2",
            content={
                "documentWithCaptionMessage": {
                    "message": {"documentMessage": {"mimetype": "application/pdf"}}
                }
            },
        )
        assert extract_media_mime_type(nested) == "application/pdf"

    def test_no_media_or_empty_mimetype_returns_empty(self) -> None:
        assert extract_media_mime_type(build_message("3")) == ""
        assert extract_media_mime_type(_image("4", mime_type="")) == ""
        assert extract_media_mime_type({"key": {}}) == ""


class TestMessages:
    """Filtragem, mídia e ordem de entrega de messages.upsert."""

    @pytest.mark.asyncio
    async def test_text_message_payload_shape(
        self,
        router: EventRouter,
        dispatcher: RecordingDispatcher,
        client: FakeProviderClient,
    ) -> None:
        message = build_message("M1")
        await router.handle_messages(
            MessagesUpserted(messages=[message], type="notify"), client
        )

        assert dispatcher.deliveries == [
            (
                [HOOK],
                {
                    "messageType": "notify",
                    "message": {**message, "from": "5511999998888@s.whatsapp.net"},
                    "media": {"mimeType": "", "data": ""},
                },
            )
        ]

    @pytest.mark.asyncio
    async def test_filters_own_empty_and_broadcast_messages_in_order(
        self,
        router: EventRouter,
        dispatcher: RecordingDispatcher,
        client: FakeProviderClient,
    ) -> None:
        batch = [
            build_message("own", from_me=True),
            build_message("status", remote_jid="status@broadcast"),
            build_message("A"),
            build_message("list", remote_jid="12345@broadcast"),
            build_message("news", remote_jid="99@newsletter"),
            {"key": {"id": "empty", "remoteJid": "1@s.whatsapp.net"}, "message": None},
            build_message("B", remote_jid="1203@g.us"),
        ]

        await router.handle_messages(MessagesUpserted(messages=batch, type="notify"), client)

        delivered = [p["message"]["key"]["id"] for p in dispatcher.payloads]
        assert delivered == ["A", "B"]
        assert dispatcher.payloads[1]["message"]["from"] == "1203@g.us"

    @pytest.mark.asyncio
    async def test_media_is_downloaded_and_base64_encoded(
        self,
        router: EventRouter,
        dispatcher: RecordingDispatcher,
        client: FakeProviderClient,
    ) -> None:
        client.media["IMG"] = b"\x89PNG-bytes"

        await router.handle_messages(
            MessagesUpserted(messages=[_image("IMG", "image/png")], type="notify"), client
        )

        assert dispatcher.payloads[0]["media"] == {
            "mimeType": "image/png",
            "data": base64.b64encode(b"\x89PNG-bytes").decode("ascii"),
        }

    @pytest.mark.asyncio
    async def test_media_failure_only_affects_its_message(
        self,
        router: EventRouter,
        dispatcher: RecordingDispatcher,
        client: FakeProviderClient,
    ) -> None:
        client.media["OK"] = b"abc"
        client.failing_media.add("BAD")

        await router.handle_messages(
            MessagesUpserted(messages=[_image("BAD"), _image("OK")], type="notify"), client
        )

        medias = [p["media"] for p in dispatcher.payloads]
        assert medias == [
            {"mimeType": "image/jpeg", "data": ""},
            {"mimeType": "image/jpeg", "data": "YWJj"},
        ]

    @pytest.mark.asyncio
    async def test_without_webhooks_nothing_is_downloaded(
        self,
        dispatcher: RecordingDispatcher,
        chat_store: MemoryChatContactStore,
        credential_store: MemoryCredentialStore,
        client: FakeProviderClient,
    ) -> None:
        router = EventRouter(
            registry=MemoryWebhookRegistry(),
            dispatcher=dispatcher,
            chat_store=chat_store,
            credential_store=credential_store,
            classifier=DefaultJidClassifier(),
        )
        client.failing_media.add("IMG")

        await router.handle_messages(
            MessagesUpserted(messages=[_image("IMG")], type="notify"), client
        )

        assert dispatcher.deliveries == []

    @pytest.mark.asyncio
    async def test_payload_goes_to_every_registered_url(
        self,
        router: EventRouter,
        registry: MemoryWebhookRegistry,
        dispatcher: RecordingDispatcher,
        client: FakeProviderClient,
    ) -> None:
        registry.insert("https://hooks.example/second")

        await router.handle_messages(
            MessagesUpserted(messages=[build_message("M")], type="append"), client
        )

        urls, payload = dispatcher.deliveries[0]
        assert urls == [HOOK, "https://hooks.example/second"]
        assert payload["messageType"] == "append"


class TestCallsAndHistory:
    @pytest.mark.asyncio
    async def test_calls_are_rejected_then_forwarded(
        self,
        router: EventRouter,
        dispatcher: RecordingDispatcher,
        client: FakeProviderClient,
    ) -> None:
        call = {"id": "CALL-1", "from": "5511@s.whatsapp.net", "status": "offer"}

        await router.handle_calls(CallReceived.from_raw([call]), client)

        assert client.rejected_calls == [("CALL-1", "5511@s.whatsapp.net")]
        assert dispatcher.payloads == [{"call": call}]

    @pytest.mark.asyncio
    async def test_calls_not_rejected_when_disabled(
        self,
        registry: MemoryWebhookRegistry,
        dispatcher: RecordingDispatcher,
        chat_store: MemoryChatContactStore,
        credential_store: MemoryCredentialStore,
        client: FakeProviderClient,
    ) -> None:
        router = EventRouter(
            registry=registry,
            dispatcher=dispatcher,
            chat_store=chat_store,
            credential_store=credential_store,
            classifier=DefaultJidClassifier(),
            reject_calls=False,
        )

        await router.handle_calls(CallReceived.from_raw({"id": "C", "from": "x"}), client)

        assert client.rejected_calls == []
        assert len(dispatcher.payloads) == 1

    @pytest.mark.asyncio
    async def test_history_is_appended_to_snapshot(
        self,
        router: EventRouter,
        chat_store: MemoryChatContactStore,
    ) -> None:
        chat_store.merge([{"id": "x"}], [])

        await router.handle_history(HistorySet(chats=[{"id": "y"}], contacts=[{"id": "c1"}]))
        await router.handle_history(HistorySet())

        assert chat_store.read() == {
            "chats": [{"id": "x"}, {"id": "y"}],
            "contacts": [{"id": "c1"}],
        }


class TestEventLoop:
    """submit() + run(): ordem das credenciais e isolamento de falhas."""

    @pytest.mark.asyncio
    async def test_loop_processes_events_in_arrival_order(
        self,
        router: EventRouter,
        dispatcher: RecordingDispatcher,
        credential_store: MemoryCredentialStore,
        client: FakeProviderClient,
    ) -> None:
        loop_task = asyncio.create_task(router.run())
        try:
            await router.submit(CredentialsUpdated(state={"v": 1}), client)
            await router.submit(ConnectionUpdated(connection="open"), client)
            await router.submit(CredentialsUpdated(state={"v": 2}), client)
            await router.submit(
                MessagesUpserted(messages=[build_message("M")], type="notify"), client
            )
            await router.join()
        finally:
            loop_task.cancel()
            await asyncio.gather(loop_task, return_exceptions=True)

        assert await credential_store.load() == {"v": 2}
        assert credential_store.save_count == 2
        assert len(dispatcher.payloads) == 1
        assert router.queue_depth == 0

    @pytest.mark.asyncio
    async def test_credential_save_failure_does_not_stop_loop(
        self,
        registry: MemoryWebhookRegistry,
        dispatcher: RecordingDispatcher,
        chat_store: MemoryChatContactStore,
        client: FakeProviderClient,
    ) -> None:
        router = EventRouter(
            registry=registry,
            dispatcher=dispatcher,
            chat_store=chat_store,
            credential_store=FailingCredentialStore(),
            classifier=DefaultJidClassifier(),
        )
        loop_task = asyncio.create_task(router.run())
        try:
            await router.submit(CredentialsUpdated(state={"v": 1}), client)
            await router.submit(
                MessagesUpserted(messages=[build_message("after")], type="notify"), client
            )
            await router.join()
        finally:
            loop_task.cancel()
            await asyncio.gather(loop_task, return_exceptions=True)

        assert [p["message"]["key"]["id"] for p in dispatcher.payloads] == ["after"]
