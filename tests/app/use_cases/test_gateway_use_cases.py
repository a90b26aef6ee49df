"""Testes dos casos de uso expostos pela API REST."""

from __future__ import annotations

import base64
from pathlib import Path

import pytest

from api.payload_builders.provider import build_message_content
from app.infra.stores import JsonChatContactStore, MemoryChatContactStore
from app.protocols.models import OutboundSendRequest
from app.use_cases.gateway import (
    ListChatsUseCase,
    ListContactsUseCase,
    ProfileQueriesUseCase,
    SendMessageUseCase,
)
from tests.fakes.fake_provider import FakeProviderClient


@pytest.fixture
def client() -> FakeProviderClient:
    return FakeProviderClient()


class TestSendMessage:
    @pytest.mark.asyncio
    async def test_sends_built_content_and_returns_ack(self, client: FakeProviderClient) -> None:
        use_case = SendMessageUseCase(build_message_content, lambda: client)

        ack = await use_case.execute(
            OutboundSendRequest(chat_id="5511@s.whatsapp.net", text="oi", options={"quoted": None})
        )

        assert ack == client.send_ack
        assert client.sent == [("5511@s.whatsapp.net", {"text": "oi"}, {"quoted": None})]

    @pytest.mark.asyncio
    async def test_media_bytes_reach_the_client(self, client: FakeProviderClient) -> None:
        use_case = SendMessageUseCase(build_message_content, lambda: client)
        data = base64.b64encode(b"img").decode("ascii")

        await use_case.execute(
            OutboundSendRequest(chat_id="x", media={"type": "image", "data": data})
        )

        assert client.sent[0][1] == {"image": b"img"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "request_",
        [
            OutboundSendRequest(chat_id="", text="sem destino"),
            OutboundSendRequest(chat_id="x", media={"type": "image", "data": "%%%"}),
        ],
    )
    async def test_invalid_requests_return_empty(
        self,
        client: FakeProviderClient,
        request_: OutboundSendRequest,
    ) -> None:
        use_case = SendMessageUseCase(build_message_content, lambda: client)

        assert await use_case.execute(request_) == {}
        assert client.sent == []

    @pytest.mark.asyncio
    async def test_no_session_or_provider_error_returns_empty(
        self,
        client: FakeProviderClient,
    ) -> None:
        request = OutboundSendRequest(chat_id="x", text="oi")
        assert await SendMessageUseCase(build_message_content, lambda: None).execute(request) == {}

        client.send_error = ConnectionError("socket closed")
        use_case = SendMessageUseCase(build_message_content, lambda: client)
        assert await use_case.execute(request) == {}


class TestProfileQueries:
    @pytest.mark.asyncio
    async def test_queries_with_session(self, client: FakeProviderClient) -> None:
        queries = ProfileQueriesUseCase(lambda: client)

        assert await queries.simulate_presence("x") == {"chatId": "x"}
        assert client.presence_updates == [("composing", "x")]
        assert await queries.get_profile_status("x") == {"status": client.status}
        assert await queries.get_profile_picture("x") == {"url": client.picture_url}
        assert await queries.get_number_id("5511") == client.number_results[0]

    @pytest.mark.asyncio
    async def test_queries_without_session_return_defaults(self) -> None:
        queries = ProfileQueriesUseCase(lambda: None)

        assert await queries.simulate_presence("x", "paused") == {"chatId": "x"}
        assert await queries.get_profile_status("x") == {"status": {}}
        assert await queries.get_profile_picture("x") == {"url": ""}
        assert await queries.get_number_id("5511") == {}

    @pytest.mark.asyncio
    async def test_unknown_number_and_missing_picture(self, client: FakeProviderClient) -> None:
        client.number_results = []
        client.picture_url = None
        queries = ProfileQueriesUseCase(lambda: client)

        assert await queries.get_number_id("000") == {}
        assert await queries.get_profile_picture("x") == {"url": ""}


class TestListings:
    @pytest.mark.asyncio
    async def test_lists_snapshot_sequences(self) -> None:
        store = MemoryChatContactStore()
        store.merge([{"id": "x"}, {"id": "y"}], [{"id": "c"}])

        assert await ListChatsUseCase(store).execute() == [{"id": "x"}, {"id": "y"}]
        assert await ListContactsUseCase(store).execute() == [{"id": "c"}]

    @pytest.mark.asyncio
    async def test_corrupted_snapshot_lists_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "whatsapp_data.json"
        path.write_text("{broken", encoding="utf-8")
        store = JsonChatContactStore(path)

        assert await ListChatsUseCase(store).execute() == []
        assert await ListContactsUseCase(store).execute() == []
