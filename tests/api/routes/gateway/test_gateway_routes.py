"""Testes da superfície REST do gateway (TestClient com stores em memória)."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from api.routes.gateway.session import format_sse
from api.routes.gateway.webhooks import to_internal_index
from app.app import _shutdown, create_app
from app.bootstrap.dependencies import GatewayContainer, create_gateway
from app.infra.stores import MemoryChatContactStore, MemoryWebhookRegistry
from app.protocols.models import ConnectivityNotice, CredentialsUpdated
from config.settings import GatewaySettings
from fsm import ConnectionState
from tests.fakes.fake_provider import FakeConnector


@pytest.fixture
def connector() -> FakeConnector:
    return FakeConnector()


@pytest.fixture
def gateway(connector: FakeConnector) -> GatewayContainer:
    chat_store = MemoryChatContactStore()
    chat_store.merge([{"id": "5511@s.whatsapp.net", "name": "Ana"}], [{"id": "c1"}])
    return create_gateway(
        GatewaySettings(store_backend="memory"),
        connector=connector,
        registry=MemoryWebhookRegistry(),
        chat_store=chat_store,
        http_transport=httpx.MockTransport(lambda request: httpx.Response(200)),
    )


@pytest.fixture
def client(gateway: GatewayContainer):
    with TestClient(create_app(gateway)) as test_client:
        yield test_client


class TestWebhookRoutes:
    def test_index_mapping(self) -> None:
        assert to_internal_index(1) == 0
        assert to_internal_index(3) == 2
        assert to_internal_index(0) == 0

    def test_register_list_and_delete(self, client: TestClient) -> None:
        assert client.get("/webhooks").json() == []

        response = client.post("/webhooks", json={"url": "https://a.example/hook"})
        assert response.json() == {"url": "https://a.example/hook"}
        client.post("/webhooks", json={"url": "https://b.example/hook"})
        client.post("/webhooks", json={"url": "https://c.example/hook"})

        assert client.delete("/webhooks/2").json() == {
            "webhooks": ["https://a.example/hook", "https://c.example/hook"]
        }
        assert client.delete("/webhooks/0").json() == {"webhooks": ["https://c.example/hook"]}
        assert client.delete("/webhooks/7").json() == {"webhooks": ["https://c.example/hook"]}


class TestSessionRoutes:
    def test_start_qr_and_logout(
        self,
        client: TestClient,
        gateway: GatewayContainer,
        connector: FakeConnector,
    ) -> None:
        assert client.get("/qr").json() == {
            "qr": "",
            "text": "Session not started",
            "connected": False,
        }

        started = client.get("/start").json()
        assert started["connected"] is False
        assert started["text"] == "Connecting to WhatsApp..."
        assert connector.calls == 1

        assert client.get("/logout").json() == {}
        assert gateway.session_manager.state == ConnectionState.LOGGED_OUT
        assert connector.clients[0].logout_called is True

    def test_shutdown_stops_session(
        self,
        gateway: GatewayContainer,
        connector: FakeConnector,
    ) -> None:
        with TestClient(create_app(gateway)) as test_client:
            test_client.get("/start")

        assert gateway.session_manager.state == ConnectionState.IDLE
        assert connector.clients[0].closed is True

    @pytest.mark.asyncio
    async def test_shutdown_processes_queued_events(self, gateway: GatewayContainer) -> None:
        router_task = asyncio.create_task(gateway.router.run())
        await gateway.router.submit(CredentialsUpdated(state={"v": 2}), object())

        await _shutdown(gateway, router_task)

        assert await gateway.credential_store.load() == {"v": 2}
        assert gateway.router.queue_depth == 0
        assert router_task.done()

    def test_format_sse(self) -> None:
        frame = format_sse(ConnectivityNotice(qr="QR-1"))
        assert frame.startswith("data: ")
        assert frame.endswith("\n\n")
        assert json.loads(frame[len("data: "):]) == {"qr": "QR-1", "text": ""}


class TestMessagingRoutes:
    def test_send_without_session_returns_empty(self, client: TestClient) -> None:
        response = client.post("/message", json={"chatId": "5511@s.whatsapp.net", "text": "oi"})
        assert response.status_code == 200
        assert response.json() == {}

    def test_send_with_session_returns_ack(
        self,
        client: TestClient,
        connector: FakeConnector,
    ) -> None:
        client.get("/start")
        provider = connector.last_client
        provider.send_ack = {"key": {"id": "ACK"}, "messageSecret": b"\x01"}

        response = client.post(
            "/message",
            json={
                "chatId": "5511@s.whatsapp.net",
                "poll": {"name": "Horário?", "options": ["9h", "14h"], "allowMultipleAnswers": True},
            },
        )

        assert response.json() == {"key": {"id": "ACK"}, "messageSecret": "AQ=="}
        chat_id, content, _ = provider.sent[0]
        assert chat_id == "5511@s.whatsapp.net"
        assert content["poll"]["selectableCount"] == 2

    def test_profile_and_number_queries(self, client: TestClient, connector: FakeConnector) -> None:
        assert client.get("/profile/picture/5511").json() == {"url": ""}

        client.get("/start")

        assert client.post("/simulate", json={"chatId": "5511"}).json() == {"chatId": "5511"}
        assert connector.last_client.presence_updates == [("composing", "5511")]
        assert client.get("/profile/status/5511").json() == {
            "status": {"status": "Disponível"}
        }
        assert client.get("/profile/picture/5511").json() == {
            "url": "https://pps.example/pic.jpg"
        }
        assert client.get("/number/5511").json() == {
            "exists": True,
            "jid": "5511@s.whatsapp.net",
        }

    def test_chats_and_contacts(self, client: TestClient) -> None:
        assert client.get("/chats").json() == [{"id": "5511@s.whatsapp.net", "name": "Ana"}]
        assert client.get("/contacts").json() == [{"id": "c1"}]
