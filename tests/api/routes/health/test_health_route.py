"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
from starlette.requests import Request

from api.routes.health.router import health_check, readiness_check
from fsm import ConnectionState


def _build_request_with_state(state: SimpleNamespace) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/ready",
        "raw_path": b"/ready",
        "query_string": b"",
        "headers": [],
        "app": SimpleNamespace(state=state),
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, _receive)


def _gateway(connected: bool) -> SimpleNamespace:
    session_manager = SimpleNamespace(
        is_connected=connected,
        state=ConnectionState.CONNECTED if connected else ConnectionState.PAIRING_REQUIRED,
        describe=lambda: {"current_state": "CONNECTED" if connected else "PAIRING_REQUIRED"},
    )
    return SimpleNamespace(
        session_manager=session_manager,
        router=SimpleNamespace(queue_depth=0, active_tasks=1),
        dispatcher=SimpleNamespace(pending=2),
    )


@pytest.mark.asyncio
async def test_readiness_returns_not_ready_without_gateway() -> None:
    response = await readiness_check(_build_request_with_state(SimpleNamespace()))
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["status"] == "not_ready"
    assert payload["checks"]["provider_session"]["status"] == "failed"


@pytest.mark.asyncio
async def test_readiness_returns_not_ready_while_pairing() -> None:
    request = _build_request_with_state(SimpleNamespace(gateway=_gateway(connected=False)))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["checks"]["provider_session"]["state"] == "PAIRING_REQUIRED"


@pytest.mark.asyncio
async def test_readiness_returns_ready_when_connected() -> None:
    request = _build_request_with_state(SimpleNamespace(gateway=_gateway(connected=True)))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"
    assert payload["checks"]["event_queue"] == {"depth": 0, "active_tasks": 1}
    assert payload["checks"]["webhooks"]["pending_deliveries"] == 2


@pytest.mark.asyncio
async def test_health_includes_connection_summary() -> None:
    request = _build_request_with_state(
        SimpleNamespace(gateway=_gateway(connected=True), service_name="wa_gateway")
    )

    response = await health_check(request)

    assert response.status == "healthy"
    assert response.service == "wa_gateway"
    assert response.connection == {"current_state": "CONNECTED"}
