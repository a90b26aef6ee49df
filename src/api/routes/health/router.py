"""Endpoints de health check."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"
    connection: dict[str, Any] | None = None


def _service_name(request: Request) -> str:
    return getattr(request.app.state, "service_name", "wa_gateway")


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Liveness: o processo responde; inclui o estado da conexão."""
    gateway = getattr(request.app.state, "gateway", None)
    return HealthResponse(
        status="healthy",
        service=_service_name(request),
        timestamp=datetime.now(UTC).isoformat(),
        connection=gateway.session_manager.describe() if gateway is not None else None,
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness: pronto quando a sessão com o provedor está conectada."""
    gateway = getattr(request.app.state, "gateway", None)
    connected = gateway is not None and gateway.session_manager.is_connected
    payload = {
        "status": "ready" if connected else "not_ready",
        "checks": {
            "provider_session": {
                "status": "ok" if connected else "failed",
                "state": gateway.session_manager.state.name if gateway is not None else None,
            },
            "event_queue": {
                "depth": gateway.router.queue_depth if gateway is not None else None,
                "active_tasks": gateway.router.active_tasks if gateway is not None else None,
            },
            "webhooks": {
                "pending_deliveries": gateway.dispatcher.pending if gateway is not None else None,
            },
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if connected else 503)
