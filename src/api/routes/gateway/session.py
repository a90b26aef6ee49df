"""Controle da sessão: start, QR, logout e stream SSE de conectividade."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from api.routes.gateway.deps import get_gateway
from app.bootstrap.dependencies import GatewayContainer  # noqa: TC001 (FastAPI resolve em runtime)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from app.protocols.models import ConnectivityNotice

logger = logging.getLogger(__name__)

router = APIRouter()


def format_sse(notice: ConnectivityNotice) -> str:
    """Serializa o aviso como um evento SSE (`data: {...}`)."""
    return f"data: {json.dumps(notice.to_dict(), ensure_ascii=False)}\n\n"


@router.get("/start")
async def start_session(gateway: GatewayContainer = Depends(get_gateway)) -> dict[str, Any]:
    """Abre a sessão (no-op se já conectada) e retorna o snapshot de pareamento."""
    snapshot = await gateway.session_manager.start()
    return snapshot.to_dict()


@router.get("/qr")
async def get_qr(gateway: GatewayContainer = Depends(get_gateway)) -> dict[str, Any]:
    return gateway.session_manager.get_current_pairing().to_dict()


@router.get("/logout")
async def logout(gateway: GatewayContainer = Depends(get_gateway)) -> dict[str, Any]:
    await gateway.session_manager.logout()
    return {}


@router.get("/sse")
async def connectivity_stream(
    request: Request,
    gateway: GatewayContainer = Depends(get_gateway),
) -> StreamingResponse:
    """Stream text/event-stream com os avisos de conectividade."""

    async def _events() -> AsyncIterator[str]:
        async for notice in gateway.broadcaster.stream():
            if await request.is_disconnected():
                break
            yield format_sse(notice)

    logger.info("sse_subscriber_connected")
    return StreamingResponse(
        _events(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
