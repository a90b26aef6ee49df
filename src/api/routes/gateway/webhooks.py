"""Registro de webhooks: listar, cadastrar e remover.

O índice exposto em DELETE é 1-based; 0 também remove a primeira URL.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.routes.gateway.deps import get_gateway
from app.bootstrap.dependencies import GatewayContainer  # noqa: TC001 (FastAPI resolve em runtime)

router = APIRouter()


class WebhookBody(BaseModel):
    url: str = ""


def to_internal_index(index: int) -> int:
    """Converte o índice 1-based da API na posição interna (0-based)."""
    return index - 1 if index > 0 else index


@router.get("/webhooks")
async def list_webhooks(gateway: GatewayContainer = Depends(get_gateway)) -> list[str]:
    return gateway.registry.list()


@router.post("/webhooks")
async def register_webhook(
    body: WebhookBody,
    gateway: GatewayContainer = Depends(get_gateway),
) -> dict[str, str]:
    await gateway.registry.insert_async(body.url)
    return {"url": body.url}


@router.delete("/webhooks/{index}")
async def delete_webhook(
    index: int,
    gateway: GatewayContainer = Depends(get_gateway),
) -> dict[str, Any]:
    await gateway.registry.delete_at_async(to_internal_index(index))
    return {"webhooks": gateway.registry.list()}
