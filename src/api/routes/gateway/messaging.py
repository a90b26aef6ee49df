"""Envio de mensagens, presença, perfis, números e listagens."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.routes.gateway.deps import ProviderJSONResponse, get_gateway
from app.bootstrap.dependencies import GatewayContainer  # noqa: TC001 (FastAPI resolve em runtime)
from app.constants.provider import PresenceAction
from app.protocols.models import OutboundSendRequest

router = APIRouter()


class SendMessageBody(BaseModel):
    """Corpo de POST /message (campos do provedor em camelCase)."""

    chatId: str = ""
    text: str | None = None
    options: dict[str, Any] | None = None
    media: dict[str, Any] | None = None
    location: dict[str, Any] | None = None
    poll: dict[str, Any] | None = None
    contact: dict[str, Any] | None = None


class SimulateBody(BaseModel):
    chatId: str = ""
    action: str = PresenceAction.COMPOSING


@router.post("/message")
async def send_message(
    body: SendMessageBody,
    gateway: GatewayContainer = Depends(get_gateway),
) -> ProviderJSONResponse:
    """Retorna o ack do provedor ou {} quando a mensagem não foi enviada."""
    request = OutboundSendRequest.from_mapping(body.model_dump())
    return ProviderJSONResponse(await gateway.send_message.execute(request))


@router.post("/simulate")
async def simulate_presence(
    body: SimulateBody,
    gateway: GatewayContainer = Depends(get_gateway),
) -> dict[str, str]:
    return await gateway.profile_queries.simulate_presence(body.chatId, body.action)


@router.get("/profile/status/{chat_id}")
async def profile_status(
    chat_id: str,
    gateway: GatewayContainer = Depends(get_gateway),
) -> ProviderJSONResponse:
    return ProviderJSONResponse(await gateway.profile_queries.get_profile_status(chat_id))


@router.get("/profile/picture/{chat_id}")
async def profile_picture(
    chat_id: str,
    gateway: GatewayContainer = Depends(get_gateway),
) -> dict[str, str]:
    return await gateway.profile_queries.get_profile_picture(chat_id)


@router.get("/number/{number_id}")
async def number_id(
    number_id: str,
    gateway: GatewayContainer = Depends(get_gateway),
) -> ProviderJSONResponse:
    return ProviderJSONResponse(await gateway.profile_queries.get_number_id(number_id))


@router.get("/chats")
async def list_chats(gateway: GatewayContainer = Depends(get_gateway)) -> ProviderJSONResponse:
    return ProviderJSONResponse(await gateway.list_chats.execute())


@router.get("/contacts")
async def list_contacts(gateway: GatewayContainer = Depends(get_gateway)) -> ProviderJSONResponse:
    return ProviderJSONResponse(await gateway.list_contacts.execute())
