"""Rotas de controle do gateway (sessão, mensagens, webhooks, SSE)."""

from api.routes.gateway.messaging import router as messaging_router
from api.routes.gateway.session import router as session_router
from api.routes.gateway.webhooks import router as webhooks_router

__all__ = [
    "messaging_router",
    "session_router",
    "webhooks_router",
]
