"""Agregador de rotas.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.gateway import messaging_router, session_router, webhooks_router
from api.routes.health.router import router as health_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados."""
    api_router = APIRouter()

    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(session_router, tags=["session"])
    api_router.include_router(messaging_router, tags=["messaging"])
    api_router.include_router(webhooks_router, tags=["webhooks"])

    return api_router
