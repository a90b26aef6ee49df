"""Entrypoint do gateway provedor → webhooks.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from app.bootstrap import get_gateway, initialize_app, validate_runtime_settings
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from app.bootstrap.dependencies import GatewayContainer

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

SHUTDOWN_DRAIN_SECONDS = 30.0


async def _shutdown(gateway: GatewayContainer, router_task: asyncio.Task[None]) -> None:
    """Encerra na ordem: sessão, fila de eventos, loop do roteador, entregas, HTTP."""
    await gateway.session_manager.stop()

    # Eventos ainda na fila (credenciais, lotes, históricos) são processados
    # antes de parar o loop.
    try:
        await asyncio.wait_for(gateway.router.join(), timeout=SHUTDOWN_DRAIN_SECONDS)
    except TimeoutError:
        logger.warning(
            "event_queue_drain_timeout",
            extra={"pending_events": gateway.router.queue_depth},
        )

    router_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await router_task

    await gateway.router.drain(timeout=SHUTDOWN_DRAIN_SECONDS)
    await gateway.dispatcher.drain(timeout=SHUTDOWN_DRAIN_SECONDS)
    await gateway.http_client.aclose()


def create_app(gateway: GatewayContainer | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        gateway: Container pronto (testes); se None, é montado a partir
            das settings no startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Startup: valida settings, sobe o loop do EventRouter e,
        se configurado, abre a sessão. Shutdown: drena tasks pendentes.
        """
        base = get_base_settings()
        logger.info("app_starting", extra={"environment": base.environment})
        if gateway is None:
            validate_runtime_settings()
        container = gateway or get_gateway()
        app.state.gateway = container
        app.state.service_name = base.service_name

        router_task = asyncio.create_task(container.router.run(), name="event_router")
        if container.settings.auto_start:
            await container.session_manager.start()

        yield

        logger.info("app_shutting_down")
        await _shutdown(container, router_task)

    fastapi_app = FastAPI(
        title="wa-webhook-gateway",
        description="Ponte entre a sessão do provedor de mensagens e webhooks HTTP",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured")

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting wa-webhook-gateway in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
