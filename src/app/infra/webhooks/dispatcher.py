"""WebhookDispatcher: fan-out fire-and-forget de payloads JSON.

Cada URL recebe sua própria task: uma falha em um destino não afeta
os demais e nunca volta para quem chamou deliver().
"""

from __future__ import annotations

import logging
import time
from typing import Any

from app.infra.http import HttpClient, HttpError
from app.infra.runtime_tasks import TrackedTaskRunner
from app.protocols.webhook_dispatcher import WebhookDispatcherProtocol

logger = logging.getLogger(__name__)


class WebhookDispatcher(WebhookDispatcherProtocol):
    """Entrega payloads a uma lista de URLs em paralelo."""

    def __init__(self, http_client: HttpClient, max_concurrency: int = 50) -> None:
        self._http = http_client
        self._runner = TrackedTaskRunner("webhook_delivery", max_concurrency)

    @property
    def pending(self) -> int:
        return self._runner.active_count

    def deliver(self, urls: list[str], payload: dict[str, Any]) -> None:
        """Agenda um POST por URL e retorna imediatamente."""
        for url in urls:
            if url:
                self._runner.schedule(self._post(url, payload), kind="webhook_post")

    async def _post(self, url: str, payload: dict[str, Any]) -> None:
        start = time.perf_counter()
        try:
            response = await self._http.post_json(url, payload)
        except HttpError as exc:
            logger.warning(
                "webhook_delivery_failed",
                extra={
                    "webhook_host": _host_of(url),
                    "status_code": exc.status_code,
                    "error": str(exc),
                    "latency_ms": round((time.perf_counter() - start) * 1000, 1),
                },
            )
            return
        except Exception as exc:
            logger.exception(
                "webhook_delivery_error",
                extra={"webhook_host": _host_of(url), "error_type": type(exc).__name__},
            )
            return

        logger.info(
            "webhook_delivered",
            extra={
                "webhook_host": _host_of(url),
                "status_code": response.status_code,
                "latency_ms": round((time.perf_counter() - start) * 1000, 1),
            },
        )

    async def drain(self, timeout: float | None = 30.0) -> None:
        await self._runner.drain(timeout)


def _host_of(url: str) -> str:
    """Host da URL para logs (sem path/query, que podem conter tokens)."""
    without_scheme = url.split("://", 1)[-1]
    return without_scheme.split("/", 1)[0].split("?", 1)[0]
