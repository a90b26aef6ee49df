"""Protocolo de entrega de webhooks."""

from __future__ import annotations

from typing import Any, Protocol


class WebhookDispatcherProtocol(Protocol):
    """Entrega fire-and-forget: deliver() nunca bloqueia nem levanta."""

    def deliver(self, urls: list[str], payload: dict[str, Any]) -> None: ...

    async def drain(self, timeout: float | None = None) -> None: ...
