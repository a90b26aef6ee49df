"""Stream de avisos de conectividade (pareamento, conexão, queda).

O SessionManager publica; o endpoint SSE consome. Cada assinante tem
sua fila; um assinante lento perde os avisos mais antigos, nunca
bloqueia quem publica. O último aviso é repassado a quem assina depois.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from app.protocols.models import ConnectivityNotice

logger = logging.getLogger(__name__)


class ConnectivityBroadcaster:
    """Fan-out em memória de ConnectivityNotice."""

    def __init__(self, queue_size: int = 100) -> None:
        self._queue_size = queue_size
        self._subscribers: set[asyncio.Queue[ConnectivityNotice]] = set()
        self._last_notice: ConnectivityNotice | None = None

    @property
    def last_notice(self) -> ConnectivityNotice | None:
        return self._last_notice

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, notice: ConnectivityNotice) -> None:
        self._last_notice = notice
        for queue in list(self._subscribers):
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(notice)
        logger.debug(
            "connectivity_notice_published",
            extra={
                "has_qr": bool(notice.qr),
                "text": notice.text,
                "subscribers": len(self._subscribers),
            },
        )

    def subscribe(self) -> asyncio.Queue[ConnectivityNotice]:
        queue: asyncio.Queue[ConnectivityNotice] = asyncio.Queue(maxsize=self._queue_size)
        if self._last_notice is not None:
            queue.put_nowait(self._last_notice)
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[ConnectivityNotice]) -> None:
        self._subscribers.discard(queue)

    async def stream(self) -> AsyncIterator[ConnectivityNotice]:
        """Itera os avisos até o consumidor desistir (desconexão do cliente SSE)."""
        queue = self.subscribe()
        try:
            while True:
                yield await queue.get()
        finally:
            self.unsubscribe(queue)
