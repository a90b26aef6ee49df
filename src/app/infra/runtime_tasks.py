"""Tasks em background com limite de concorrência e drenagem no shutdown.

Usado pelo EventRouter (lotes, chamadas, históricos) e pelo
WebhookDispatcher (um POST por URL).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Coroutine

logger = logging.getLogger(__name__)


class TrackedTaskRunner:
    """Agenda corrotinas como tasks rastreadas, no máximo `limit` em paralelo.

    A task é criada imediatamente (quem agenda nunca espera); o semáforo
    limita quantas executam ao mesmo tempo.
    """

    def __init__(self, name: str, limit: int) -> None:
        self._name = name
        self._semaphore = asyncio.Semaphore(max(1, limit))
        self._active: set[asyncio.Task[Any]] = set()

    @property
    def active_count(self) -> int:
        return len(self._active)

    def schedule(self, coroutine: Coroutine[Any, Any, None], *, kind: str = "") -> asyncio.Task[Any]:
        task = asyncio.create_task(self._run_with_limit(coroutine))
        self._active.add(task)
        task.add_done_callback(lambda t: self._on_done(t, kind))
        logger.debug(
            "runtime_task_scheduled",
            extra={"runner": self._name, "kind": kind, "active_tasks": len(self._active)},
        )
        return task

    async def _run_with_limit(self, coroutine: Coroutine[Any, Any, None]) -> None:
        async with self._semaphore:
            await coroutine

    def _on_done(self, task: asyncio.Task[Any], kind: str) -> None:
        self._active.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "runtime_task_failed",
                    extra={
                        "runner": self._name,
                        "kind": kind,
                        "error_type": type(exc).__name__,
                        "active_tasks": len(self._active),
                    },
                )

    async def drain(self, timeout: float | None = 30.0) -> None:
        """Aguarda as tasks pendentes; cancela as que passarem do timeout."""
        if not self._active:
            return

        pending_now = list(self._active)
        logger.info(
            "runtime_tasks_shutdown_wait",
            extra={
                "runner": self._name,
                "pending_tasks": len(pending_now),
                "timeout_seconds": timeout,
            },
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout)
        if not pending:
            return

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "runtime_tasks_shutdown_cancelled",
            extra={"runner": self._name, "cancelled_tasks": len(pending)},
        )
