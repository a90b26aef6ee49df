"""Listagem de chats e contatos do snapshot local."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.protocols.stores import ChatContactStoreProtocol

logger = logging.getLogger(__name__)


class _SnapshotListing:
    _field = ""

    def __init__(self, store: ChatContactStoreProtocol) -> None:
        self._store = store

    async def execute(self) -> list[Any]:
        """Retorna a sequência armazenada; [] se o snapshot estiver ilegível."""
        try:
            snapshot = await self._store.read_async()
        except Exception as exc:
            logger.error(
                "snapshot_read_failed",
                extra={"field": self._field, "error_type": type(exc).__name__},
            )
            return []
        return list(snapshot.get(self._field, []))


class ListChatsUseCase(_SnapshotListing):
    _field = "chats"


class ListContactsUseCase(_SnapshotListing):
    _field = "contacts"
