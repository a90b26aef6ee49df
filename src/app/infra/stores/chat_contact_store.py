"""Snapshot de chats e contatos em arquivo JSON.

Formato: {"chats": [...], "contacts": [...]}. merge() faz
leitura-concatenação-escrita sem deduplicar; assume um único escritor.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from app.infra.stores.json_file import read_json, write_json_atomic
from app.protocols.stores import ChatContactStoreProtocol
from utils.errors import StoreCorruptedError

logger = logging.getLogger(__name__)


def _empty_snapshot() -> dict[str, list[Any]]:
    return {"chats": [], "contacts": []}


class JsonChatContactStore(ChatContactStoreProtocol):
    """Store de chats/contatos persistido em um único arquivo JSON."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict[str, list[Any]]:
        """Retorna {chats, contacts}; sequências vazias sem snapshot.

        Raises:
            StoreCorruptedError: Arquivo ilegível ou com formato inesperado.
        """
        data = read_json(self._path, default=None)
        if data is None:
            return _empty_snapshot()
        if not isinstance(data, dict):
            raise StoreCorruptedError(f"Snapshot {self._path.name} não é um objeto JSON")

        chats = data.get("chats", [])
        contacts = data.get("contacts", [])
        if not isinstance(chats, list) or not isinstance(contacts, list):
            raise StoreCorruptedError(f"Snapshot {self._path.name} com chats/contacts inválidos")
        return {"chats": chats, "contacts": contacts}

    def merge(self, new_chats: list[Any], new_contacts: list[Any]) -> None:
        """Acrescenta chats/contatos ao snapshot e regrava o arquivo."""
        current = self.read()
        chats = [*current["chats"], *new_chats]
        contacts = [*current["contacts"], *new_contacts]
        write_json_atomic(self._path, {"chats": chats, "contacts": contacts})
        logger.info(
            "chat_contact_snapshot_merged",
            extra={
                "new_chats": len(new_chats),
                "new_contacts": len(new_contacts),
                "total_chats": len(chats),
                "total_contacts": len(contacts),
            },
        )

    async def read_async(self) -> dict[str, list[Any]]:
        return await asyncio.to_thread(self.read)

    async def merge_async(self, new_chats: list[Any], new_contacts: list[Any]) -> None:
        await asyncio.to_thread(self.merge, new_chats, new_contacts)
