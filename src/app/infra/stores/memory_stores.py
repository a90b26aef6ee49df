"""Stores em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Sem persistência entre reinícios; uma sessão pareada com
MemoryCredentialStore precisa de novo QR após restart.
"""

from __future__ import annotations

import copy
from typing import Any

from app.protocols.stores import (
    ChatContactStoreProtocol,
    CredentialStoreProtocol,
    WebhookRegistryProtocol,
)


class MemoryChatContactStore(ChatContactStoreProtocol):
    """Snapshot de chats/contatos em memória: apenas para dev/test."""

    def __init__(self) -> None:
        self._chats: list[Any] = []
        self._contacts: list[Any] = []

    def read(self) -> dict[str, list[Any]]:
        return {"chats": list(self._chats), "contacts": list(self._contacts)}

    def merge(self, new_chats: list[Any], new_contacts: list[Any]) -> None:
        self._chats = [*self._chats, *new_chats]
        self._contacts = [*self._contacts, *new_contacts]

    async def read_async(self) -> dict[str, list[Any]]:
        return self.read()

    async def merge_async(self, new_chats: list[Any], new_contacts: list[Any]) -> None:
        self.merge(new_chats, new_contacts)


class MemoryWebhookRegistry(WebhookRegistryProtocol):
    """Registro de webhooks em memória: apenas para dev/test."""

    def __init__(self, urls: list[str] | None = None) -> None:
        self._urls: list[str] = [u for u in (urls or []) if u]

    def list(self) -> list[str]:
        return list(self._urls)

    def insert(self, url: str) -> None:
        if url:
            self._urls.append(url)

    def delete_at(self, index: int) -> None:
        if 0 <= index < len(self._urls):
            del self._urls[index]

    async def insert_async(self, url: str) -> None:
        self.insert(url)

    async def delete_at_async(self, index: int) -> None:
        self.delete_at(index)


class MemoryCredentialStore(CredentialStoreProtocol):
    """Estado de autenticação em memória: apenas para dev/test."""

    def __init__(self, state: Any | None = None) -> None:
        self._state = state
        self.save_count = 0

    async def load(self) -> Any | None:
        return copy.deepcopy(self._state)

    async def save(self, state: Any) -> None:
        self._state = copy.deepcopy(state)
        self.save_count += 1

    async def clear(self) -> None:
        self._state = None
