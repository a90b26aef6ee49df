"""Protocolos de persistência (credenciais, webhooks, chats/contatos)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class CredentialStoreProtocol(ABC):
    """Par opaco load/save do estado de autenticação do provedor."""

    @abstractmethod
    async def load(self) -> Any | None: ...

    @abstractmethod
    async def save(self, state: Any) -> None: ...

    @abstractmethod
    async def clear(self) -> None: ...


class WebhookRegistryProtocol(ABC):
    """Lista ordenada de URLs de webhook.

    O índice exposto é a posição de inserção (0-based internamente).
    """

    @abstractmethod
    def list(self) -> list[str]: ...

    @abstractmethod
    def insert(self, url: str) -> None: ...

    @abstractmethod
    def delete_at(self, index: int) -> None: ...

    @abstractmethod
    async def insert_async(self, url: str) -> None: ...

    @abstractmethod
    async def delete_at_async(self, index: int) -> None: ...


class ChatContactStoreProtocol(ABC):
    """Snapshot acumulado de chats e contatos.

    Um único escritor (handler de histórico); sem deduplicação.
    """

    @abstractmethod
    def read(self) -> dict[str, list[Any]]: ...

    @abstractmethod
    def merge(self, new_chats: list[Any], new_contacts: list[Any]) -> None: ...

    @abstractmethod
    async def read_async(self) -> dict[str, list[Any]]: ...

    @abstractmethod
    async def merge_async(self, new_chats: list[Any], new_contacts: list[Any]) -> None: ...
