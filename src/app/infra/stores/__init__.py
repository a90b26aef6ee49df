"""Stores: implementações concretas de persistência.

Módulos disponíveis:
    - chat_contact_store: Snapshot de chats/contatos em JSON
    - webhook_registry: Lista ordenada de URLs de webhook em JSON
    - credential_store: Estado de autenticação do provedor em JSON
    - memory_stores: Variantes em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.chat_contact_store import JsonChatContactStore
from app.infra.stores.credential_store import JsonFileCredentialStore
from app.infra.stores.memory_stores import (
    MemoryChatContactStore,
    MemoryCredentialStore,
    MemoryWebhookRegistry,
)
from app.infra.stores.webhook_registry import JsonWebhookRegistry

__all__ = [
    "JsonChatContactStore",
    "JsonFileCredentialStore",
    "JsonWebhookRegistry",
    "MemoryChatContactStore",
    "MemoryCredentialStore",
    "MemoryWebhookRegistry",
]
