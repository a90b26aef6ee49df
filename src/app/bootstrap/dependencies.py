"""Factories: criação das implementações concretas do gateway.

Centraliza o wiring: stores conforme GATEWAY_STORE_BACKEND, cliente
HTTP e dispatcher, roteador de eventos, SessionManager e casos de uso.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from api.connectors.provider import load_connector, resolve_jid_classifier
from api.payload_builders.provider import build_message_content
from app.coordinators.inbound import EventRouter
from app.infra.http import HttpClient, HttpClientConfig
from app.infra.stores import (
    JsonChatContactStore,
    JsonFileCredentialStore,
    JsonWebhookRegistry,
    MemoryChatContactStore,
    MemoryCredentialStore,
    MemoryWebhookRegistry,
)
from app.infra.webhooks import WebhookDispatcher
from app.observability.connectivity import ConnectivityBroadcaster
from app.sessions import SessionManager
from app.use_cases.gateway import (
    ListChatsUseCase,
    ListContactsUseCase,
    ProfileQueriesUseCase,
    SendMessageUseCase,
)

if TYPE_CHECKING:
    import httpx

    from app.protocols.provider_client import (
        JidClassifierProtocol,
        ProviderClientProtocol,
        ProviderConnectorProtocol,
    )
    from app.protocols.stores import (
        ChatContactStoreProtocol,
        CredentialStoreProtocol,
        WebhookRegistryProtocol,
    )
    from config.settings import GatewaySettings

logger = logging.getLogger(__name__)


@dataclass
class GatewayContainer:
    """Grafo de objetos do processo (um por app)."""

    settings: GatewaySettings
    http_client: HttpClient
    dispatcher: WebhookDispatcher
    registry: WebhookRegistryProtocol
    chat_store: ChatContactStoreProtocol
    credential_store: CredentialStoreProtocol
    broadcaster: ConnectivityBroadcaster
    router: EventRouter
    session_manager: SessionManager
    send_message: SendMessageUseCase
    profile_queries: ProfileQueriesUseCase
    list_chats: ListChatsUseCase
    list_contacts: ListContactsUseCase


# ──────────────────────────────────────────────────────────────────────────────
# Store Factories
# ──────────────────────────────────────────────────────────────────────────────


def create_webhook_registry(settings: GatewaySettings) -> WebhookRegistryProtocol:
    if settings.store_backend == "memory":
        logger.warning("store_backend_memory", extra={"store": "webhooks"})
        return MemoryWebhookRegistry()
    return JsonWebhookRegistry(settings.webhooks_file)


def create_chat_contact_store(settings: GatewaySettings) -> ChatContactStoreProtocol:
    if settings.store_backend == "memory":
        return MemoryChatContactStore()
    return JsonChatContactStore(settings.chats_file)


def create_credential_store(settings: GatewaySettings) -> CredentialStoreProtocol:
    if settings.store_backend == "memory":
        return MemoryCredentialStore()
    return JsonFileCredentialStore(settings.credentials_file)


# ──────────────────────────────────────────────────────────────────────────────
# Container
# ──────────────────────────────────────────────────────────────────────────────


def create_gateway(
    settings: GatewaySettings,
    *,
    connector: ProviderConnectorProtocol | None = None,
    registry: WebhookRegistryProtocol | None = None,
    chat_store: ChatContactStoreProtocol | None = None,
    credential_store: CredentialStoreProtocol | None = None,
    classifier: JidClassifierProtocol | None = None,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> GatewayContainer:
    """Monta o gateway completo.

    Dependências explícitas têm precedência sobre as criadas a partir
    das settings (usado em testes e em embeddings do gateway).

    Raises:
        ProviderConnectorError: connector ausente e GATEWAY_PROVIDER_CONNECTOR inválido.
    """
    connector = connector or load_connector(settings.provider_connector)
    registry = registry or create_webhook_registry(settings)
    chat_store = chat_store or create_chat_contact_store(settings)
    credential_store = credential_store or create_credential_store(settings)
    classifier = classifier or resolve_jid_classifier(connector)

    http_client = HttpClient(
        HttpClientConfig(
            timeout_seconds=settings.webhook_timeout_seconds,
            max_retries=settings.webhook_max_retries,
            backoff_base_seconds=settings.webhook_backoff_seconds,
        ),
        transport=http_transport,
    )
    dispatcher = WebhookDispatcher(http_client, max_concurrency=settings.webhook_max_concurrency)
    broadcaster = ConnectivityBroadcaster()

    router = EventRouter(
        registry=registry,
        dispatcher=dispatcher,
        chat_store=chat_store,
        credential_store=credential_store,
        classifier=classifier,
        queue_size=settings.event_queue_size,
        max_concurrent_batches=settings.max_concurrent_batches,
        reject_calls=settings.reject_calls,
    )
    session_manager = SessionManager(
        connector=connector,
        credential_store=credential_store,
        router=router,
        broadcaster=broadcaster,
    )

    def current_client() -> ProviderClientProtocol | None:
        return session_manager.client

    return GatewayContainer(
        settings=settings,
        http_client=http_client,
        dispatcher=dispatcher,
        registry=registry,
        chat_store=chat_store,
        credential_store=credential_store,
        broadcaster=broadcaster,
        router=router,
        session_manager=session_manager,
        send_message=SendMessageUseCase(build_message_content, current_client),
        profile_queries=ProfileQueriesUseCase(current_client),
        list_chats=ListChatsUseCase(chat_store),
        list_contacts=ListContactsUseCase(chat_store),
    )
