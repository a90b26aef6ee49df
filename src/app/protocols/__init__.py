"""Protocolos e contratos do core da aplicação."""

from .models import (
    CallReceived,
    ConnectionUpdated,
    ConnectivityNotice,
    CredentialsUpdated,
    HistorySet,
    InboundEvent,
    MediaRef,
    MessagesUpserted,
    OutboundSendRequest,
    PairingSnapshot,
    build_call_payload,
    build_message_payload,
)
from .payload_builder import ContentBuilderProtocol
from .provider_client import (
    JidClassifierProtocol,
    Listener,
    ProviderClientProtocol,
    ProviderConnectorProtocol,
)
from .stores import (
    ChatContactStoreProtocol,
    CredentialStoreProtocol,
    WebhookRegistryProtocol,
)
from .webhook_dispatcher import WebhookDispatcherProtocol

__all__ = [
    "CallReceived",
    "ChatContactStoreProtocol",
    "ConnectionUpdated",
    "ConnectivityNotice",
    "ContentBuilderProtocol",
    "CredentialStoreProtocol",
    "CredentialsUpdated",
    "HistorySet",
    "InboundEvent",
    "JidClassifierProtocol",
    "Listener",
    "MediaRef",
    "MessagesUpserted",
    "OutboundSendRequest",
    "PairingSnapshot",
    "ProviderClientProtocol",
    "ProviderConnectorProtocol",
    "WebhookDispatcherProtocol",
    "WebhookRegistryProtocol",
    "build_call_payload",
    "build_message_payload",
]
