"""Enums e textos do provedor de mensagens."""

from __future__ import annotations

from enum import StrEnum

from fsm.states import ConnectionState


class ProviderEvent(StrEnum):
    """Eventos registrados em cada cliente do provedor."""

    CREDENTIALS_UPDATE = "creds.update"
    CONNECTION_UPDATE = "connection.update"
    MESSAGES_UPSERT = "messages.upsert"
    CALL = "call"
    HISTORY_SET = "messaging-history.set"


class ConnectionStatus(StrEnum):
    """Valores de `connection` em connection.update."""

    OPEN = "open"
    CLOSE = "close"
    CONNECTING = "connecting"


class PresenceAction(StrEnum):
    """Ações de presença simuladas via /simulate."""

    UNAVAILABLE = "unavailable"
    AVAILABLE = "available"
    COMPOSING = "composing"
    RECORDING = "recording"
    PAUSED = "paused"


# Avisos publicados no stream de conectividade
ALREADY_CONNECTED_TEXT = "WhatsApp is already connected!"
RECONNECTING_TEXT = "Connection closed, attempting to reconnect..."
LOGGED_OUT_TEXT = "Connection closed, not reconnecting due to logout or invalid credentials"
CONNECTED_TEXT = "Connected to WhatsApp!"
DISCONNECTION_ERROR_TEMPLATE = "Disconnection error: {error}"
CONNECT_FAILED_TEMPLATE = "Connection failed: {error}"

# Texto do snapshot de pareamento (GET /qr) por estado
STATUS_TEXTS: dict[ConnectionState, str] = {
    ConnectionState.IDLE: "Session not started",
    ConnectionState.CONNECTING: "Connecting to WhatsApp...",
    ConnectionState.PAIRING_REQUIRED: "Scan the QR code to connect",
    ConnectionState.CONNECTED: CONNECTED_TEXT,
    ConnectionState.CLOSING: RECONNECTING_TEXT,
    ConnectionState.LOGGED_OUT: LOGGED_OUT_TEXT,
}
