"""Modelos compartilhados entre provedor, roteamento e casos de uso.

Eventos inbound formam uma união etiquetada (InboundEvent). Registros
do provedor (mensagens, chats, contatos, chamadas) são mantidos como
dicts opacos: o gateway só lê os campos de que precisa e entrega o
restante verbatim aos webhooks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ──────────────────────────────────────────────────────────────
# Eventos inbound
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class CredentialsUpdated:
    """Provedor alterou o estado de autenticação (persistir verbatim)."""

    state: Any


@dataclass(frozen=True, slots=True)
class ConnectionUpdated:
    """Mudança de conectividade reportada pelo provedor.

    Attributes:
        connection: "open" | "close" | "connecting" | None
        qr: Código de pareamento emitido (quando houver)
        error: Erro do último desligamento (só em close)
    """

    connection: str | None = None
    qr: str | None = None
    error: Any = None

    @classmethod
    def from_raw(cls, raw: Any) -> ConnectionUpdated:
        """Aceita o dict do provedor ({connection, qr, lastDisconnect: {error}})."""
        if isinstance(raw, ConnectionUpdated):
            return raw
        data = raw if isinstance(raw, dict) else {}
        last_disconnect = data.get("lastDisconnect") or data.get("last_disconnect") or {}
        error = (
            last_disconnect.get("error")
            if isinstance(last_disconnect, dict)
            else getattr(last_disconnect, "error", None)
        )
        qr = data.get("qr")
        return cls(
            connection=data.get("connection"),
            qr=qr if isinstance(qr, str) and qr else None,
            error=error,
        )


@dataclass(frozen=True, slots=True)
class MessagesUpserted:
    """Lote de mensagens (type "notify" = recebidas online)."""

    messages: list[dict[str, Any]] = field(default_factory=list)
    type: str | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> MessagesUpserted:
        data = raw if isinstance(raw, dict) else {}
        messages = data.get("messages")
        return cls(
            messages=[m for m in messages if isinstance(m, dict)]
            if isinstance(messages, list)
            else [],
            type=data.get("type"),
        )


@dataclass(frozen=True, slots=True)
class CallReceived:
    """Chamadas recebidas (o provedor entrega uma ou várias)."""

    calls: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Any) -> CallReceived:
        items = raw if isinstance(raw, list) else [raw]
        return cls(calls=[c for c in items if isinstance(c, dict)])


@dataclass(frozen=True, slots=True)
class HistorySet:
    """Snapshot histórico de chats e contatos."""

    chats: list[Any] = field(default_factory=list)
    contacts: list[Any] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Any) -> HistorySet:
        data = raw if isinstance(raw, dict) else {}
        return cls(
            chats=list(data.get("chats") or []),
            contacts=list(data.get("contacts") or []),
        )


InboundEvent = CredentialsUpdated | ConnectionUpdated | MessagesUpserted | CallReceived | HistorySet


# ──────────────────────────────────────────────────────────────
# Webhooks
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MediaRef:
    """Mídia inline de uma mensagem.

    mime_type vazio significa que nenhum download foi feito.
    """

    mime_type: str = ""
    data: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"mimeType": self.mime_type, "data": self.data}


def build_message_payload(
    message: dict[str, Any],
    message_type: str | None,
    media: MediaRef,
) -> dict[str, Any]:
    """Monta o payload de webhook de uma mensagem recebida."""
    sender = (message.get("key") or {}).get("remoteJid")
    return {
        "messageType": message_type,
        "message": {**message, "from": sender},
        "media": media.to_dict(),
    }


def build_call_payload(call: dict[str, Any]) -> dict[str, Any]:
    return {"call": call}


# ──────────────────────────────────────────────────────────────
# Outbound
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class OutboundSendRequest:
    """Pedido genérico de envio.

    Apenas um de media/location/poll/contact é honrado, nessa ordem de
    precedência; sem nenhum deles o envio é texto simples.
    """

    chat_id: str = ""
    text: str | None = None
    options: dict[str, Any] | None = None
    media: dict[str, Any] | None = None
    location: dict[str, Any] | None = None
    poll: dict[str, Any] | None = None
    contact: dict[str, Any] | None = None

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> OutboundSendRequest:
        """Converte o corpo REST (camelCase) no pedido interno."""

        def _mapping(key: str) -> dict[str, Any] | None:
            value = data.get(key)
            return value if isinstance(value, dict) else None

        chat_id = data.get("chatId")
        text = data.get("text")
        return cls(
            chat_id=chat_id if isinstance(chat_id, str) else "",
            text=text if isinstance(text, str) else None,
            options=_mapping("options"),
            media=_mapping("media"),
            location=_mapping("location"),
            poll=_mapping("poll"),
            contact=_mapping("contact"),
        )


# ──────────────────────────────────────────────────────────────
# Conectividade
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ConnectivityNotice:
    """Aviso emitido ao stream de conectividade (SSE)."""

    text: str = ""
    qr: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"qr": self.qr, "text": self.text}


@dataclass(frozen=True, slots=True)
class PairingSnapshot:
    """Estado de pareamento consultado por polling (GET /qr)."""

    qr: str
    text: str
    connected: bool

    def to_dict(self) -> dict[str, Any]:
        return {"qr": self.qr, "text": self.text, "connected": self.connected}
