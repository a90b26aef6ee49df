"""Contratos do cliente do provedor de mensagens.

O protocolo de fio do provedor é externo; o gateway só conhece esta
superfície. Listeners registrados via `on()` são corrotinas e devem
ser aguardadas pelo cliente na ordem dos eventos.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

Listener = Callable[[Any], Awaitable[None]]


class ProviderClientProtocol(Protocol):
    """Cliente conectado ao provedor (um por sessão)."""

    def on(self, event: str, listener: Listener) -> None: ...

    async def send_message(
        self,
        chat_id: str,
        content: dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> Any: ...

    async def send_presence_update(self, action: str, chat_id: str) -> None: ...

    async def fetch_status(self, chat_id: str) -> Any: ...

    async def profile_picture_url(self, chat_id: str, kind: str = "image") -> str | None: ...

    async def on_whatsapp(self, number: str) -> list[dict[str, Any]]: ...

    async def reject_call(self, call_id: str, caller: str) -> None: ...

    async def download_media(self, message: dict[str, Any]) -> bytes: ...

    async def logout(self) -> None: ...

    async def close(self) -> None: ...


class ProviderConnectorProtocol(Protocol):
    """Abre um cliente novo a partir das credenciais persistidas.

    `credentials` é None quando nenhum estado foi salvo ainda (o
    provedor então inicia um pareamento novo).

    Opcional: atributo `jid_classifier` (JidClassifierProtocol) com os
    predicados de JID do SDK; sem ele o gateway usa o classificador padrão.
    """

    async def __call__(self, credentials: Any | None) -> ProviderClientProtocol: ...


class JidClassifierProtocol(Protocol):
    """Predicados sobre identificadores de chat do provedor."""

    def is_broadcast(self, jid: str) -> bool: ...

    def is_status_broadcast(self, jid: str) -> bool: ...

    def is_newsletter(self, jid: str) -> bool: ...
