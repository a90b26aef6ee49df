"""Consultas best-effort ao provedor (presença, status, foto, número).

Falhas do provedor ou ausência de sessão viram valores padrão; o
chamador sempre recebe um objeto bem formado.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.constants.provider import PresenceAction

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.provider_client import ProviderClientProtocol

logger = logging.getLogger(__name__)

# Tipo de foto de perfil pedido ao provedor (alta resolução)
PROFILE_PICTURE_KIND = "image"


class ProfileQueriesUseCase:
    """Operações de consulta sobre o cliente atual."""

    def __init__(self, client_provider: Callable[[], ProviderClientProtocol | None]) -> None:
        self._client_provider = client_provider

    async def simulate_presence(
        self,
        chat_id: str,
        action: str = PresenceAction.COMPOSING,
    ) -> dict[str, str]:
        client = self._client_provider()
        if client is not None:
            try:
                await client.send_presence_update(action, chat_id)
            except Exception as exc:
                logger.debug(
                    "presence_update_failed",
                    extra={"action": action, "error_type": type(exc).__name__},
                )
        return {"chatId": chat_id}

    async def get_profile_status(self, chat_id: str) -> dict[str, Any]:
        status: Any = {}
        client = self._client_provider()
        if client is not None:
            try:
                status = await client.fetch_status(chat_id)
            except Exception as exc:
                logger.debug("profile_status_failed", extra={"error_type": type(exc).__name__})
        return {"status": status if status is not None else {}}

    async def get_profile_picture(self, chat_id: str) -> dict[str, str]:
        url: str | None = ""
        client = self._client_provider()
        if client is not None:
            try:
                url = await client.profile_picture_url(chat_id, PROFILE_PICTURE_KIND)
            except Exception as exc:
                logger.debug("profile_picture_failed", extra={"error_type": type(exc).__name__})
        return {"url": url or ""}

    async def get_number_id(self, number: str) -> dict[str, Any]:
        """Primeiro resultado de onWhatsApp ({exists, jid}) ou {}."""
        client = self._client_provider()
        if client is None:
            return {}
        try:
            results = await client.on_whatsapp(number)
        except Exception as exc:
            logger.debug("number_lookup_failed", extra={"error_type": type(exc).__name__})
            return {}
        if not results:
            return {}
        first = results[0]
        return first if isinstance(first, dict) else {}
