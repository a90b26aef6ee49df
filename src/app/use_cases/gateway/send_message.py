"""Use case para envio de mensagens pelo provedor."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from utils.errors import ContentBuildError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.models import OutboundSendRequest
    from app.protocols.payload_builder import ContentBuilderProtocol
    from app.protocols.provider_client import ProviderClientProtocol

logger = logging.getLogger(__name__)


class SendMessageUseCase:
    """Orquestra build do conteúdo e envio pelo cliente atual.

    Nunca levanta: qualquer falha (chatId vazio, conteúdo inválido, sem
    sessão, erro do provedor) resulta em {} = "não enviado".
    """

    def __init__(
        self,
        builder: ContentBuilderProtocol,
        client_provider: Callable[[], ProviderClientProtocol | None],
    ) -> None:
        self._builder = builder
        self._client_provider = client_provider

    async def execute(self, request: OutboundSendRequest) -> Any:
        """Retorna o ack do provedor ou {} quando nada foi enviado."""
        if not request.chat_id:
            logger.info("send_message_rejected", extra={"reason": "missing_chat_id"})
            return {}

        try:
            content = self._builder(request)
        except ContentBuildError as exc:
            logger.info(
                "send_message_rejected",
                extra={"reason": "content_build_error", "error": str(exc)},
            )
            return {}

        client = self._client_provider()
        if client is None:
            logger.warning("send_message_rejected", extra={"reason": "no_session"})
            return {}

        try:
            ack = await client.send_message(request.chat_id, content, request.options)
        except Exception as exc:
            logger.warning(
                "send_message_failed",
                extra={"error_type": type(exc).__name__, "content_kind": _kind_of(content)},
            )
            return {}

        logger.info("send_message_sent", extra={"content_kind": _kind_of(content)})
        return ack if ack is not None else {}


def _kind_of(content: dict[str, Any]) -> str:
    """Chave principal do conteúdo (text, image, location, ...) para logs."""
    return next(iter(content), "")
