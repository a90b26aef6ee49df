"""EventRouter: classifica eventos do provedor e entrega aos webhooks.

Eventos chegam por submit() (chamado pelos listeners do cliente) e são
consumidos por um único loop (run()). Credenciais são persistidas pelo
próprio listener do cliente (handle_credentials), antes do evento seguinte.
Lotes de mensagens, chamadas e históricos viram tasks com paralelismo
limitado. Dentro de um lote, downloads de mídia rodam em paralelo e os
payloads saem na ordem do lote.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import TYPE_CHECKING, Any

from app.coordinators.inbound.media import extract_media_mime_type
from app.infra.runtime_tasks import TrackedTaskRunner
from app.observability.correlation import correlation_scope
from app.protocols.models import (
    CallReceived,
    CredentialsUpdated,
    HistorySet,
    MediaRef,
    MessagesUpserted,
    build_call_payload,
    build_message_payload,
)

if TYPE_CHECKING:
    from app.protocols.models import InboundEvent
    from app.protocols.provider_client import JidClassifierProtocol, ProviderClientProtocol
    from app.protocols.stores import (
        ChatContactStoreProtocol,
        CredentialStoreProtocol,
        WebhookRegistryProtocol,
    )
    from app.protocols.webhook_dispatcher import WebhookDispatcherProtocol

logger = logging.getLogger(__name__)


class EventRouter:
    """Roteia eventos inbound do provedor.

    Args:
        registry: Lista de URLs de webhook
        dispatcher: Entrega fire-and-forget
        chat_store: Snapshot de chats/contatos (históricos)
        credential_store: Persistência do estado de autenticação
        classifier: Predicados de broadcast/status/newsletter
        queue_size: Capacidade da fila (submit aguarda quando cheia)
        max_concurrent_batches: Lotes/chamadas/históricos em paralelo
        reject_calls: Rejeitar chamadas recebidas antes de entregar
    """

    def __init__(
        self,
        *,
        registry: WebhookRegistryProtocol,
        dispatcher: WebhookDispatcherProtocol,
        chat_store: ChatContactStoreProtocol,
        credential_store: CredentialStoreProtocol,
        classifier: JidClassifierProtocol,
        queue_size: int = 1000,
        max_concurrent_batches: int = 8,
        reject_calls: bool = True,
    ) -> None:
        self._registry = registry
        self._dispatcher = dispatcher
        self._chat_store = chat_store
        self._credential_store = credential_store
        self._classifier = classifier
        self._reject_calls = reject_calls
        self._queue: asyncio.Queue[tuple[InboundEvent, ProviderClientProtocol]] = asyncio.Queue(
            maxsize=queue_size
        )
        self._runner = TrackedTaskRunner("inbound_events", max_concurrent_batches)
        self._history_lock = asyncio.Lock()

    @property
    def queue_depth(self) -> int:
        return self._queue.qsize()

    @property
    def active_tasks(self) -> int:
        return self._runner.active_count

    # ──────────────────────────────────────────────────────────────
    # Fila
    # ──────────────────────────────────────────────────────────────

    async def submit(self, event: InboundEvent, client: ProviderClientProtocol) -> None:
        """Enfileira um evento emitido por `client`."""
        await self._queue.put((event, client))

    async def run(self) -> None:
        """Loop consumidor único; roda até ser cancelado."""
        logger.info("event_router_started")
        try:
            while True:
                event, client = await self._queue.get()
                try:
                    await self.route(event, client)
                except Exception:
                    logger.exception(
                        "event_routing_failed",
                        extra={"event_type": type(event).__name__},
                    )
                finally:
                    self._queue.task_done()
        finally:
            logger.info("event_router_stopped", extra={"pending_events": self._queue.qsize()})

    async def join(self) -> None:
        """Aguarda a fila esvaziar e as tasks já agendadas terminarem."""
        await self._queue.join()
        await self._runner.drain(timeout=None)

    async def drain(self, timeout: float | None = 30.0) -> None:
        await self._runner.drain(timeout)

    async def route(self, event: InboundEvent, client: ProviderClientProtocol) -> None:
        """Despacha um evento já retirado da fila (um correlation_id por evento)."""
        with correlation_scope():
            if isinstance(event, CredentialsUpdated):
                await self.handle_credentials(event)
            elif isinstance(event, MessagesUpserted):
                self._runner.schedule(self.handle_messages(event, client), kind="messages")
            elif isinstance(event, CallReceived):
                self._runner.schedule(self.handle_calls(event, client), kind="call")
            elif isinstance(event, HistorySet):
                self._runner.schedule(self.handle_history(event), kind="history")
            else:
                logger.warning(
                    "event_type_unsupported",
                    extra={"event_type": type(event).__name__},
                )

    # ──────────────────────────────────────────────────────────────
    # Handlers
    # ──────────────────────────────────────────────────────────────

    async def handle_credentials(self, event: CredentialsUpdated) -> None:
        """Persiste o estado de autenticação; falhas são logadas."""
        try:
            await self._credential_store.save(event.state)
        except Exception as exc:
            logger.error(
                "credentials_save_failed",
                extra={"error_type": type(exc).__name__},
            )

    async def handle_messages(
        self,
        event: MessagesUpserted,
        client: ProviderClientProtocol,
    ) -> None:
        """Filtra o lote, resolve mídias e entrega cada mensagem em ordem."""
        urls = self._registry.list()
        if not urls:
            logger.debug(
                "messages_skipped_no_webhooks",
                extra={"batch_size": len(event.messages)},
            )
            return

        deliverable = [m for m in event.messages if self._is_deliverable(m)]
        if not deliverable:
            return

        medias = await asyncio.gather(
            *(self._resolve_media(message, client) for message in deliverable)
        )

        delivered = 0
        for message, media in zip(deliverable, medias, strict=True):
            try:
                payload = build_message_payload(message, event.type, media)
                self._dispatcher.deliver(urls, payload)
                delivered += 1
            except Exception as exc:
                logger.warning(
                    "message_delivery_skipped",
                    extra={"error_type": type(exc).__name__},
                )

        logger.info(
            "messages_routed",
            extra={
                "batch_size": len(event.messages),
                "delivered": delivered,
                "filtered": len(event.messages) - len(deliverable),
                "webhook_count": len(urls),
                "message_type": event.type,
            },
        )

    async def handle_calls(self, event: CallReceived, client: ProviderClientProtocol) -> None:
        for call in event.calls:
            if self._reject_calls:
                await self._reject_call(call, client)
            urls = self._registry.list()
            if urls:
                self._dispatcher.deliver(urls, build_call_payload(call))

    async def handle_history(self, event: HistorySet) -> None:
        if not event.chats and not event.contacts:
            return
        async with self._history_lock:
            try:
                await self._chat_store.merge_async(event.chats, event.contacts)
            except Exception as exc:
                logger.error(
                    "history_merge_failed",
                    extra={
                        "error_type": type(exc).__name__,
                        "chats": len(event.chats),
                        "contacts": len(event.contacts),
                    },
                )

    # ──────────────────────────────────────────────────────────────
    # Helpers
    # ──────────────────────────────────────────────────────────────

    def _is_deliverable(self, message: dict[str, Any]) -> bool:
        """Mensagens próprias, vazias ou de broadcast/status/newsletter ficam de fora."""
        try:
            key = message.get("key") or {}
            if key.get("fromMe") or not message.get("message"):
                return False
            jid = key.get("remoteJid") or ""
            return not (
                self._classifier.is_status_broadcast(jid)
                or self._classifier.is_newsletter(jid)
                or self._classifier.is_broadcast(jid)
            )
        except Exception as exc:
            logger.warning(
                "message_classification_failed",
                extra={"error_type": type(exc).__name__},
            )
            return False

    async def _resolve_media(
        self,
        message: dict[str, Any],
        client: ProviderClientProtocol,
    ) -> MediaRef:
        mime_type = extract_media_mime_type(message)
        if not mime_type:
            return MediaRef()
        try:
            content = await client.download_media(message)
        except Exception as exc:
            logger.warning(
                "media_download_failed",
                extra={"mime_type": mime_type, "error_type": type(exc).__name__},
            )
            return MediaRef(mime_type=mime_type)
        return MediaRef(
            mime_type=mime_type,
            data=base64.b64encode(content or b"").decode("ascii"),
        )

    async def _reject_call(self, call: dict[str, Any], client: ProviderClientProtocol) -> None:
        try:
            await client.reject_call(call.get("id", ""), call.get("from", ""))
        except Exception as exc:
            logger.debug("call_reject_failed", extra={"error_type": type(exc).__name__})
