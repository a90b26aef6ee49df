"""SessionManager: ciclo de vida da sessão única com o provedor.

Dono exclusivo do cliente do provedor. Toda mudança de estado passa
pela FSM sob um asyncio.Lock; abrir um cliente (I/O) acontece fora do
lock, protegido pelo estado CONNECTING e pela flag de reconnect em
andamento.

Fluxo:
    start() → CONNECTING → (PAIRING_REQUIRED | CONNECTED)
    close (causa != 401) → CLOSING → CONNECTING → novo cliente
    close (causa == 401) → CLOSING → LOGGED_OUT (sem reconnect)
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.provider.disconnect import (
    describe_error,
    extract_status_code,
    is_logged_out,
)
from app.constants.provider import (
    ALREADY_CONNECTED_TEXT,
    CONNECT_FAILED_TEMPLATE,
    CONNECTED_TEXT,
    DISCONNECTION_ERROR_TEMPLATE,
    LOGGED_OUT_TEXT,
    RECONNECTING_TEXT,
    STATUS_TEXTS,
    ConnectionStatus,
    ProviderEvent,
)
from app.protocols.models import (
    CallReceived,
    ConnectionUpdated,
    ConnectivityNotice,
    CredentialsUpdated,
    HistorySet,
    MessagesUpserted,
    PairingSnapshot,
)
from app.sessions.models import ProviderSession
from fsm import RECONNECT_TRIGGER, ConnectionState, FSMStateMachine

if TYPE_CHECKING:
    from app.coordinators.inbound.router import EventRouter
    from app.observability.connectivity import ConnectivityBroadcaster
    from app.protocols.provider_client import (
        ProviderClientProtocol,
        ProviderConnectorProtocol,
    )
    from app.protocols.stores import CredentialStoreProtocol

logger = logging.getLogger(__name__)

_PAIRING_STATES = frozenset({ConnectionState.CONNECTING, ConnectionState.PAIRING_REQUIRED})


class SessionManager:
    """Mantém uma única conexão lógica com o provedor.

    Args:
        connector: Abre um cliente a partir das credenciais
        credential_store: Estado de autenticação persistido
        router: Consumidor dos eventos inbound do cliente
        broadcaster: Stream de avisos de conectividade
        fsm: Máquina de estados (nova por padrão)
    """

    def __init__(
        self,
        *,
        connector: ProviderConnectorProtocol,
        credential_store: CredentialStoreProtocol,
        router: EventRouter,
        broadcaster: ConnectivityBroadcaster,
        fsm: FSMStateMachine | None = None,
    ) -> None:
        self._connector = connector
        self._credential_store = credential_store
        self._router = router
        self._broadcaster = broadcaster
        self._fsm = fsm or FSMStateMachine(name="provider_session")
        self._lock = asyncio.Lock()
        self._session: ProviderSession | None = None
        self._generation = 0
        self._reconnect_in_flight = False

    # ──────────────────────────────────────────────────────────────
    # Consulta
    # ──────────────────────────────────────────────────────────────

    @property
    def state(self) -> ConnectionState:
        return self._fsm.current_state

    @property
    def is_connected(self) -> bool:
        return self._fsm.current_state == ConnectionState.CONNECTED

    @property
    def reconnect_in_flight(self) -> bool:
        return self._reconnect_in_flight

    @property
    def client(self) -> ProviderClientProtocol | None:
        """Cliente atual (None sem sessão aberta)."""
        return self._session.client if self._session else None

    @property
    def last_qr(self) -> str | None:
        return self._session.last_qr if self._session else None

    def get_current_pairing(self) -> PairingSnapshot:
        """Último QR, texto de status e flag de conectividade."""
        return PairingSnapshot(
            qr=self.last_qr or "",
            text=STATUS_TEXTS[self._fsm.current_state],
            connected=self.is_connected,
        )

    def describe(self) -> dict[str, Any]:
        """Resumo seguro para logs e health."""
        summary = self._fsm.get_state_summary()
        summary["reconnect_in_flight"] = self._reconnect_in_flight
        summary["generation"] = self._session.generation if self._session else None
        return summary

    # ──────────────────────────────────────────────────────────────
    # Operações de controle
    # ──────────────────────────────────────────────────────────────

    async def start(self) -> PairingSnapshot:
        """Abre a sessão; no-op se já conectada ou conectando."""
        async with self._lock:
            current = self._fsm.current_state
            if current == ConnectionState.CONNECTED and self._session is not None:
                logger.info("session_already_connected")
                self._notify(ConnectivityNotice(text=ALREADY_CONNECTED_TEXT))
                return self.get_current_pairing()

            result = self._fsm.transition(ConnectionState.CONNECTING, trigger="start")
            if not result.success:
                logger.info(
                    "session_start_ignored",
                    extra={"state": current.name, "reason": result.error_reason},
                )
                return self.get_current_pairing()

        logger.info("session_start_requested", extra={"from_state": current.name})
        await self._open_client(trigger="start")
        return self.get_current_pairing()

    async def logout(self) -> None:
        """Revoga a sessão (best-effort) e marca LOGGED_OUT.

        Falhas do provedor são logadas; localmente a sessão fica encerrada
        e o close que o provedor emitir em seguida não reconecta.
        """
        async with self._lock:
            session = self._session

        if session is not None:
            try:
                await session.client.logout()
            except Exception as exc:
                logger.warning(
                    "session_logout_failed",
                    extra={"error_type": type(exc).__name__},
                )

        async with self._lock:
            self._session = None
            if self._fsm.current_state != ConnectionState.LOGGED_OUT:
                self._fsm.force(ConnectionState.LOGGED_OUT, trigger="logout")

        await self._clear_credentials()
        logger.info("session_logged_out")
        self._notify(ConnectivityNotice(text=LOGGED_OUT_TEXT))

    async def stop(self) -> None:
        """Shutdown do processo: descarta o cliente sem deslogar."""
        async with self._lock:
            session = self._session
            self._session = None
            if self._fsm.current_state != ConnectionState.IDLE:
                self._fsm.force(ConnectionState.IDLE, trigger="shutdown")

        if session is not None:
            await _close_quietly(session.client)
        logger.info("session_stopped")

    # ──────────────────────────────────────────────────────────────
    # Eventos de conexão
    # ──────────────────────────────────────────────────────────────

    async def handle_connection_update(
        self,
        client: ProviderClientProtocol,
        update: ConnectionUpdated,
    ) -> None:
        """Aplica um connection.update emitido por `client`."""
        if update.qr:
            await self._on_qr(client, update.qr)

        if update.connection == ConnectionStatus.CLOSE:
            await self._on_close(client, update.error)
        elif update.connection == ConnectionStatus.OPEN:
            await self._on_open(client)

    async def _on_qr(self, client: ProviderClientProtocol, qr: str) -> None:
        async with self._lock:
            if not self._is_current(client):
                return
            if self._fsm.current_state in _PAIRING_STATES:
                self._fsm.transition(ConnectionState.PAIRING_REQUIRED, trigger="qr")
            self._session.last_qr = qr  # type: ignore[union-attr]

        logger.info("session_pairing_code_issued")
        self._notify(ConnectivityNotice(qr=qr))

    async def _on_open(self, client: ProviderClientProtocol) -> None:
        async with self._lock:
            if not self._is_current(client):
                return
            result = self._fsm.transition(ConnectionState.CONNECTED, trigger="open")
            if not result.success:
                logger.warning(
                    "session_open_ignored",
                    extra={"reason": result.error_reason},
                )
                return
            self._session.last_qr = None  # type: ignore[union-attr]

        logger.info("session_connected")
        self._notify(ConnectivityNotice(text=CONNECTED_TEXT))

    async def _on_close(self, client: ProviderClientProtocol, error: Any) -> None:
        status_code = extract_status_code(error)
        logged_out = is_logged_out(error)

        async with self._lock:
            if not self._is_current(client):
                logger.debug("session_close_from_stale_client")
                return
            if self._reconnect_in_flight:
                logger.info("session_reconnect_already_in_flight")
                return

            self._fsm.transition(
                ConnectionState.CLOSING,
                trigger="close",
                metadata={"status_code": status_code},
            )
            self._session = None

            if logged_out:
                self._fsm.transition(ConnectionState.LOGGED_OUT, trigger="logged_out")
                reconnect = False
            else:
                result = self._fsm.transition(ConnectionState.CONNECTING, trigger=RECONNECT_TRIGGER)
                reconnect = result.success
                self._reconnect_in_flight = reconnect

        text = LOGGED_OUT_TEXT if logged_out else RECONNECTING_TEXT
        if error is not None:
            text = DISCONNECTION_ERROR_TEMPLATE.format(error=describe_error(error))
        self._notify(ConnectivityNotice(text=text))

        if logged_out:
            logger.warning("session_logged_out_by_provider", extra={"status_code": status_code})
            await self._clear_credentials()
            return
        if not reconnect:
            return

        logger.info("session_reconnect_scheduled", extra={"status_code": status_code})
        try:
            await self._open_client(trigger=RECONNECT_TRIGGER)
        finally:
            async with self._lock:
                self._reconnect_in_flight = False

    # ──────────────────────────────────────────────────────────────
    # Cliente
    # ──────────────────────────────────────────────────────────────

    async def _open_client(self, trigger: str) -> None:
        """Carrega credenciais, abre o cliente e registra os listeners.

        Espera o estado CONNECTING; em falha volta para IDLE (sem retry).
        """
        try:
            credentials = await self._credential_store.load()
            client = await self._connector(credentials)
        except Exception as exc:
            async with self._lock:
                self._reconnect_in_flight = False
                if self._fsm.current_state == ConnectionState.CONNECTING:
                    self._fsm.transition(
                        ConnectionState.IDLE,
                        trigger="connect_failed",
                        metadata={"error_type": type(exc).__name__},
                    )
            logger.error(
                "session_connect_failed",
                extra={"trigger": trigger, "error_type": type(exc).__name__},
            )
            self._notify(ConnectivityNotice(text=CONNECT_FAILED_TEMPLATE.format(error=exc)))
            return

        async with self._lock:
            self._reconnect_in_flight = False
            if self._fsm.current_state != ConnectionState.CONNECTING or self._session is not None:
                stale = True
            else:
                stale = False
                self._generation += 1
                self._session = ProviderSession(client=client, generation=self._generation)
                self._bind_handlers(client)

        if stale:
            # logout()/stop() rodou durante a abertura
            logger.info("session_client_discarded", extra={"trigger": trigger})
            await _close_quietly(client)
            return

        logger.info(
            "session_client_opened",
            extra={"trigger": trigger, "generation": self._generation},
        )

    def _bind_handlers(self, client: ProviderClientProtocol) -> None:
        router = self._router

        async def on_credentials(state: Any) -> None:
            # Salvo antes do próximo evento: um close logo após o pareamento
            # reabre o cliente com estas credenciais.
            await router.handle_credentials(CredentialsUpdated(state=state))

        async def on_connection(update: Any) -> None:
            await self.handle_connection_update(client, ConnectionUpdated.from_raw(update))

        async def on_messages(batch: Any) -> None:
            await router.submit(MessagesUpserted.from_raw(batch), client)

        async def on_call(calls: Any) -> None:
            await router.submit(CallReceived.from_raw(calls), client)

        async def on_history(data: Any) -> None:
            await router.submit(HistorySet.from_raw(data), client)

        client.on(ProviderEvent.CREDENTIALS_UPDATE, on_credentials)
        client.on(ProviderEvent.CONNECTION_UPDATE, on_connection)
        client.on(ProviderEvent.MESSAGES_UPSERT, on_messages)
        client.on(ProviderEvent.CALL, on_call)
        client.on(ProviderEvent.HISTORY_SET, on_history)

    def _is_current(self, client: ProviderClientProtocol) -> bool:
        return self._session is not None and self._session.owns(client)

    async def _clear_credentials(self) -> None:
        try:
            await self._credential_store.clear()
        except Exception as exc:
            logger.warning(
                "credentials_clear_failed",
                extra={"error_type": type(exc).__name__},
            )

    def _notify(self, notice: ConnectivityNotice) -> None:
        if notice.text:
            logger.info("connectivity_notice", extra={"text": notice.text})
        self._broadcaster.publish(notice)


async def _close_quietly(client: ProviderClientProtocol) -> None:
    close = getattr(client, "close", None)
    if close is None:
        return
    try:
        await close()
    except Exception as exc:
        logger.debug("provider_client_close_failed", extra={"error_type": type(exc).__name__})
