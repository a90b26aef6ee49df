"""
Estados da conexão com o provedor de mensagens.

Existe no máximo uma sessão ativa por processo; estes estados
descrevem o ciclo de vida dessa sessão única.
"""

from enum import StrEnum


class ConnectionState(StrEnum):
    """
    Estados da sessão com o provedor.

    - IDLE: Nenhum cliente aberto (antes do primeiro start ou após falha)
    - CONNECTING: Cliente aberto, aguardando o provedor
    - PAIRING_REQUIRED: Provedor emitiu código de pareamento (QR)
    - CONNECTED: Sessão autenticada e online
    - CLOSING: Provedor sinalizou fechamento; decidindo se reconecta
    - LOGGED_OUT: Credenciais revogadas; sem reconexão automática
    """

    IDLE = "IDLE"
    CONNECTING = "CONNECTING"
    PAIRING_REQUIRED = "PAIRING_REQUIRED"
    CONNECTED = "CONNECTED"
    CLOSING = "CLOSING"
    LOGGED_OUT = "LOGGED_OUT"

    def __str__(self) -> str:
        return self.value


# Estados com cliente vivo (eventos do provedor são esperados)
ONLINE_STATES: frozenset[ConnectionState] = frozenset({
    ConnectionState.CONNECTING,
    ConnectionState.PAIRING_REQUIRED,
    ConnectionState.CONNECTED,
})

DEFAULT_INITIAL_STATE: ConnectionState = ConnectionState.IDLE


def is_valid_state(state: ConnectionState) -> bool:
    return isinstance(state, ConnectionState)
