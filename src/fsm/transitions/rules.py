"""
Grafo de transições válidas da conexão.

Nenhum estado é terminal: LOGGED_OUT só sai via start() explícito
(bloqueio do reconnect automático fica nos guards).
"""

from fsm.states.connection import ConnectionState

TransitionMap = dict[ConnectionState, frozenset[ConnectionState]]

VALID_TRANSITIONS: TransitionMap = {
    ConnectionState.IDLE: frozenset({
        ConnectionState.CONNECTING,
    }),

    # CONNECTING → IDLE quando abrir o cliente falha
    ConnectionState.CONNECTING: frozenset({
        ConnectionState.PAIRING_REQUIRED,
        ConnectionState.CONNECTED,
        ConnectionState.CLOSING,
        ConnectionState.IDLE,
    }),

    # Loop: rotação do código de pareamento
    ConnectionState.PAIRING_REQUIRED: frozenset({
        ConnectionState.PAIRING_REQUIRED,
        ConnectionState.CONNECTED,
        ConnectionState.CLOSING,
    }),

    ConnectionState.CONNECTED: frozenset({
        ConnectionState.CLOSING,
    }),

    # CLOSING → IDLE em shutdown (stop)
    ConnectionState.CLOSING: frozenset({
        ConnectionState.CONNECTING,
        ConnectionState.LOGGED_OUT,
        ConnectionState.IDLE,
    }),

    ConnectionState.LOGGED_OUT: frozenset({
        ConnectionState.CONNECTING,
    }),
}


def get_valid_targets(state: ConnectionState) -> frozenset[ConnectionState]:
    """Retorna os destinos permitidos a partir de `state`."""
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: ConnectionState, to_state: ConnectionState) -> bool:
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Verifica que todo estado aparece no mapa, que todo estado tem saída
    e que todo estado é alcançável a partir de algum outro.

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in ConnectionState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")
        elif not VALID_TRANSITIONS[state]:
            errors.append(f"Estado {state.name} sem transições de saída")

    reachable = {t for targets in VALID_TRANSITIONS.values() for t in targets}
    for state in ConnectionState:
        if state not in reachable:
            errors.append(f"Estado {state.name} inalcançável")

    return errors
