"""
Guards das transições de conexão.

Guards recebem (origem, destino, trigger) e podem negar uma transição
que o grafo permite. O trigger distingue o reconnect automático do
start() explícito.
"""

from collections.abc import Callable

from fsm.states.connection import ConnectionState

# Trigger usado pelo SessionManager ao reabrir o cliente após um close
RECONNECT_TRIGGER = "reconnect"


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se a transição é permitida
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> "GuardResult":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        return cls(allowed=False, reason=reason)


Guard = Callable[[ConnectionState, ConnectionState, str], GuardResult]


def guard_valid_state(
    from_state: ConnectionState,
    to_state: ConnectionState,
    trigger: str,
) -> GuardResult:
    """Guard: ambos os estados pertencem ao enum."""
    if not isinstance(from_state, ConnectionState):
        return GuardResult.deny(f"Estado de origem inválido: {from_state}")

    if not isinstance(to_state, ConnectionState):
        return GuardResult.deny(f"Estado de destino inválido: {to_state}")

    return GuardResult.allow()


def guard_same_state(
    from_state: ConnectionState,
    to_state: ConnectionState,
    trigger: str,
) -> GuardResult:
    """
    Guard: transição reflexiva só em PAIRING_REQUIRED (novo QR).

    Impede, entre outros, CONNECTING → CONNECTING: um reconnect
    com o estado já em CONNECTING é no-op.
    """
    if from_state == ConnectionState.PAIRING_REQUIRED:
        return GuardResult.allow()

    if from_state == to_state:
        return GuardResult.deny(
            f"Transição reflexiva não permitida: {from_state.name} → {to_state.name}"
        )

    return GuardResult.allow()


def guard_logged_out_reconnect(
    from_state: ConnectionState,
    to_state: ConnectionState,
    trigger: str,
) -> GuardResult:
    """Guard: após logout, apenas start() explícito reabre a sessão."""
    if (
        from_state == ConnectionState.LOGGED_OUT
        and to_state == ConnectionState.CONNECTING
        and trigger == RECONNECT_TRIGGER
    ):
        return GuardResult.deny("Sessão deslogada não reconecta automaticamente")
    return GuardResult.allow()


# Todos devem retornar allow() para a transição prosseguir
DEFAULT_GUARDS: list[Guard] = [
    guard_valid_state,
    guard_same_state,
    guard_logged_out_reconnect,
]


def evaluate_guards(
    from_state: ConnectionState,
    to_state: ConnectionState,
    trigger: str,
    guards: list[Guard] | None = None,
) -> GuardResult:
    """
    Avalia os guards em ordem.

    Returns:
        GuardResult do primeiro guard que negar, ou allow() se todos passarem
    """
    guards_to_apply = guards if guards is not None else DEFAULT_GUARDS

    for guard in guards_to_apply:
        result = guard(from_state, to_state, trigger)
        if not result.allowed:
            return result

    return GuardResult.allow()
