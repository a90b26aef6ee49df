"""
Máquina de estados da conexão (FSMStateMachine).

Mantém o estado corrente, valida transições contra o grafo e os
guards e guarda um histórico recente para observabilidade. Não é
thread-safe: o SessionManager serializa o acesso com um asyncio.Lock.
"""

from collections import deque
from typing import Any

from fsm.rules.guards import GuardResult, evaluate_guards
from fsm.states.connection import DEFAULT_INITIAL_STATE, ConnectionState
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult

# A sessão vive indefinidamente; o histórico é limitado
DEFAULT_HISTORY_SIZE = 100


class FSMStateMachine:
    """
    Máquina de estados da sessão com o provedor.

    Attributes:
        current_state: Estado atual da máquina
        history: Transições recentes (mais antiga primeiro)
    """

    __slots__ = ("_current_state", "_history", "_name")

    def __init__(
        self,
        initial_state: ConnectionState | None = None,
        name: str = "provider",
        history_size: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: deque[StateTransition] = deque(maxlen=history_size)
        self._name = name

    @property
    def current_state(self) -> ConnectionState:
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def name(self) -> str:
        return self._name

    def can_transition_to(self, target: ConnectionState, trigger: str = "check") -> bool:
        if not is_transition_valid(self._current_state, target):
            return False
        return evaluate_guards(self._current_state, target, trigger).allowed

    def get_valid_targets(self) -> frozenset[ConnectionState]:
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: ConnectionState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Identificador do gatilho (ex: 'start', 'reconnect')
            metadata: Dados adicionais para auditoria

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.name} → {target.name}"
                ),
            )

        guard_result: GuardResult = evaluate_guards(self._current_state, target, trigger)
        if not guard_result.allowed:
            return TransitionResult(success=False, error_reason=guard_result.reason)

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
        )
        self._current_state = target
        self._history.append(transition)

        return TransitionResult(success=True, transition=transition)

    def force(
        self,
        target: ConnectionState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> StateTransition:
        """
        Aplica uma transição sem consultar grafo nem guards.

        Reservado a logout() e stop(), que encerram a sessão a partir
        de qualquer estado.
        """
        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
        )
        self._current_state = target
        self._history.append(transition)
        return transition

    def get_state_summary(self) -> dict[str, Any]:
        """Resumo do estado atual (seguro para logs e health)."""
        last = self._history[-1] if self._history else None
        return {
            "name": self._name,
            "current_state": self._current_state.name,
            "transition_count": len(self._history),
            "last_trigger": last.trigger if last else None,
            "last_transition_at": last.timestamp.isoformat() if last else None,
            "valid_targets": sorted(s.name for s in self.get_valid_targets()),
        }

    def get_history_summary(self) -> list[dict[str, Any]]:
        return [t.to_log_dict() for t in self._history]


def create_fsm(
    name: str = "provider",
    initial_state: ConnectionState | None = None,
) -> FSMStateMachine:
    """Factory da FSM de conexão."""
    return FSMStateMachine(initial_state=initial_state, name=name)
