"""
Módulo FSM: ciclo de vida da conexão com o provedor.

Uma única sessão lógica percorre:
    IDLE → CONNECTING → (PAIRING_REQUIRED | CONNECTED) → CLOSING
         → (CONNECTING | LOGGED_OUT)

Estrutura:
    - states/: ConnectionState e conjuntos auxiliares
    - transitions/: VALID_TRANSITIONS
    - rules/: guards (trigger-aware)
    - manager/: FSMStateMachine
    - types/: StateTransition, TransitionResult
"""

from fsm.manager import FSMStateMachine, create_fsm
from fsm.rules import (
    RECONNECT_TRIGGER,
    GuardResult,
    evaluate_guards,
)
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    ONLINE_STATES,
    ConnectionState,
    is_valid_state,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import StateTransition, TransitionResult

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "ONLINE_STATES",
    "RECONNECT_TRIGGER",
    "VALID_TRANSITIONS",
    "ConnectionState",
    "FSMStateMachine",
    "GuardResult",
    "StateTransition",
    "TransitionResult",
    "create_fsm",
    "evaluate_guards",
    "get_valid_targets",
    "is_transition_valid",
    "is_valid_state",
    "validate_transition_map",
]
