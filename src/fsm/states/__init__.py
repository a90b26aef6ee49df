"""Exports públicos do módulo fsm/states."""

from fsm.states.connection import (
    DEFAULT_INITIAL_STATE,
    ONLINE_STATES,
    ConnectionState,
    is_valid_state,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "ONLINE_STATES",
    "ConnectionState",
    "is_valid_state",
]
