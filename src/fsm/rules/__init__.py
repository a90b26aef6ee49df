"""Exports públicos do módulo fsm/rules."""

from fsm.rules.guards import (
    DEFAULT_GUARDS,
    RECONNECT_TRIGGER,
    Guard,
    GuardResult,
    evaluate_guards,
    guard_logged_out_reconnect,
    guard_same_state,
    guard_valid_state,
)

__all__ = [
    "DEFAULT_GUARDS",
    "RECONNECT_TRIGGER",
    "Guard",
    "GuardResult",
    "evaluate_guards",
    "guard_logged_out_reconnect",
    "guard_same_state",
    "guard_valid_state",
]
