"""Observabilidade: correlation_id e stream de conectividade.

Uso:
    from app.observability import correlation_scope, get_correlation_id
"""

from app.observability.connectivity import ConnectivityBroadcaster
from app.observability.correlation import (
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

__all__ = [
    "ConnectivityBroadcaster",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
]
