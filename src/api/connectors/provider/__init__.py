"""Helpers do provedor de mensagens (JID, desconexão, connector)."""

from api.connectors.provider.disconnect import (
    LOGGED_OUT_STATUS_CODE,
    describe_error,
    extract_status_code,
    is_logged_out,
)
from api.connectors.provider.jid import DefaultJidClassifier, resolve_jid_classifier
from api.connectors.provider.loader import load_connector

__all__ = [
    "LOGGED_OUT_STATUS_CODE",
    "DefaultJidClassifier",
    "describe_error",
    "extract_status_code",
    "is_logged_out",
    "load_connector",
    "resolve_jid_classifier",
]
