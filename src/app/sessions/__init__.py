"""Sessão única com o provedor de mensagens."""

from app.sessions.manager import SessionManager
from app.sessions.models import ProviderSession

__all__ = [
    "ProviderSession",
    "SessionManager",
]
