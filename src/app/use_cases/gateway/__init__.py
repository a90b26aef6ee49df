"""Casos de uso expostos pela superfície REST do gateway."""

from app.use_cases.gateway.listings import ListChatsUseCase, ListContactsUseCase
from app.use_cases.gateway.profile_queries import ProfileQueriesUseCase
from app.use_cases.gateway.send_message import SendMessageUseCase

__all__ = [
    "ListChatsUseCase",
    "ListContactsUseCase",
    "ProfileQueriesUseCase",
    "SendMessageUseCase",
]
