"""Entrega de eventos aos webhooks registrados."""

from app.infra.webhooks.dispatcher import WebhookDispatcher

__all__ = ["WebhookDispatcher"]
