"""Exceções compartilhadas do gateway."""

from __future__ import annotations


class GatewayError(Exception):
    """Base para todas as falhas do gateway."""


class InfrastructureError(GatewayError, RuntimeError):
    """Base para falhas de infraestrutura transitórias (arquivo, rede)."""


class StoreCorruptedError(InfrastructureError):
    """Snapshot JSON ilegível ou com formato inesperado."""


class ProviderConnectorError(GatewayError):
    """Connector do provedor não pôde ser resolvido a partir da configuração."""


class ContentBuildError(GatewayError, ValueError):
    """Pedido de envio não forma um conteúdo válido (ex: base64 inválido)."""
