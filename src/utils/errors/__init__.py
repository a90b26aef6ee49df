"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ContentBuildError,
    GatewayError,
    InfrastructureError,
    ProviderConnectorError,
    StoreCorruptedError,
)

__all__ = [
    "ContentBuildError",
    "GatewayError",
    "InfrastructureError",
    "ProviderConnectorError",
    "StoreCorruptedError",
]
