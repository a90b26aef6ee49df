"""Agregador de settings do gateway.

Re-exporta as settings de cada módulo.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.gateway import (
    GatewaySettings,
    StoreBackend,
    get_gateway_settings,
)

__all__ = [
    "BaseSettings",
    "Environment",
    "GatewaySettings",
    "StoreBackend",
    "get_base_settings",
    "get_gateway_settings",
]
