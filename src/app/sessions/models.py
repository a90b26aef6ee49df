"""Modelo da sessão única com o provedor."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols.provider_client import ProviderClientProtocol


@dataclass(slots=True)
class ProviderSession:
    """Cliente vivo do provedor e seus metadados.

    Substituída a cada reconnect; descartada em logout/stop. Eventos de
    uma sessão substituída são ignorados (comparação por identidade do
    cliente).

    Atributos:
        client: Handle do cliente, exclusivo do SessionManager
        generation: Contador de aberturas (1 = primeiro start)
        opened_at: Momento em que o cliente foi aberto
        last_qr: Último código de pareamento emitido por este cliente
    """

    client: ProviderClientProtocol
    generation: int
    opened_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_qr: str | None = None

    def owns(self, client: ProviderClientProtocol) -> bool:
        return self.client is client
