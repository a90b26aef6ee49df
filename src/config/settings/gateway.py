"""Settings do gateway provedor → webhooks.

Caminhos dos arquivos persistidos, connector do provedor e limites de
concorrência do roteamento e da entrega de webhooks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Literal

StoreBackend = Literal["json", "memory"]

DEFAULT_DATA_DIR = "data"
CHATS_FILE_NAME = "whatsapp_data.json"
WEBHOOKS_FILE_NAME = "webhooks.json"
CREDENTIALS_FILE_NAME = "auth_info/creds.json"


@dataclass(frozen=True)
class GatewaySettings:
    """Configurações do gateway.

    Attributes:
        data_dir: Diretório base dos arquivos persistidos
        chats_file: Snapshot JSON de chats/contatos
        webhooks_file: Lista JSON de URLs de webhook
        credentials_file: Estado de autenticação do provedor
        store_backend: json (arquivos) ou memory (dev/testes)
        provider_connector: Import path "modulo:atributo" do connector
        webhook_timeout_seconds: Timeout por POST de webhook
        webhook_max_retries: Tentativas extras em 429/5xx/erro de conexão
        webhook_backoff_seconds: Base do backoff exponencial
        webhook_max_concurrency: Entregas simultâneas (todas as URLs)
        event_queue_size: Capacidade da fila de eventos do provedor
        max_concurrent_batches: Lotes/chamadas/históricos processados em paralelo
        reject_calls: Rejeitar chamadas recebidas automaticamente
        auto_start: Abrir a sessão no startup do processo
    """

    data_dir: Path = Path(DEFAULT_DATA_DIR)
    chats_file: Path = Path(DEFAULT_DATA_DIR) / CHATS_FILE_NAME
    webhooks_file: Path = Path(DEFAULT_DATA_DIR) / WEBHOOKS_FILE_NAME
    credentials_file: Path = Path(DEFAULT_DATA_DIR) / CREDENTIALS_FILE_NAME
    store_backend: StoreBackend = "json"

    provider_connector: str = ""

    webhook_timeout_seconds: float = 10.0
    webhook_max_retries: int = 2
    webhook_backoff_seconds: float = 1.0
    webhook_max_concurrency: int = 50

    event_queue_size: int = 1000
    max_concurrent_batches: int = 8
    reject_calls: bool = True
    auto_start: bool = False

    def validate(self) -> list[str]:
        """Valida configurações do gateway.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.provider_connector:
            errors.append("GATEWAY_PROVIDER_CONNECTOR não configurado")
        elif ":" not in self.provider_connector:
            errors.append("GATEWAY_PROVIDER_CONNECTOR deve ter o formato 'modulo:atributo'")

        if self.store_backend not in ("json", "memory"):
            errors.append("GATEWAY_STORE_BACKEND deve ser 'json' ou 'memory'")

        if self.webhook_timeout_seconds <= 0:
            errors.append("GATEWAY_WEBHOOK_TIMEOUT_SECONDS deve ser > 0")

        if self.webhook_max_retries < 0:
            errors.append("GATEWAY_WEBHOOK_MAX_RETRIES deve ser >= 0")

        if self.webhook_backoff_seconds < 0:
            errors.append("GATEWAY_WEBHOOK_BACKOFF_SECONDS deve ser >= 0")

        if self.webhook_max_concurrency < 1:
            errors.append("GATEWAY_WEBHOOK_MAX_CONCURRENCY deve ser >= 1")

        if self.event_queue_size < 1:
            errors.append("GATEWAY_EVENT_QUEUE_SIZE deve ser >= 1")

        if self.max_concurrent_batches < 1:
            errors.append("GATEWAY_MAX_CONCURRENT_BATCHES deve ser >= 1")

        return errors


def _env_path(name: str, default: Path) -> Path:
    value = os.getenv(name, "").strip()
    return Path(value) if value else default


def _load_from_env() -> GatewaySettings:
    data_dir = Path(os.getenv("GATEWAY_DATA_DIR", DEFAULT_DATA_DIR))
    return GatewaySettings(
        data_dir=data_dir,
        chats_file=_env_path("GATEWAY_CHATS_FILE", data_dir / CHATS_FILE_NAME),
        webhooks_file=_env_path("GATEWAY_WEBHOOKS_FILE", data_dir / WEBHOOKS_FILE_NAME),
        credentials_file=_env_path(
            "GATEWAY_CREDENTIALS_FILE", data_dir / CREDENTIALS_FILE_NAME
        ),
        store_backend=os.getenv("GATEWAY_STORE_BACKEND", "json").lower(),  # type: ignore[arg-type]
        provider_connector=os.getenv("GATEWAY_PROVIDER_CONNECTOR", "").strip(),
        webhook_timeout_seconds=float(os.getenv("GATEWAY_WEBHOOK_TIMEOUT_SECONDS", "10")),
        webhook_max_retries=int(os.getenv("GATEWAY_WEBHOOK_MAX_RETRIES", "2")),
        webhook_backoff_seconds=float(os.getenv("GATEWAY_WEBHOOK_BACKOFF_SECONDS", "1.0")),
        webhook_max_concurrency=int(os.getenv("GATEWAY_WEBHOOK_MAX_CONCURRENCY", "50")),
        event_queue_size=int(os.getenv("GATEWAY_EVENT_QUEUE_SIZE", "1000")),
        max_concurrent_batches=int(os.getenv("GATEWAY_MAX_CONCURRENT_BATCHES", "8")),
        reject_calls=os.getenv("GATEWAY_REJECT_CALLS", "true").lower() in ("true", "1", "yes"),
        auto_start=os.getenv("GATEWAY_AUTO_START", "false").lower() in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_gateway_settings() -> GatewaySettings:
    """Retorna instância cacheada de GatewaySettings."""
    return _load_from_env()
