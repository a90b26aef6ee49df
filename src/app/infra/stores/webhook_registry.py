"""Registro de URLs de webhook persistido em JSON.

O arquivo guarda uma lista ordenada de URLs. A lista é carregada uma
vez e mantida em memória; cada alteração regrava o arquivo.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path

from app.infra.stores.json_file import read_json, write_json_atomic
from app.protocols.stores import WebhookRegistryProtocol
from utils.errors import StoreCorruptedError

logger = logging.getLogger(__name__)


class JsonWebhookRegistry(WebhookRegistryProtocol):
    """Lista ordenada de webhooks em arquivo JSON."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._urls = self._load()

    def _load(self) -> list[str]:
        data = read_json(self._path, default=[])
        if not isinstance(data, list):
            raise StoreCorruptedError(f"Registro {self._path.name} não é uma lista JSON")
        return [url for url in data if isinstance(url, str) and url]

    def list(self) -> list[str]:
        with self._lock:
            return list(self._urls)

    def insert(self, url: str) -> None:
        """Acrescenta `url` ao final; URL vazia é ignorada."""
        if not url:
            return
        with self._lock:
            self._urls.append(url)
            write_json_atomic(self._path, self._urls)
            count = len(self._urls)
        logger.info("webhook_registered", extra={"webhook_count": count})

    def delete_at(self, index: int) -> None:
        """Remove a URL na posição `index` (0-based); fora do intervalo é no-op."""
        with self._lock:
            if not 0 <= index < len(self._urls):
                return
            del self._urls[index]
            write_json_atomic(self._path, self._urls)
            count = len(self._urls)
        logger.info("webhook_removed", extra={"index": index, "webhook_count": count})

    async def insert_async(self, url: str) -> None:
        await asyncio.to_thread(self.insert, url)

    async def delete_at_async(self, index: int) -> None:
        await asyncio.to_thread(self.delete_at, index)
