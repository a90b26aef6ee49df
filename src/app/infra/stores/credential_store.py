"""Persistência do estado de autenticação do provedor.

O estado é opaco para o gateway. Valores bytes (chaves) são gravados
como {"__bytes__": "<base64>"} e restaurados na leitura.
"""

from __future__ import annotations

import asyncio
import base64
from pathlib import Path
from typing import Any

from app.infra.stores.json_file import read_json, write_json_atomic
from app.protocols.stores import CredentialStoreProtocol

_BYTES_TAG = "__bytes__"


def encode_state(value: Any) -> Any:
    """Converte bytes aninhados em objetos etiquetados serializáveis."""
    if isinstance(value, bytes | bytearray):
        return {_BYTES_TAG: base64.b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, dict):
        return {str(k): encode_state(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [encode_state(v) for v in value]
    return value


def decode_state(value: Any) -> Any:
    """Inverso de encode_state."""
    if isinstance(value, dict):
        if set(value) == {_BYTES_TAG} and isinstance(value[_BYTES_TAG], str):
            return base64.b64decode(value[_BYTES_TAG])
        return {k: decode_state(v) for k, v in value.items()}
    if isinstance(value, list):
        return [decode_state(v) for v in value]
    return value


class JsonFileCredentialStore(CredentialStoreProtocol):
    """Estado de autenticação em um arquivo JSON."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    def _load_sync(self) -> Any | None:
        data = read_json(self._path, default=None)
        return decode_state(data) if data is not None else None

    def _save_sync(self, state: Any) -> None:
        write_json_atomic(self._path, encode_state(state))

    async def load(self) -> Any | None:
        return await asyncio.to_thread(self._load_sync)

    async def save(self, state: Any) -> None:
        await asyncio.to_thread(self._save_sync, state)

    async def clear(self) -> None:
        await asyncio.to_thread(self._path.unlink, missing_ok=True)
