"""Leitura e escrita de snapshots JSON em disco.

Escrita atômica: o conteúdo vai para um arquivo temporário no mesmo
diretório e substitui o destino com os.replace, então um leitor nunca
vê um snapshot pela metade.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from utils.errors import StoreCorruptedError


def read_json(path: Path, default: Any) -> Any:
    """Lê o JSON em `path`; retorna `default` se o arquivo não existe.

    Raises:
        StoreCorruptedError: Conteúdo ilegível ou não-JSON.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return default
    except OSError as exc:
        raise StoreCorruptedError(f"Falha ao ler {path.name}: {exc}") from exc

    if not raw.strip():
        return default

    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StoreCorruptedError(f"JSON inválido em {path.name}: {exc.msg}") from exc


def write_json_atomic(path: Path, data: Any) -> None:
    """Substitui `path` pelo JSON de `data` (indentado)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2, ensure_ascii=False)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
