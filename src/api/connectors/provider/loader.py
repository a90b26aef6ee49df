"""Resolução do connector do provedor a partir da configuração."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

from utils.errors import ProviderConnectorError

if TYPE_CHECKING:
    from app.protocols.provider_client import ProviderConnectorProtocol


def load_connector(import_path: str) -> ProviderConnectorProtocol:
    """Importa o connector indicado por "pacote.modulo:atributo".

    Raises:
        ProviderConnectorError: Caminho mal formado, módulo inexistente,
            atributo ausente ou não-chamável.
    """
    module_name, sep, attribute = import_path.partition(":")
    if not sep or not module_name or not attribute:
        raise ProviderConnectorError(
            f"Connector inválido: {import_path!r} (esperado 'modulo:atributo')"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ProviderConnectorError(f"Módulo do connector não encontrado: {module_name}") from exc

    target = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ProviderConnectorError(
                f"Atributo {attribute!r} ausente em {module_name}"
            ) from exc

    if not callable(target):
        raise ProviderConnectorError(f"Connector {import_path!r} não é chamável")
    return target
