"""Classificação de identificadores de chat (JID) do provedor.

O SDK do provedor é a fonte das regras: um connector pode expor o
atributo `jid_classifier` com os predicados do próprio SDK. Sem ele, vale
o classificador padrão, com as mesmas regras:
    - broadcast: termina em "@broadcast" (inclui status)
    - status: exatamente "status@broadcast"
    - newsletter: termina em "@newsletter"
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.protocols.provider_client import JidClassifierProtocol

logger = logging.getLogger(__name__)

STATUS_BROADCAST_JID = "status@broadcast"
BROADCAST_SUFFIX = "@broadcast"
NEWSLETTER_SUFFIX = "@newsletter"

_PREDICATES = ("is_broadcast", "is_status_broadcast", "is_newsletter")


class DefaultJidClassifier:
    """Predicados de JID usados para filtrar tráfego não-conversacional."""

    def is_broadcast(self, jid: str) -> bool:
        return bool(jid) and jid.endswith(BROADCAST_SUFFIX)

    def is_status_broadcast(self, jid: str) -> bool:
        return jid == STATUS_BROADCAST_JID

    def is_newsletter(self, jid: str) -> bool:
        return bool(jid) and jid.endswith(NEWSLETTER_SUFFIX)


def resolve_jid_classifier(connector: Any) -> JidClassifierProtocol:
    """Classificador fornecido pelo connector, ou o padrão quando ausente."""
    provided = getattr(connector, "jid_classifier", None)
    if provided is not None and all(
        callable(getattr(provided, name, None)) for name in _PREDICATES
    ):
        return provided
    if provided is not None:
        logger.warning(
            "jid_classifier_incomplete",
            extra={"classifier_type": type(provided).__name__},
        )
    return DefaultJidClassifier()
