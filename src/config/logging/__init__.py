"""Logging estruturado JSON do gateway.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="wa_gateway")
    logger = get_logger(__name__)
    logger.info("webhook_delivered", extra={"status_code": 200})

Todo record carrega correlation_id e service. Nunca logar conteúdo de
mensagens, números completos ou credenciais.
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
]
