"""Interpretação da causa de desconexão do provedor."""

from __future__ import annotations

from typing import Any

# Código do provedor para sessão deslogada / credenciais revogadas
LOGGED_OUT_STATUS_CODE = 401


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def extract_status_code(error: Any) -> int | None:
    """Extrai o status code do erro de desconexão.

    Aceita objetos com `status_code` ou `output.statusCode` (estilo Boom)
    e mapeamentos equivalentes. Retorna None quando não há código.
    """
    if error is None:
        return None

    if isinstance(error, dict):
        output = error.get("output")
        candidates = [
            error.get("status_code"),
            error.get("statusCode"),
            output.get("statusCode") if isinstance(output, dict) else None,
        ]
    else:
        output = getattr(error, "output", None)
        candidates = [
            getattr(error, "status_code", None),
            getattr(error, "statusCode", None),
            getattr(output, "statusCode", None) if output is not None else None,
            output.get("statusCode") if isinstance(output, dict) else None,
        ]

    for candidate in candidates:
        code = _as_int(candidate)
        if code is not None:
            return code
    return None


def is_logged_out(error: Any) -> bool:
    """True quando a desconexão é um logout autoritativo (sem reconexão)."""
    return extract_status_code(error) == LOGGED_OUT_STATUS_CODE


def describe_error(error: Any) -> str:
    """Texto curto do erro para avisos de conectividade."""
    if error is None:
        return ""
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
        return str(error)
    return str(error) or type(error).__name__
