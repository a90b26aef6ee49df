"""Dependências FastAPI: acesso ao container do gateway."""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from app.bootstrap.dependencies import GatewayContainer  # noqa: TC001
from app.infra.http import encode_json_body


def get_gateway(request: Request) -> GatewayContainer:
    """Container montado no lifespan (app.state.gateway)."""
    return request.app.state.gateway


class ProviderJSONResponse(JSONResponse):
    """JSONResponse que aceita bytes (base64) vindos do provedor."""

    def render(self, content: Any) -> bytes:
        return encode_json_body(content)
