"""Rotas HTTP: superfície REST fina sobre o core do gateway.

- routes/gateway/: sessão, mensagens, perfis, listagens, webhooks, SSE
- routes/health/: liveness e readiness
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
