"""
===============================================================================
TARJETA CRC - router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por bounded context (workspaces/cv access/collaborators).

Notas:
  - Este router se incluye desde cvshare/api/main.py con prefix="/v1".
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers import collaborators_router, cv_access_router, workspaces_router


def build_router() -> APIRouter:
    """Construye el router raíz v1 (testeable sin levantar la app)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(workspaces_router)
    api_router.include_router(cv_access_router)
    api_router.include_router(collaborators_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
