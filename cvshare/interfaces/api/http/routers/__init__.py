"""
===============================================================================
TARJETA CRC - cvshare/interfaces/api/http/routers/__init__.py
===============================================================================

Responsibilities:
    - Exponer routers segmentados por bounded context para ser incluidos por el
      router principal.

Notas:
    - Este archivo NO define endpoints. Solo re-exporta routers.
===============================================================================
"""

from .collaborators import router as collaborators_router
from .cv_access import router as cv_access_router
from .workspaces import router as workspaces_router

__all__ = [
    "collaborators_router",
    "cv_access_router",
    "workspaces_router",
]
