"""
===============================================================================
TARJETA CRC - application/usecases/__init__.py
===============================================================================

Responsabilidades:
    - Re-exportar casos de uso por bounded context (workspace, collaboration).
    - Mantener imports planos para container y routers.
===============================================================================
"""

from .collaboration import *  # noqa: F401,F403
from .collaboration import __all__ as _collaboration_all
from .workspace import *  # noqa: F401,F403
from .workspace import __all__ as _workspace_all

__all__ = [*_workspace_all, *_collaboration_all]
