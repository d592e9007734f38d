# cvshare/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones de infraestructura
===============================================================================

Los fallos esperables del dominio (slug tomado, password faltante, acceso
denegado) viajan como resultados tipados de los casos de uso. Acá quedan solo
los fallos que cortan la request: hoy, la base de datos.

CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  CVShareError, DatabaseError

Responsabilidades:
  - error_code estable para el mapeo HTTP
  - error_id para cruzar la respuesta con el log
  - Conservar la excepción del driver (original_error) sin exponerla

Colaboradores:
  - api/exception_handlers.py (503 / 500)
  - infrastructure/repositories/postgres/_base.py (lanza DatabaseError)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class CVShareError(Exception):
    """Base de errores internos: message seguro + error_id de correlación."""

    error_code: str = "CVSHARE_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(CVShareError):
    """Conexión, query, timeout o pool agotado."""

    error_code: str = "DATABASE_ERROR"
