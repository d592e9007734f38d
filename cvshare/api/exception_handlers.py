"""
===============================================================================
TARJETA CRC - cvshare/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Mapear errores de infraestructura a problem+json (DatabaseError -> 503).
  - Cualquier otra excepción -> 500 genérico (sin detalle en producción).
  - Loguear con error_id + request_id para cruzar respuesta y log.

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, app_exception_handler
  - crosscutting.exceptions: CVShareError, DatabaseError
  - crosscutting.config.get_settings (nivel de detalle)

Notas:
  - Las denegaciones de acceso a CVs nunca llegan acá: son 200.
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    request_id_of,
)
from ..crosscutting.exceptions import CVShareError, DatabaseError
from ..crosscutting.logger import logger

# error_code interno -> (status, código público)
_TYPED_ERRORS: dict[str, tuple[int, ErrorCode]] = {
    DatabaseError.error_code: (503, ErrorCode.DATABASE_ERROR),
}
_DEFAULT_TYPED_ERROR = (500, ErrorCode.INTERNAL_ERROR)


async def typed_error_handler(request: Request, exc: CVShareError) -> JSONResponse:
    status_code, code = _TYPED_ERRORS.get(exc.error_code, _DEFAULT_TYPED_ERROR)

    logger.error(
        "Storage/service failure",
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "error": exc.message,
            "request_id": request_id_of(request),
        },
    )

    return await app_exception_handler(
        request,
        AppHTTPException(
            status_code=status_code,
            code=code,
            detail=exc.message,
            errors=[{"error_id": exc.error_id}],
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        exc_info=True,
        extra={"request_id": request_id_of(request), "error": str(exc)},
    )

    detail = "Error interno." if get_settings().is_production() else str(exc)
    return await app_exception_handler(
        request, AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)
    )


def register_exception_handlers(app) -> None:
    """AppHTTPException -> RFC7807; Exception queda como último recurso."""
    app.add_exception_handler(CVShareError, typed_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
