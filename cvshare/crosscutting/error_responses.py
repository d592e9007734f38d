# cvshare/crosscutting/error_responses.py
"""
===============================================================================
MÓDULO: Respuestas de error estándar (RFC 7807 / Problem Details)
===============================================================================

Objetivo
--------
Todos los errores HTTP salen con el mismo formato problem+json, así el
frontend del CV builder decide por "code" y el backend correlaciona por
request_id.

Nota: una denegación de acceso a un CV (token inválido, password incorrecta)
NO es un error HTTP; viaja como AccessDecision en un 200.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + factories + handlers

Responsabilidades:
  - Catálogo de códigos (ErrorCode)
  - Payload RFC7807 (ErrorDetail)
  - Factories para errores frecuentes (incluye 429 con Retry-After)
  - Handlers FastAPI que devuelven application/problem+json

Colaboradores:
  - crosscutting/middleware.py (request_id en request.state)
  - crosscutting/rate_limit.py (rate_limited)
  - interfaces/api/http/error_mapping.py
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    PASSWORD_REQUIRED = "PASSWORD_REQUIRED"
    INVALID_PRIVACY_LEVEL = "INVALID_PRIVACY_LEVEL"
    RATE_LIMITED = "RATE_LIMITED"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    DATABASE_ERROR = "DATABASE_ERROR"


class ErrorDetail(BaseModel):
    """
    Modelo RFC 7807 (Problem Details).

    Campos extra:
    - code: error code estable para clientes
    - errors: lista opcional de detalles (ej: [{"field":"x","msg":"..."}])
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

_OPENAPI_ERROR_CONTENT = {
    PROBLEM_JSON_MEDIA_TYPE: {"schema": {"$ref": "#/components/schemas/ErrorDetail"}}
}


def _problem_response(description: str) -> dict[str, Any]:
    return {
        "description": f"{description} (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    }


OPENAPI_ERROR_RESPONSES = {
    "400": _problem_response("Bad Request"),
    "401": _problem_response("Unauthorized"),
    "403": _problem_response("Forbidden"),
    "404": _problem_response("Not Found"),
    "409": _problem_response("Conflict"),
    "422": _problem_response("Validation Error"),
    "429": _problem_response("Too Many Requests"),
    "default": _problem_response("Error"),
}


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AppHTTPException

    Responsabilidades:
      - Adjuntar un ErrorCode estable
      - Transportar errores de validación (errors[])
      - Permitir headers custom (Retry-After, x-ratelimit-*)

    Colaboradores:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.errors = errors


# ---------------------------------------------------------------------------
# Factories de error (helpers)
# ---------------------------------------------------------------------------
def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(422, ErrorCode.VALIDATION_ERROR, detail, errors)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return AppHTTPException(
        404, ErrorCode.NOT_FOUND, f"{resource} '{identifier}' no encontrado"
    )


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.CONFLICT, detail)


def unauthorized(detail: str = "Autenticación requerida") -> AppHTTPException:
    return AppHTTPException(
        401, ErrorCode.UNAUTHORIZED, detail, headers={"WWW-Authenticate": "Bearer"}
    )


def forbidden(detail: str = "Acceso denegado") -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail)


def password_required(
    detail: str = "Password required for password-protected level",
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.PASSWORD_REQUIRED, detail)


def invalid_privacy_level(detail: str) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.INVALID_PRIVACY_LEVEL, detail)


def rate_limited(
    retry_after: int = 60, headers: dict[str, str] | None = None
) -> AppHTTPException:
    all_headers = {"Retry-After": str(retry_after)}
    if headers:
        all_headers.update(headers)
    return AppHTTPException(
        429,
        ErrorCode.RATE_LIMITED,
        f"Demasiadas solicitudes. Reintentá en {retry_after}s",
        headers=all_headers,
    )


def internal_error(detail: str = "Ocurrió un error inesperado") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


def service_unavailable(service: str) -> AppHTTPException:
    return AppHTTPException(
        503,
        ErrorCode.SERVICE_UNAVAILABLE,
        f"Servicio no disponible temporalmente: {service}",
    )


# ---------------------------------------------------------------------------
# Handlers FastAPI
# ---------------------------------------------------------------------------
def request_id_of(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """
    Handler para AppHTTPException.

    Incluye instance (URL) y propaga headers opcionales (Retry-After, etc.).
    """
    request_id = request_id_of(request)

    errors = exc.errors or []
    if request_id:
        errors = [*errors, {"request_id": request_id}]

    error = ErrorDetail(
        type=f"about:blank/{exc.code.value.lower()}",
        title=exc.code.value.replace("_", " ").title(),
        status=exc.status_code,
        detail=str(exc.detail),
        code=exc.code,
        instance=str(request.url),
        errors=errors or None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error.model_dump(exclude_none=True),
        headers=exc.headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )

