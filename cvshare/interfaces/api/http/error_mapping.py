"""
===============================================================================
TARJETA CRC - error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de casos de uso a HTTP Exceptions RFC7807.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Reglas:
  - Los use cases devuelven errores tipados (code + message).
  - La API traduce a RFC7807 (crosscutting.error_responses).
  - PASSWORD_REQUIRED / INVALID_PRIVACY_LEVEL solo llegan al owner (400).

Colaboradores:
  - application.usecases (WorkspaceError, CollaborationError)
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from ....application.usecases import (
    CollaborationError,
    CollaborationErrorCode,
    WorkspaceError,
    WorkspaceErrorCode,
)
from ....crosscutting.error_responses import (
    conflict,
    forbidden,
    internal_error,
    invalid_privacy_level,
    not_found,
    password_required,
    unauthorized,
    validation_error,
)


def raise_workspace_error(
    error: WorkspaceError,
    *,
    resource: str = "Workspace",
    identifier: object | None = None,
) -> NoReturn:
    """
    Traduce WorkspaceError -> HTTP.

    Nota:
      - identifier se usa para NOT_FOUND consistente (id o slug).
    """
    if error.code == WorkspaceErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == WorkspaceErrorCode.NOT_FOUND:
        raise not_found(resource, str(identifier or "-"))
    if error.code == WorkspaceErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if error.code == WorkspaceErrorCode.CONFLICT:
        raise conflict(error.message)
    if error.code == WorkspaceErrorCode.PASSWORD_REQUIRED:
        raise password_required(error.message)
    if error.code == WorkspaceErrorCode.INVALID_PRIVACY_LEVEL:
        raise invalid_privacy_level(error.message)

    raise internal_error(error.message)


def raise_collaboration_error(
    error: CollaborationError,
    *,
    resource: str = "Collaborator",
    identifier: object | None = None,
) -> NoReturn:
    if error.code == CollaborationErrorCode.UNAUTHORIZED:
        raise unauthorized(error.message)
    if error.code == CollaborationErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if error.code == CollaborationErrorCode.NOT_FOUND:
        raise not_found(resource, str(identifier or "-"))
    if error.code == CollaborationErrorCode.CONFLICT:
        raise conflict(error.message)
    if error.code == CollaborationErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)

    raise internal_error(error.message)
