"""
===============================================================================
WORKSPACE USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Workspace Use Case Results

Business Goal:
    Modelos compartidos de resultados y errores para los casos de uso de
    workspaces de CV (creación, privacidad, acceso, borrado).

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar
      excepciones, así la capa HTTP mapea códigos estables a status.
    - Una denegación de acceso NO es error: viaja en CvAccessResult.decision.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    workspace_results models (module)

Responsibilities:
    - WorkspaceErrorCode / WorkspaceError
    - Resultados por comando/consulta

Collaborators:
    - domain.entities (Workspace, PrivacyConfiguration, AccessDecision)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID

from ....domain.entities import (
    AccessDecision,
    PrivacyConfiguration,
    PrivacyLevel,
    Workspace,
)


class WorkspaceErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: inputs inválidos o incompletos.
      - FORBIDDEN: actor no autorizado (no es owner).
      - NOT_FOUND: workspace inexistente.
      - CONFLICT: slug duplicado.
      - PASSWORD_REQUIRED: nivel password sin password nueva ni previa.
      - INVALID_PRIVACY_LEVEL: nivel fuera de los cuatro conocidos.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    PASSWORD_REQUIRED = "PASSWORD_REQUIRED"
    INVALID_PRIVACY_LEVEL = "INVALID_PRIVACY_LEVEL"


@dataclass(frozen=True)
class WorkspaceError:
    code: WorkspaceErrorCode
    message: str


def workspace_error(code: WorkspaceErrorCode, message: str) -> WorkspaceError:
    return WorkspaceError(code=code, message=message)


@dataclass
class WorkspaceResult:
    """
    Resultado con un único Workspace.

    secret_token solo viene cuando se generó en esta operación.
    """

    workspace: Workspace | None = None
    secret_token: Optional[str] = None
    error: WorkspaceError | None = None


@dataclass(frozen=True)
class PublicWorkspaceView:
    """Lo único que un visitante anónimo puede ver de un workspace."""

    name: str
    slug: str
    description: Optional[str]
    level: PrivacyLevel | str
    allow_search_engines: bool


@dataclass
class PublicWorkspaceResult:
    view: PublicWorkspaceView | None = None
    error: WorkspaceError | None = None


@dataclass
class CvAccessResult:
    decision: AccessDecision | None = None
    workspace_id: UUID | None = None
    error: WorkspaceError | None = None


@dataclass
class PrivacyUpdateResult:
    privacy: PrivacyConfiguration | None = None
    secret_token: Optional[str] = None
    error: WorkspaceError | None = None


@dataclass(frozen=True)
class PrivacySettingsView:
    """Vista de owner: incluye el token, nunca el hash."""

    level: PrivacyLevel | str
    secret_token: Optional[str]
    allow_search_engines: bool
    has_password: bool


@dataclass
class PrivacySettingsResult:
    settings: PrivacySettingsView | None = None
    error: WorkspaceError | None = None


@dataclass
class DeleteWorkspaceResult:
    deleted: bool
    error: WorkspaceError | None = None
