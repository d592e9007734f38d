"""
===============================================================================
WORKSPACE USE CASES PACKAGE (Public API / Exports)
===============================================================================

Responsibilities:
    - Re-exportar casos de uso de workspaces de CV y sus DTOs/resultados.
    - Definir __all__ como contrato de API pública del paquete.

Collaborators:
    - create_workspace, get_public_workspace, evaluate_access,
      update_privacy, get_privacy_settings, delete_workspace,
      workspace_results
===============================================================================
"""

from __future__ import annotations

from .create_workspace import (
    CreateWorkspaceInput,
    CreateWorkspaceUseCase,
    is_valid_slug,
    normalize_slug,
)
from .delete_workspace import DeleteWorkspaceUseCase
from .evaluate_access import (
    GENERIC_DENIAL_REASON,
    EvaluateAccessInput,
    EvaluateAccessUseCase,
)
from .get_privacy_settings import GetPrivacySettingsUseCase
from .get_public_workspace import GetPublicWorkspaceUseCase
from .update_privacy import UpdatePrivacyInput, UpdatePrivacyUseCase
from .workspace_results import (
    CvAccessResult,
    DeleteWorkspaceResult,
    PrivacySettingsResult,
    PrivacySettingsView,
    PrivacyUpdateResult,
    PublicWorkspaceResult,
    PublicWorkspaceView,
    WorkspaceError,
    WorkspaceErrorCode,
    WorkspaceResult,
)

__all__ = [
    # Use Cases
    "CreateWorkspaceInput",
    "CreateWorkspaceUseCase",
    "DeleteWorkspaceUseCase",
    "EvaluateAccessInput",
    "EvaluateAccessUseCase",
    "GetPrivacySettingsUseCase",
    "GetPublicWorkspaceUseCase",
    "UpdatePrivacyInput",
    "UpdatePrivacyUseCase",
    # Helpers
    "GENERIC_DENIAL_REASON",
    "is_valid_slug",
    "normalize_slug",
    # Results
    "CvAccessResult",
    "DeleteWorkspaceResult",
    "PrivacySettingsResult",
    "PrivacySettingsView",
    "PrivacyUpdateResult",
    "PublicWorkspaceResult",
    "PublicWorkspaceView",
    "WorkspaceError",
    "WorkspaceErrorCode",
    "WorkspaceResult",
]
