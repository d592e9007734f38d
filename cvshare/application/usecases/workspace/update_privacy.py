"""
===============================================================================
USE CASE: Update Privacy (owner only)
===============================================================================

Name:
    Update Privacy Use Case

Business Goal:
    Cambiar el nivel de privacidad de un CV preservando credenciales previas,
    y devolver el secret token en claro SOLO cuando se generó ahora.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    UpdatePrivacyUseCase

Responsibilities:
    - Verificar que el actor sea el owner del workspace.
    - Calcular la nueva configuración (domain.privacy_transitions).
    - Persistirla en una sola escritura.

Collaborators:
    - WorkspaceRepository.get_workspace / update_privacy
    - CredentialCodec

Error Mapping:
    - NOT_FOUND: workspace inexistente
    - FORBIDDEN: actor ausente o no owner
    - INVALID_PRIVACY_LEVEL / PASSWORD_REQUIRED: errores de dominio
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from ....domain.entities import Actor, PrivacyLevel
from ....domain.errors import InvalidPrivacyLevelError, PasswordRequiredError
from ....domain.privacy_transitions import apply_privacy_level
from ....domain.repositories import WorkspaceRepository
from ....domain.services import CredentialCodec
from .workspace_results import (
    PrivacyUpdateResult,
    WorkspaceErrorCode,
    workspace_error,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdatePrivacyInput:
    workspace_id: UUID
    new_level: PrivacyLevel | str
    actor: Actor | None = None
    new_password: str | None = None
    allow_search_engines: bool | None = None
    regenerate_token: bool = False


class UpdatePrivacyUseCase:
    def __init__(self, repository: WorkspaceRepository, codec: CredentialCodec) -> None:
        self._workspaces = repository
        self._codec = codec

    def execute(self, input_data: UpdatePrivacyInput) -> PrivacyUpdateResult:
        workspace = self._workspaces.get_workspace(input_data.workspace_id)
        if workspace is None:
            return self._error(WorkspaceErrorCode.NOT_FOUND, "Workspace not found.")

        actor = input_data.actor
        if actor is None or not workspace.is_owned_by(actor.user_id):
            return self._error(
                WorkspaceErrorCode.FORBIDDEN,
                "Only the workspace owner can change privacy settings.",
            )

        try:
            transition = apply_privacy_level(
                workspace.privacy,
                input_data.new_level,
                codec=self._codec,
                new_password=input_data.new_password,
                regenerate_token=input_data.regenerate_token,
                allow_search_engines=input_data.allow_search_engines,
            )
        except InvalidPrivacyLevelError as exc:
            return self._error(WorkspaceErrorCode.INVALID_PRIVACY_LEVEL, str(exc))
        except PasswordRequiredError as exc:
            return self._error(WorkspaceErrorCode.PASSWORD_REQUIRED, str(exc))

        updated = self._workspaces.update_privacy(workspace.id, transition.config)
        if updated is None:
            return self._error(WorkspaceErrorCode.NOT_FOUND, "Workspace not found.")

        logger.info(
            "Privacy level updated",
            extra={
                "workspace_id": str(workspace.id),
                "privacy_level": PrivacyLevel(transition.config.level).value,
                "token_generated": transition.generated_token is not None,
            },
        )
        return PrivacyUpdateResult(
            privacy=updated.privacy, secret_token=transition.generated_token
        )

    @staticmethod
    def _error(code: WorkspaceErrorCode, message: str) -> PrivacyUpdateResult:
        return PrivacyUpdateResult(error=workspace_error(code, message))
