"""
===============================================================================
USE CASE: Get Privacy Settings (owner only)
===============================================================================

Responsibilities:
    - Devolver al owner su configuración actual: level, secret_token,
      allow_search_engines y has_password (el hash nunca sale).

Collaborators:
    - WorkspaceRepository.get_workspace
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.entities import Actor
from ....domain.repositories import WorkspaceRepository
from .workspace_results import (
    PrivacySettingsResult,
    PrivacySettingsView,
    WorkspaceErrorCode,
    workspace_error,
)


class GetPrivacySettingsUseCase:
    def __init__(self, repository: WorkspaceRepository) -> None:
        self._workspaces = repository

    def execute(self, workspace_id: UUID, actor: Actor | None) -> PrivacySettingsResult:
        workspace = self._workspaces.get_workspace(workspace_id)
        if workspace is None:
            return PrivacySettingsResult(
                error=workspace_error(
                    WorkspaceErrorCode.NOT_FOUND, "Workspace not found."
                )
            )

        if actor is None or not workspace.is_owned_by(actor.user_id):
            return PrivacySettingsResult(
                error=workspace_error(
                    WorkspaceErrorCode.FORBIDDEN,
                    "Only the workspace owner can view privacy settings.",
                )
            )

        privacy = workspace.privacy
        return PrivacySettingsResult(
            settings=PrivacySettingsView(
                level=privacy.level,
                secret_token=privacy.secret_token,
                allow_search_engines=privacy.allow_search_engines,
                has_password=privacy.has_password,
            )
        )
