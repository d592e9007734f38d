"""
===============================================================================
USE CASE: Delete Workspace (owner only)
===============================================================================

Responsibilities:
    - Verificar ownership.
    - Borrar los registros de colaboración y luego el workspace (la
      privacidad embebida desaparece con él).

Collaborators:
    - WorkspaceRepository.delete_workspace
    - CollaboratorRepository.delete_by_workspace
===============================================================================
"""

from __future__ import annotations

import logging
from uuid import UUID

from ....domain.entities import Actor
from ....domain.repositories import CollaboratorRepository, WorkspaceRepository
from .workspace_results import (
    DeleteWorkspaceResult,
    WorkspaceErrorCode,
    workspace_error,
)

logger = logging.getLogger(__name__)


class DeleteWorkspaceUseCase:
    def __init__(
        self,
        workspace_repository: WorkspaceRepository,
        collaborator_repository: CollaboratorRepository,
    ) -> None:
        self._workspaces = workspace_repository
        self._collaborators = collaborator_repository

    def execute(self, workspace_id: UUID, actor: Actor | None) -> DeleteWorkspaceResult:
        workspace = self._workspaces.get_workspace(workspace_id)
        if workspace is None:
            return DeleteWorkspaceResult(
                deleted=False,
                error=workspace_error(
                    WorkspaceErrorCode.NOT_FOUND, "Workspace not found."
                ),
            )

        if actor is None or not workspace.is_owned_by(actor.user_id):
            return DeleteWorkspaceResult(
                deleted=False,
                error=workspace_error(
                    WorkspaceErrorCode.FORBIDDEN,
                    "Only the workspace owner can delete it.",
                ),
            )

        removed = self._collaborators.delete_by_workspace(workspace.id)
        deleted = self._workspaces.delete_workspace(workspace.id)

        logger.info(
            "Workspace deleted",
            extra={"workspace_id": str(workspace.id), "collaborators_removed": removed},
        )
        return DeleteWorkspaceResult(deleted=deleted)
