"""
===============================================================================
USE CASES: Update / Remove Collaborator, Leave Workspace
===============================================================================

Name:
    Collaborator management use cases

Reglas:
    - Update / Remove: solo el owner del workspace; el registro OWNER es
      inmutable (no se degrada ni se borra).
    - Update: cambiar de rol resetea permisos a los del rol; permisos
      explícitos pisan ese default.
    - Leave: el actor borra su propia membresía ACCEPTED; el owner no puede
      irse (debe borrar el workspace).

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Classes:
    UpdateCollaboratorUseCase, RemoveCollaboratorUseCase, LeaveWorkspaceUseCase

Collaborators:
    - WorkspaceRepository.get_workspace (ownership)
    - CollaboratorRepository.get / update / delete / get_accepted_for_user
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from ....domain.entities import (
    Actor,
    CollaborationRecord,
    CollaboratorPermissions,
    CollaboratorRole,
)
from ....domain.repositories import CollaboratorRepository, WorkspaceRepository
from .collaboration_results import (
    CollaborationErrorCode,
    CollaborationRemovalResult,
    CollaborationResult,
    collaboration_error,
)
from .invite_collaborator import parse_assignable_role

logger = logging.getLogger(__name__)


def _load_owned_record(
    workspaces: WorkspaceRepository,
    collaborators: CollaboratorRepository,
    collaborator_id: UUID,
    actor: Actor | None,
    *,
    forbidden_message: str,
) -> CollaborationRecord | CollaborationResult:
    """Registro a gestionar, o un CollaborationResult con el error."""
    if actor is None or not actor.user_id:
        return CollaborationResult(
            error=collaboration_error(CollaborationErrorCode.UNAUTHORIZED, "Unauthorized")
        )

    record = collaborators.get(collaborator_id)
    if record is None:
        return CollaborationResult(
            error=collaboration_error(
                CollaborationErrorCode.NOT_FOUND, "Collaborator not found"
            )
        )

    workspace = workspaces.get_workspace(record.workspace_id)
    if workspace is None or not workspace.is_owned_by(actor.user_id):
        return CollaborationResult(
            error=collaboration_error(CollaborationErrorCode.FORBIDDEN, forbidden_message)
        )

    return record


@dataclass(frozen=True)
class UpdateCollaboratorInput:
    collaborator_id: UUID
    actor: Actor | None = None
    role: CollaboratorRole | str | None = None
    permissions: CollaboratorPermissions | None = None


class UpdateCollaboratorUseCase:
    def __init__(
        self,
        workspace_repository: WorkspaceRepository,
        collaborator_repository: CollaboratorRepository,
    ) -> None:
        self._workspaces = workspace_repository
        self._collaborators = collaborator_repository

    def execute(self, input_data: UpdateCollaboratorInput) -> CollaborationResult:
        loaded = _load_owned_record(
            self._workspaces,
            self._collaborators,
            input_data.collaborator_id,
            input_data.actor,
            forbidden_message="Only workspace owner can update collaborator permissions",
        )
        if isinstance(loaded, CollaborationResult):
            return loaded

        if loaded.is_owner:
            return CollaborationResult(
                error=collaboration_error(
                    CollaborationErrorCode.CONFLICT, "Cannot modify owner permissions"
                )
            )

        if input_data.role is not None:
            role = parse_assignable_role(input_data.role)
            if role is None:
                return CollaborationResult(
                    error=collaboration_error(
                        CollaborationErrorCode.VALIDATION_ERROR, "Invalid role"
                    )
                )
            if role != loaded.role:
                loaded.role = role
                loaded.permissions = CollaboratorPermissions.for_role(role)

        if input_data.permissions is not None:
            loaded.permissions = input_data.permissions

        return CollaborationResult(record=self._collaborators.update(loaded))


class RemoveCollaboratorUseCase:
    def __init__(
        self,
        workspace_repository: WorkspaceRepository,
        collaborator_repository: CollaboratorRepository,
    ) -> None:
        self._workspaces = workspace_repository
        self._collaborators = collaborator_repository

    def execute(
        self, collaborator_id: UUID, actor: Actor | None
    ) -> CollaborationRemovalResult:
        loaded = _load_owned_record(
            self._workspaces,
            self._collaborators,
            collaborator_id,
            actor,
            forbidden_message="Only workspace owner can remove collaborators",
        )
        if isinstance(loaded, CollaborationResult):
            return CollaborationRemovalResult(removed=False, error=loaded.error)

        if loaded.is_owner:
            return CollaborationRemovalResult(
                removed=False,
                error=collaboration_error(
                    CollaborationErrorCode.CONFLICT, "Cannot remove workspace owner"
                ),
            )

        removed = self._collaborators.delete(loaded.id)
        logger.info(
            "Collaborator removed",
            extra={"workspace_id": str(loaded.workspace_id), "collaborator_id": str(loaded.id)},
        )
        return CollaborationRemovalResult(removed=removed)


class LeaveWorkspaceUseCase:
    def __init__(self, collaborator_repository: CollaboratorRepository) -> None:
        self._collaborators = collaborator_repository

    def execute(
        self, workspace_id: UUID, actor: Actor | None
    ) -> CollaborationRemovalResult:
        if actor is None or not actor.user_id:
            return CollaborationRemovalResult(
                removed=False,
                error=collaboration_error(
                    CollaborationErrorCode.UNAUTHORIZED, "Unauthorized"
                ),
            )

        membership = self._collaborators.get_accepted_for_user(
            workspace_id, actor.user_id
        )
        if membership is None:
            return CollaborationRemovalResult(
                removed=False,
                error=collaboration_error(
                    CollaborationErrorCode.NOT_FOUND,
                    "You are not a collaborator in this workspace",
                ),
            )

        if membership.is_owner:
            return CollaborationRemovalResult(
                removed=False,
                error=collaboration_error(
                    CollaborationErrorCode.CONFLICT,
                    "Workspace owner cannot leave. Transfer ownership or delete "
                    "the workspace instead.",
                ),
            )

        return CollaborationRemovalResult(
            removed=self._collaborators.delete(membership.id)
        )
