"""
===============================================================================
USE CASES: List Collaborators / List Pending Invitations
===============================================================================

ListCollaborators:
    - El actor debe ser miembro ACCEPTED del workspace.
    - Devuelve todos los registros del workspace (cualquier status).

ListPendingInvitations:
    - Invitaciones PENDING dirigidas al email del actor.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.entities import Actor
from ....domain.repositories import CollaboratorRepository
from .collaboration_results import (
    CollaborationErrorCode,
    CollaborationListResult,
    collaboration_error,
)


class ListCollaboratorsUseCase:
    def __init__(self, collaborator_repository: CollaboratorRepository) -> None:
        self._collaborators = collaborator_repository

    def execute(
        self, workspace_id: UUID, actor: Actor | None
    ) -> CollaborationListResult:
        if actor is None or not actor.user_id:
            return CollaborationListResult(
                error=collaboration_error(
                    CollaborationErrorCode.UNAUTHORIZED, "Unauthorized"
                )
            )

        if self._collaborators.get_accepted_for_user(workspace_id, actor.user_id) is None:
            return CollaborationListResult(
                error=collaboration_error(CollaborationErrorCode.FORBIDDEN, "Access denied")
            )

        return CollaborationListResult(
            records=self._collaborators.list_by_workspace(workspace_id)
        )


class ListPendingInvitationsUseCase:
    def __init__(self, collaborator_repository: CollaboratorRepository) -> None:
        self._collaborators = collaborator_repository

    def execute(self, actor: Actor | None) -> CollaborationListResult:
        if actor is None or not actor.email:
            return CollaborationListResult(
                error=collaboration_error(
                    CollaborationErrorCode.UNAUTHORIZED, "Unauthorized"
                )
            )

        email = actor.email.strip().lower()
        return CollaborationListResult(
            records=self._collaborators.list_pending_for_email(email)
        )
