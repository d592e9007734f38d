"""
===============================================================================
USE CASES: Accept / Decline Invitation
===============================================================================

Reglas comunes:
    - La invitación debe existir y estar PENDING.
    - El email invitado debe coincidir con el email del actor.

Accept:
    - El actor no puede tener ya una membresía ACCEPTED en ese workspace
      (una sola por workspace + usuario).
    - Setea user_id, accepted_at y status ACCEPTED.

Decline:
    - status DECLINED.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.entities import Actor, CollaborationRecord
from ....domain.repositories import CollaboratorRepository
from .collaboration_results import (
    CollaborationErrorCode,
    CollaborationResult,
    collaboration_error,
)


def _load_invitation(
    collaborators: CollaboratorRepository, invite_id: UUID, actor: Actor | None
) -> CollaborationRecord | CollaborationResult:
    if actor is None or not actor.user_id:
        return CollaborationResult(
            error=collaboration_error(CollaborationErrorCode.UNAUTHORIZED, "Unauthorized")
        )

    invitation = collaborators.get(invite_id)
    if invitation is None or not invitation.is_pending:
        return CollaborationResult(
            error=collaboration_error(
                CollaborationErrorCode.NOT_FOUND, "Invalid or expired invitation"
            )
        )

    if (invitation.invite_email or "") != (actor.email or "").strip().lower():
        return CollaborationResult(
            error=collaboration_error(
                CollaborationErrorCode.FORBIDDEN, "Email does not match invitation"
            )
        )

    return invitation


class AcceptInvitationUseCase:
    def __init__(self, collaborator_repository: CollaboratorRepository) -> None:
        self._collaborators = collaborator_repository

    def execute(self, invite_id: UUID, actor: Actor | None) -> CollaborationResult:
        loaded = _load_invitation(self._collaborators, invite_id, actor)
        if isinstance(loaded, CollaborationResult):
            return loaded

        if self._collaborators.get_accepted_for_user(
            loaded.workspace_id, actor.user_id
        ):
            return CollaborationResult(
                error=collaboration_error(
                    CollaborationErrorCode.CONFLICT,
                    "You are already a collaborator in this workspace",
                )
            )

        loaded.accept(actor.user_id)
        return CollaborationResult(record=self._collaborators.update(loaded))


class DeclineInvitationUseCase:
    def __init__(self, collaborator_repository: CollaboratorRepository) -> None:
        self._collaborators = collaborator_repository

    def execute(self, invite_id: UUID, actor: Actor | None) -> CollaborationResult:
        loaded = _load_invitation(self._collaborators, invite_id, actor)
        if isinstance(loaded, CollaborationResult):
            return loaded

        loaded.decline()
        return CollaborationResult(record=self._collaborators.update(loaded))
