"""
===============================================================================
USE CASE: Invite Collaborator
===============================================================================

Name:
    Invite Collaborator Use Case

Business Goal:
    Invitar a alguien por email a colaborar (o solo ver) un CV.

Reglas:
    - El actor necesita un registro ACCEPTED con can_invite_others.
    - Solo se asignan roles collaborator / viewer (owner nunca por invitación).
    - Email normalizado (trim + lower).
    - Una invitación PENDING o una membresía ACCEPTED existente -> CONFLICT.
    - Permisos: custom_permissions si vienen, si no los del rol.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    InviteCollaboratorUseCase

Collaborators:
    - WorkspaceRepository.get_workspace
    - CollaboratorRepository.get_accepted_for_user / find_by_email / create
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Final
from uuid import UUID, uuid4

from ....domain.entities import (
    Actor,
    CollaborationRecord,
    CollaborationStatus,
    CollaboratorPermissions,
    CollaboratorRole,
)
from ....domain.repositories import CollaboratorRepository, WorkspaceRepository
from .collaboration_results import (
    CollaborationErrorCode,
    CollaborationResult,
    collaboration_error,
)

logger = logging.getLogger(__name__)

ASSIGNABLE_ROLES: Final[frozenset[CollaboratorRole]] = frozenset(
    {CollaboratorRole.COLLABORATOR, CollaboratorRole.VIEWER}
)


def parse_assignable_role(raw_role: object) -> CollaboratorRole | None:
    """collaborator / viewer; cualquier otra cosa (incluido owner) -> None."""
    if isinstance(raw_role, CollaboratorRole):
        role = raw_role
    elif isinstance(raw_role, str):
        try:
            role = CollaboratorRole(raw_role.strip().lower())
        except ValueError:
            return None
    else:
        return None
    return role if role in ASSIGNABLE_ROLES else None


@dataclass(frozen=True)
class InviteCollaboratorInput:
    workspace_id: UUID
    email: str
    role: CollaboratorRole | str
    actor: Actor | None = None
    custom_permissions: CollaboratorPermissions | None = None


class InviteCollaboratorUseCase:
    def __init__(
        self,
        workspace_repository: WorkspaceRepository,
        collaborator_repository: CollaboratorRepository,
    ) -> None:
        self._workspaces = workspace_repository
        self._collaborators = collaborator_repository

    def execute(self, input_data: InviteCollaboratorInput) -> CollaborationResult:
        actor = input_data.actor
        if actor is None or not actor.user_id:
            return self._error(CollaborationErrorCode.UNAUTHORIZED, "Unauthorized")

        workspace = self._workspaces.get_workspace(input_data.workspace_id)
        if workspace is None:
            return self._error(CollaborationErrorCode.NOT_FOUND, "Workspace not found")

        membership = self._collaborators.get_accepted_for_user(
            workspace.id, actor.user_id
        )
        if membership is None or not membership.permissions.can_invite_others:
            return self._error(
                CollaborationErrorCode.FORBIDDEN,
                "Insufficient permissions to invite collaborators",
            )

        role = parse_assignable_role(input_data.role)
        if role is None:
            return self._error(
                CollaborationErrorCode.VALIDATION_ERROR,
                "Invalid role. Only 'collaborator' and 'viewer' roles can be assigned",
            )

        email = (input_data.email or "").strip().lower()
        if not email:
            return self._error(
                CollaborationErrorCode.VALIDATION_ERROR, "Email is required"
            )

        if self._collaborators.find_by_email(
            workspace.id, email, CollaborationStatus.PENDING
        ):
            return self._error(
                CollaborationErrorCode.CONFLICT,
                "Email already has a pending invitation",
            )
        if self._collaborators.find_by_email(
            workspace.id, email, CollaborationStatus.ACCEPTED
        ):
            return self._error(
                CollaborationErrorCode.CONFLICT, "Email is already a collaborator"
            )

        record = self._collaborators.create(
            CollaborationRecord(
                id=uuid4(),
                workspace_id=workspace.id,
                role=role,
                permissions=input_data.custom_permissions
                or CollaboratorPermissions.for_role(role),
                status=CollaborationStatus.PENDING,
                invite_email=email,
                invited_by=actor.user_id,
                invited_at=datetime.now(timezone.utc),
            )
        )

        logger.info(
            "Collaborator invited",
            extra={
                "workspace_id": str(workspace.id),
                "invite_id": str(record.id),
                "role": role.value,
            },
        )
        return CollaborationResult(record=record)

    @staticmethod
    def _error(code: CollaborationErrorCode, message: str) -> CollaborationResult:
        return CollaborationResult(error=collaboration_error(code, message))
