"""
Collaboration use cases (package exports).

Invitaciones, membresías y gestión de colaboradores de un CV.
"""

from __future__ import annotations

from .collaboration_results import (
    CollaborationError,
    CollaborationErrorCode,
    CollaborationListResult,
    CollaborationRemovalResult,
    CollaborationResult,
)
from .invite_collaborator import (
    ASSIGNABLE_ROLES,
    InviteCollaboratorInput,
    InviteCollaboratorUseCase,
    parse_assignable_role,
)
from .list_collaborators import ListCollaboratorsUseCase, ListPendingInvitationsUseCase
from .manage_collaborator import (
    LeaveWorkspaceUseCase,
    RemoveCollaboratorUseCase,
    UpdateCollaboratorInput,
    UpdateCollaboratorUseCase,
)
from .respond_invitation import AcceptInvitationUseCase, DeclineInvitationUseCase

__all__ = [
    "AcceptInvitationUseCase",
    "DeclineInvitationUseCase",
    "InviteCollaboratorInput",
    "InviteCollaboratorUseCase",
    "LeaveWorkspaceUseCase",
    "ListCollaboratorsUseCase",
    "ListPendingInvitationsUseCase",
    "RemoveCollaboratorUseCase",
    "UpdateCollaboratorInput",
    "UpdateCollaboratorUseCase",
    "ASSIGNABLE_ROLES",
    "parse_assignable_role",
    "CollaborationError",
    "CollaborationErrorCode",
    "CollaborationListResult",
    "CollaborationRemovalResult",
    "CollaborationResult",
]
