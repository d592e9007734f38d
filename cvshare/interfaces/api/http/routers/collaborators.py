"""
===============================================================================
TARJETA CRC - cvshare/interfaces/api/http/routers/collaborators.py
===============================================================================

Class/Module:
    Collaboration Router

Responsibilities:
    - Invitaciones (crear, listar pendientes, aceptar, rechazar).
    - Gestión de colaboradores (listar, cambiar rol/permisos, remover, salir).
    - Traducir CollaborationError -> RFC7807.

Collaborators:
    - application.usecases (Invite/Accept/Decline/List/Update/Remove/Leave)
    - identity.auth.require_user
    - container (factories DI)
    - schemas.collaborators
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from .....application.usecases import (
    AcceptInvitationUseCase,
    DeclineInvitationUseCase,
    InviteCollaboratorInput,
    InviteCollaboratorUseCase,
    LeaveWorkspaceUseCase,
    ListCollaboratorsUseCase,
    ListPendingInvitationsUseCase,
    RemoveCollaboratorUseCase,
    UpdateCollaboratorInput,
    UpdateCollaboratorUseCase,
)
from .....container import (
    get_accept_invitation_use_case,
    get_decline_invitation_use_case,
    get_invite_collaborator_use_case,
    get_leave_workspace_use_case,
    get_list_collaborators_use_case,
    get_list_pending_invitations_use_case,
    get_remove_collaborator_use_case,
    get_update_collaborator_use_case,
)
from .....crosscutting.error_responses import service_unavailable
from .....domain.entities import CollaborationRecord
from .....identity.auth import Principal, require_user
from ..dependencies import to_actor
from ..error_mapping import raise_collaboration_error
from ..schemas.collaborators import (
    CollaboratorRes,
    CollaboratorsListRes,
    InviteCollaboratorReq,
    PermissionsModel,
    RemovalRes,
    UpdateCollaboratorReq,
)

router = APIRouter()


def _to_collaborator_res(record: CollaborationRecord) -> CollaboratorRes:
    return CollaboratorRes(
        id=record.id,
        workspace_id=record.workspace_id,
        user_id=record.user_id,
        invite_email=record.invite_email,
        role=record.role.value,
        status=record.status.value,
        permissions=PermissionsModel(**record.permissions.to_dict()),
        invited_by=record.invited_by,
        invited_at=record.invited_at,
        accepted_at=record.accepted_at,
    )


def _single(result, *, resource: str, identifier: object) -> CollaboratorRes:
    if result.error is not None:
        raise_collaboration_error(
            result.error, resource=resource, identifier=identifier
        )
    if result.record is None:
        raise service_unavailable("Collaboration")
    return _to_collaborator_res(result.record)


# =============================================================================
# Workspace-scoped
# =============================================================================


@router.post(
    "/workspaces/{workspace_id}/collaborators",
    response_model=CollaboratorRes,
    status_code=201,
    tags=["collaborators"],
)
def invite_collaborator(
    workspace_id: UUID,
    req: InviteCollaboratorReq,
    use_case: InviteCollaboratorUseCase = Depends(get_invite_collaborator_use_case),
    principal: Principal = Depends(require_user()),
):
    result = use_case.execute(
        InviteCollaboratorInput(
            workspace_id=workspace_id,
            email=req.email,
            role=req.role,
            actor=to_actor(principal),
            custom_permissions=req.permissions.to_domain() if req.permissions else None,
        )
    )
    return _single(result, resource="Workspace", identifier=workspace_id)


@router.get(
    "/workspaces/{workspace_id}/collaborators",
    response_model=CollaboratorsListRes,
    tags=["collaborators"],
)
def list_collaborators(
    workspace_id: UUID,
    use_case: ListCollaboratorsUseCase = Depends(get_list_collaborators_use_case),
    principal: Principal = Depends(require_user()),
):
    result = use_case.execute(workspace_id, to_actor(principal))
    if result.error is not None:
        raise_collaboration_error(
            result.error, resource="Workspace", identifier=workspace_id
        )
    return CollaboratorsListRes(
        collaborators=[_to_collaborator_res(r) for r in result.records]
    )


@router.post(
    "/workspaces/{workspace_id}/leave",
    response_model=RemovalRes,
    tags=["collaborators"],
)
def leave_workspace(
    workspace_id: UUID,
    use_case: LeaveWorkspaceUseCase = Depends(get_leave_workspace_use_case),
    principal: Principal = Depends(require_user()),
):
    result = use_case.execute(workspace_id, to_actor(principal))
    if result.error is not None:
        raise_collaboration_error(
            result.error, resource="Membership", identifier=workspace_id
        )
    return RemovalRes(removed=result.removed)


# =============================================================================
# Collaborator-scoped
# =============================================================================


@router.patch(
    "/collaborators/{collaborator_id}",
    response_model=CollaboratorRes,
    tags=["collaborators"],
)
def update_collaborator(
    collaborator_id: UUID,
    req: UpdateCollaboratorReq,
    use_case: UpdateCollaboratorUseCase = Depends(get_update_collaborator_use_case),
    principal: Principal = Depends(require_user()),
):
    result = use_case.execute(
        UpdateCollaboratorInput(
            collaborator_id=collaborator_id,
            actor=to_actor(principal),
            role=req.role,
            permissions=req.permissions.to_domain() if req.permissions else None,
        )
    )
    return _single(result, resource="Collaborator", identifier=collaborator_id)


@router.delete(
    "/collaborators/{collaborator_id}",
    response_model=RemovalRes,
    tags=["collaborators"],
)
def remove_collaborator(
    collaborator_id: UUID,
    use_case: RemoveCollaboratorUseCase = Depends(get_remove_collaborator_use_case),
    principal: Principal = Depends(require_user()),
):
    result = use_case.execute(collaborator_id, to_actor(principal))
    if result.error is not None:
        raise_collaboration_error(
            result.error, resource="Collaborator", identifier=collaborator_id
        )
    return RemovalRes(removed=result.removed)


# =============================================================================
# Invitaciones (actor = invitado)
# =============================================================================


@router.get(
    "/invitations",
    response_model=CollaboratorsListRes,
    tags=["invitations"],
)
def list_pending_invitations(
    use_case: ListPendingInvitationsUseCase = Depends(
        get_list_pending_invitations_use_case
    ),
    principal: Principal = Depends(require_user()),
):
    result = use_case.execute(to_actor(principal))
    if result.error is not None:
        raise_collaboration_error(result.error)
    return CollaboratorsListRes(
        collaborators=[_to_collaborator_res(r) for r in result.records]
    )


@router.post(
    "/invitations/{invite_id}/accept",
    response_model=CollaboratorRes,
    tags=["invitations"],
)
def accept_invitation(
    invite_id: UUID,
    use_case: AcceptInvitationUseCase = Depends(get_accept_invitation_use_case),
    principal: Principal = Depends(require_user()),
):
    result = use_case.execute(invite_id, to_actor(principal))
    return _single(result, resource="Invitation", identifier=invite_id)


@router.post(
    "/invitations/{invite_id}/decline",
    response_model=CollaboratorRes,
    tags=["invitations"],
)
def decline_invitation(
    invite_id: UUID,
    use_case: DeclineInvitationUseCase = Depends(get_decline_invitation_use_case),
    principal: Principal = Depends(require_user()),
):
    result = use_case.execute(invite_id, to_actor(principal))
    return _single(result, resource="Invitation", identifier=invite_id)
