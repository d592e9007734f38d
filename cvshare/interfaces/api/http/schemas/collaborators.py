"""
===============================================================================
TARJETA CRC - schemas/collaborators.py
===============================================================================

Módulo:
    Schemas HTTP para colaboradores e invitaciones

Responsabilidades:
    - DTOs de invitación, actualización de rol/permisos y listados.
    - Normalizar email de invitación (trim + lower).

Colaboradores:
    - domain.entities.CollaboratorPermissions
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .....domain.entities import CollaboratorPermissions


class PermissionsModel(BaseModel):
    can_edit: bool = False
    can_suggest_changes: bool = False
    can_view_analytics: bool = False
    can_invite_others: bool = False
    can_manage_settings: bool = False

    def to_domain(self) -> CollaboratorPermissions:
        return CollaboratorPermissions(**self.model_dump())


class InviteCollaboratorReq(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    role: str = Field(default="viewer", description="collaborator|viewer")
    permissions: PermissionsModel | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UpdateCollaboratorReq(BaseModel):
    role: str | None = None
    permissions: PermissionsModel | None = None


class CollaboratorRes(BaseModel):
    id: UUID
    workspace_id: UUID
    user_id: str | None = None
    invite_email: str | None = None
    role: str
    status: str
    permissions: PermissionsModel
    invited_by: str | None = None
    invited_at: datetime | None = None
    accepted_at: datetime | None = None


class CollaboratorsListRes(BaseModel):
    collaborators: list[CollaboratorRes]


class RemovalRes(BaseModel):
    removed: bool
