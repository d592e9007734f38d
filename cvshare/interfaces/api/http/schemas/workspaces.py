"""
===============================================================================
TARJETA CRC - schemas/workspaces.py
===============================================================================

Módulo:
    Schemas HTTP para Workspaces de CV

Responsabilidades:
    - Definir DTOs de request/response para crear, leer y borrar workspaces.
    - Exponer a visitantes solo nombre, slug, descripción, nivel y
      allow_search_engines (nunca token ni hash).

Colaboradores:
    - domain.entities.PrivacyLevel
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .....domain.entities import PrivacyLevel


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateWorkspaceReq(BaseModel):
    """Request para crear workspace (el actor autenticado queda como owner)."""

    name: Annotated[
        str,
        Field(..., min_length=1, max_length=200, description="Nombre del CV"),
    ]
    slug: Annotated[
        str,
        Field(..., min_length=1, max_length=64, description="Slug público"),
    ]
    description: str | None = Field(default=None, max_length=2000)
    # str (no Enum): un nivel desconocido se responde 400 INVALID_PRIVACY_LEVEL
    privacy_level: str = Field(default=PrivacyLevel.PUBLIC.value)
    password: str | None = Field(default=None, min_length=1, max_length=256)
    allow_search_engines: bool | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class PrivacySummary(BaseModel):
    level: str
    allow_search_engines: bool
    has_password: bool


class WorkspaceRes(BaseModel):
    """Vista de owner de un workspace recién creado."""

    id: UUID
    name: str
    slug: str
    description: str | None = None
    owner_user_id: str
    privacy: PrivacySummary
    share_url: str
    secret_token: str | None = Field(
        default=None, description="Solo presente si se generó en esta operación"
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PublicWorkspaceRes(BaseModel):
    name: str
    slug: str
    description: str | None = None
    level: str
    allow_search_engines: bool


class DeleteWorkspaceRes(BaseModel):
    workspace_id: UUID
    deleted: bool
