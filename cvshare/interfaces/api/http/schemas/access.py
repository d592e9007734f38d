"""
Schemas HTTP del chequeo de acceso a un CV.

Una denegación es un resultado normal (200), no un error HTTP.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CvAccessReq(BaseModel):
    token: str | None = Field(default=None, max_length=256)
    password: str | None = Field(default=None, max_length=256)


class AccessDecisionRes(BaseModel):
    slug: str
    can_access: bool
    requires_password: bool = False
    requires_authentication: bool = False
    is_collaborator: bool = False
    reason: str | None = None
