"""
Schemas HTTP de configuración de privacidad (solo owner).

El hash de password nunca sale; el token secreto solo en la vista de owner.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class UpdatePrivacyReq(BaseModel):
    level: str = Field(..., min_length=1, description="public|secret_link|password|private")
    password: str | None = Field(default=None, min_length=1, max_length=256)
    allow_search_engines: bool | None = None
    regenerate_token: bool = False


class PrivacySettingsRes(BaseModel):
    level: str
    secret_token: str | None = None
    allow_search_engines: bool
    has_password: bool
    description: str


class PrivacyUpdateRes(BaseModel):
    level: str
    allow_search_engines: bool
    has_password: bool
    secret_token: str | None = Field(
        default=None, description="Solo presente si se generó/regeneró"
    )
