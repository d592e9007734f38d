"""
===============================================================================
USE CASE: Get Public Workspace (metadata segura por slug)
===============================================================================

Responsibilities:
    - Resolver workspace por slug.
    - Exponer SOLO name/slug/description/level/allow_search_engines.
      Nunca secret_token ni password_hash.

Collaborators:
    - WorkspaceRepository.get_workspace_by_slug
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import WorkspaceRepository
from .create_workspace import normalize_slug
from .workspace_results import (
    PublicWorkspaceResult,
    PublicWorkspaceView,
    WorkspaceErrorCode,
    workspace_error,
)


class GetPublicWorkspaceUseCase:
    def __init__(self, repository: WorkspaceRepository) -> None:
        self._workspaces = repository

    def execute(self, slug: str) -> PublicWorkspaceResult:
        workspace = self._workspaces.get_workspace_by_slug(normalize_slug(slug))
        if workspace is None:
            return PublicWorkspaceResult(
                error=workspace_error(
                    WorkspaceErrorCode.NOT_FOUND, "Workspace not found."
                )
            )

        return PublicWorkspaceResult(
            view=PublicWorkspaceView(
                name=workspace.name,
                slug=workspace.slug,
                description=workspace.description,
                level=workspace.privacy.level,
                allow_search_engines=workspace.privacy.allow_search_engines,
            )
        )
