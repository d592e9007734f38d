"""
===============================================================================
USE CASE: Evaluate CV Access
===============================================================================

Name:
    Evaluate CV Access Use Case

Business Goal:
    Decidir si un visitante puede ver el CV publicado bajo un slug.

Why (Context / Intención):
    - La policy (domain.privacy_policy) es pura: este caso de uso resuelve
      antes todo lo que necesita (workspace por slug, colaboración aceptada
      del usuario) y arma el AccessRequestContext.
    - Una configuración persistida inválida es un problema de integridad de
      datos: se loguea del lado servidor y el visitante solo ve
      "Access denied".

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    EvaluateAccessUseCase

Responsibilities:
    - slug -> PrivacyConfiguration
    - user_id -> CollaborationRecord aceptado (si hay)
    - Delegar en evaluate_access() y devolver CvAccessResult

Collaborators:
    - WorkspaceRepository, CollaboratorRepository, CredentialCodec
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Final

from ....domain.entities import AccessRequestContext
from ....domain.privacy_policy import evaluate_access, is_invalid_configuration
from ....domain.repositories import CollaboratorRepository, WorkspaceRepository
from ....domain.services import CredentialCodec
from .create_workspace import normalize_slug
from .workspace_results import CvAccessResult, WorkspaceErrorCode, workspace_error

logger = logging.getLogger(__name__)

GENERIC_DENIAL_REASON: Final[str] = "Access denied"


@dataclass(frozen=True)
class EvaluateAccessInput:
    slug: str
    provided_token: str | None = None
    provided_password: str | None = None
    authenticated_user_id: str | None = None


class EvaluateAccessUseCase:
    def __init__(
        self,
        workspace_repository: WorkspaceRepository,
        collaborator_repository: CollaboratorRepository,
        codec: CredentialCodec,
    ) -> None:
        self._workspaces = workspace_repository
        self._collaborators = collaborator_repository
        self._codec = codec

    def execute(self, input_data: EvaluateAccessInput) -> CvAccessResult:
        workspace = self._workspaces.get_workspace_by_slug(
            normalize_slug(input_data.slug)
        )
        if workspace is None:
            return CvAccessResult(
                error=workspace_error(WorkspaceErrorCode.NOT_FOUND, "CV not found.")
            )

        user_id = input_data.authenticated_user_id
        collaboration = (
            self._collaborators.get_accepted_for_user(workspace.id, user_id)
            if user_id
            else None
        )

        context = AccessRequestContext(
            is_authenticated=bool(user_id),
            collaboration=collaboration,
            provided_token=input_data.provided_token,
            provided_password=input_data.provided_password,
        )
        decision = evaluate_access(workspace.privacy, context, self._codec)

        if is_invalid_configuration(decision):
            logger.error(
                "Invalid privacy configuration stored for workspace",
                extra={
                    "workspace_id": str(workspace.id),
                    "privacy_level": repr(workspace.privacy.level),
                },
            )
            decision = replace(decision, reason=GENERIC_DENIAL_REASON)

        return CvAccessResult(decision=decision, workspace_id=workspace.id)
