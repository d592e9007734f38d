"""
===============================================================================
USE CASE: Create Workspace
===============================================================================

Name:
    Create Workspace Use Case

Business Goal:
    Crear el workspace de un CV garantizando:
      - slug normalizado, válido y único
      - privacidad inicial coherente (token generado para secret_link,
        password obligatoria para password)
      - registro OWNER aceptado con todos los permisos

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateWorkspaceUseCase

Responsibilities:
    - Validar actor, nombre y slug.
    - Verificar unicidad del slug.
    - Construir la privacidad inicial con domain.privacy_transitions.
    - Persistir workspace + registro OWNER.

Collaborators:
    - WorkspaceRepository, CollaboratorRepository
    - CredentialCodec
    - workspace_results: WorkspaceResult / WorkspaceErrorCode

-------------------------------------------------------------------------------
ERROR MAPPING
-------------------------------------------------------------------------------
    - FORBIDDEN: actor ausente
    - VALIDATION_ERROR: nombre vacío, slug inválido
    - INVALID_PRIVACY_LEVEL / PASSWORD_REQUIRED: privacidad inicial inválida
    - CONFLICT: slug ya usado
===============================================================================
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Final
from uuid import uuid4

from ....domain.entities import (
    Actor,
    CollaborationRecord,
    CollaborationStatus,
    CollaboratorPermissions,
    CollaboratorRole,
    PrivacyConfiguration,
    PrivacyLevel,
    Workspace,
)
from ....domain.errors import InvalidPrivacyLevelError, PasswordRequiredError
from ....domain.privacy_transitions import apply_privacy_level
from ....domain.repositories import CollaboratorRepository, WorkspaceRepository
from ....domain.services import CredentialCodec
from .workspace_results import WorkspaceErrorCode, WorkspaceResult, workspace_error

logger = logging.getLogger(__name__)

SLUG_MIN_LENGTH: Final[int] = 3
SLUG_MAX_LENGTH: Final[int] = 64
_SLUG_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9-]+$")


def normalize_slug(raw_slug: str | None) -> str:
    return (raw_slug or "").strip().lower()


def is_valid_slug(slug: str) -> bool:
    return (
        SLUG_MIN_LENGTH <= len(slug) <= SLUG_MAX_LENGTH
        and _SLUG_PATTERN.match(slug) is not None
    )


@dataclass(frozen=True)
class CreateWorkspaceInput:
    name: str
    slug: str
    actor: Actor | None = None
    description: str | None = None
    privacy_level: PrivacyLevel | str = PrivacyLevel.PUBLIC
    password: str | None = None
    allow_search_engines: bool | None = None


class CreateWorkspaceUseCase:
    def __init__(
        self,
        workspace_repository: WorkspaceRepository,
        collaborator_repository: CollaboratorRepository,
        codec: CredentialCodec,
    ) -> None:
        self._workspaces = workspace_repository
        self._collaborators = collaborator_repository
        self._codec = codec

    def execute(self, input_data: CreateWorkspaceInput) -> WorkspaceResult:
        actor = input_data.actor
        if actor is None or not actor.user_id:
            return self._error(
                WorkspaceErrorCode.FORBIDDEN, "Actor is required to create workspace."
            )

        name = (input_data.name or "").strip()
        if not name:
            return self._error(
                WorkspaceErrorCode.VALIDATION_ERROR, "Workspace name is required."
            )

        slug = normalize_slug(input_data.slug)
        if not is_valid_slug(slug):
            return self._error(
                WorkspaceErrorCode.VALIDATION_ERROR,
                "Slug must be 3-64 characters of lowercase letters, digits or hyphens.",
            )

        if self._workspaces.get_workspace_by_slug(slug) is not None:
            return self._error(WorkspaceErrorCode.CONFLICT, "Slug already in use.")

        # R: mismo camino que una transición, partiendo de una config vacía.
        try:
            transition = apply_privacy_level(
                PrivacyConfiguration(),
                input_data.privacy_level,
                codec=self._codec,
                new_password=input_data.password,
            )
        except InvalidPrivacyLevelError as exc:
            return self._error(WorkspaceErrorCode.INVALID_PRIVACY_LEVEL, str(exc))
        except PasswordRequiredError as exc:
            return self._error(WorkspaceErrorCode.PASSWORD_REQUIRED, str(exc))

        privacy = transition.config
        allow = input_data.allow_search_engines
        privacy = privacy.with_changes(
            allow_search_engines=(
                allow if allow is not None else privacy.level == PrivacyLevel.PUBLIC
            )
        )

        now = datetime.now(timezone.utc)
        workspace = self._workspaces.create_workspace(
            Workspace(
                id=uuid4(),
                name=name,
                slug=slug,
                owner_user_id=actor.user_id,
                privacy=privacy,
                description=input_data.description,
                created_at=now,
                updated_at=now,
            )
        )

        owner_record = CollaborationRecord(
            id=uuid4(),
            workspace_id=workspace.id,
            role=CollaboratorRole.OWNER,
            permissions=CollaboratorPermissions.for_role(CollaboratorRole.OWNER),
            status=CollaborationStatus.ACCEPTED,
            user_id=actor.user_id,
            invite_email=actor.email or None,
            invited_by=actor.user_id,
            invited_at=now,
            accepted_at=now,
        )
        try:
            self._collaborators.create(owner_record)
        except Exception:
            # Sin registro owner el workspace queda huérfano: se revierte.
            self._workspaces.delete_workspace(workspace.id)
            logger.error(
                "Owner record insert failed; workspace rolled back",
                extra={"workspace_id": str(workspace.id)},
            )
            raise

        return WorkspaceResult(
            workspace=workspace, secret_token=transition.generated_token
        )

    @staticmethod
    def _error(code: WorkspaceErrorCode, message: str) -> WorkspaceResult:
        return WorkspaceResult(error=workspace_error(code, message))
