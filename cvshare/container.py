"""
===============================================================================
TARJETA CRC - cvshare/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer repositorios, codec, rate limiter y casos de uso (DIP).
  - Exponer factories para FastAPI (Depends).
  - Singletons con lru_cache para adapters y servicios.
  - Elegir in-memory vs PostgreSQL según Settings.uses_postgres().

Colaboradores:
  - cvshare.crosscutting.config.get_settings
  - cvshare.domain.repositories / services (puertos)
  - cvshare.infrastructure.repositories (implementaciones)
  - cvshare.application.usecases (casos de uso)

Notas:
  - Sin lógica de negocio; no depende de FastAPI.
  - Tests: clear_container_caches() entre casos para aislar estado.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.rate_limiting import InMemoryRateLimitStore, RateLimiter
from .application.usecases.collaboration import (
    AcceptInvitationUseCase,
    DeclineInvitationUseCase,
    InviteCollaboratorUseCase,
    LeaveWorkspaceUseCase,
    ListCollaboratorsUseCase,
    ListPendingInvitationsUseCase,
    RemoveCollaboratorUseCase,
    UpdateCollaboratorUseCase,
)
from .application.usecases.workspace import (
    CreateWorkspaceUseCase,
    DeleteWorkspaceUseCase,
    EvaluateAccessUseCase,
    GetPrivacySettingsUseCase,
    GetPublicWorkspaceUseCase,
    UpdatePrivacyUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    CollaboratorRepository,
    RateLimitStore,
    WorkspaceRepository,
)
from .domain.services import CredentialCodec
from .identity.credentials import Argon2CredentialCodec
from .infrastructure.repositories import (
    InMemoryCollaboratorRepository,
    InMemoryWorkspaceRepository,
    PostgresCollaboratorRepository,
    PostgresRateLimitStore,
    PostgresWorkspaceRepository,
)

# =============================================================================
# Repositorios / servicios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_workspace_repository() -> WorkspaceRepository:
    """Workspaces (in-memory sin DATABASE_URL o en test; Postgres en runtime)."""
    if not get_settings().uses_postgres():
        return InMemoryWorkspaceRepository()
    return PostgresWorkspaceRepository()


@lru_cache(maxsize=1)
def get_collaborator_repository() -> CollaboratorRepository:
    if not get_settings().uses_postgres():
        return InMemoryCollaboratorRepository()
    return PostgresCollaboratorRepository()


@lru_cache(maxsize=1)
def get_rate_limit_store() -> RateLimitStore:
    if not get_settings().uses_postgres():
        return InMemoryRateLimitStore()
    return PostgresRateLimitStore()


@lru_cache(maxsize=1)
def get_credential_codec() -> CredentialCodec:
    return Argon2CredentialCodec()


@lru_cache(maxsize=1)
def get_rate_limiter() -> RateLimiter:
    return RateLimiter(get_rate_limit_store())


# =============================================================================
# Casos de uso: workspace / privacidad
# =============================================================================


def get_create_workspace_use_case() -> CreateWorkspaceUseCase:
    return CreateWorkspaceUseCase(
        workspace_repository=get_workspace_repository(),
        collaborator_repository=get_collaborator_repository(),
        codec=get_credential_codec(),
    )


def get_get_public_workspace_use_case() -> GetPublicWorkspaceUseCase:
    return GetPublicWorkspaceUseCase(repository=get_workspace_repository())


def get_evaluate_access_use_case() -> EvaluateAccessUseCase:
    return EvaluateAccessUseCase(
        workspace_repository=get_workspace_repository(),
        collaborator_repository=get_collaborator_repository(),
        codec=get_credential_codec(),
    )


def get_update_privacy_use_case() -> UpdatePrivacyUseCase:
    return UpdatePrivacyUseCase(
        repository=get_workspace_repository(), codec=get_credential_codec()
    )


def get_get_privacy_settings_use_case() -> GetPrivacySettingsUseCase:
    return GetPrivacySettingsUseCase(repository=get_workspace_repository())


def get_delete_workspace_use_case() -> DeleteWorkspaceUseCase:
    return DeleteWorkspaceUseCase(
        workspace_repository=get_workspace_repository(),
        collaborator_repository=get_collaborator_repository(),
    )


# =============================================================================
# Casos de uso: colaboración
# =============================================================================


def get_invite_collaborator_use_case() -> InviteCollaboratorUseCase:
    return InviteCollaboratorUseCase(
        workspace_repository=get_workspace_repository(),
        collaborator_repository=get_collaborator_repository(),
    )


def get_accept_invitation_use_case() -> AcceptInvitationUseCase:
    return AcceptInvitationUseCase(get_collaborator_repository())


def get_decline_invitation_use_case() -> DeclineInvitationUseCase:
    return DeclineInvitationUseCase(get_collaborator_repository())


def get_list_collaborators_use_case() -> ListCollaboratorsUseCase:
    return ListCollaboratorsUseCase(get_collaborator_repository())


def get_list_pending_invitations_use_case() -> ListPendingInvitationsUseCase:
    return ListPendingInvitationsUseCase(get_collaborator_repository())


def get_update_collaborator_use_case() -> UpdateCollaboratorUseCase:
    return UpdateCollaboratorUseCase(
        workspace_repository=get_workspace_repository(),
        collaborator_repository=get_collaborator_repository(),
    )


def get_remove_collaborator_use_case() -> RemoveCollaboratorUseCase:
    return RemoveCollaboratorUseCase(
        workspace_repository=get_workspace_repository(),
        collaborator_repository=get_collaborator_repository(),
    )


def get_leave_workspace_use_case() -> LeaveWorkspaceUseCase:
    return LeaveWorkspaceUseCase(get_collaborator_repository())


def clear_container_caches() -> None:
    """Resetea singletons (tests)."""
    for factory in (
        get_workspace_repository,
        get_collaborator_repository,
        get_rate_limit_store,
        get_credential_codec,
        get_rate_limiter,
    ):
        factory.cache_clear()
