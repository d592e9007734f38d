"""
===============================================================================
TARJETA CRC - cvshare/interfaces/api/http/routers/workspaces.py
===============================================================================

Class/Module:
    Workspace Router

Responsibilities:
    - Exponer endpoints HTTP de ciclo de vida y privacidad de workspaces.
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir WorkspaceError -> RFC7807.
    - Enforce de auth (JWT) y rate limit en el borde.

Collaborators:
    - application.usecases (Create/GetPublic/UpdatePrivacy/GetPrivacySettings/Delete)
    - application.sharing (build_cv_url, describe_privacy_level)
    - identity.auth (require_user)
    - container (factories DI)
    - schemas.workspaces / schemas.privacy

Patterns:
    - Controller / Router
    - Adapter (HTTP -> UseCase)
    - Error Mapping
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from .....application.sharing import build_cv_url, describe_privacy_level
from .....application.usecases import (
    CreateWorkspaceInput,
    CreateWorkspaceUseCase,
    DeleteWorkspaceUseCase,
    GetPrivacySettingsUseCase,
    GetPublicWorkspaceUseCase,
    UpdatePrivacyInput,
    UpdatePrivacyUseCase,
)
from .....container import (
    get_create_workspace_use_case,
    get_delete_workspace_use_case,
    get_get_privacy_settings_use_case,
    get_get_public_workspace_use_case,
    get_update_privacy_use_case,
)
from .....crosscutting.config import get_settings
from .....crosscutting.error_responses import service_unavailable
from .....crosscutting.rate_limit import ENDPOINT_PRIVACY_UPDATE
from .....domain.entities import PrivacyConfiguration, PrivacyLevel, Workspace
from .....identity.auth import Principal, require_user
from ..dependencies import require_rate_limit, to_actor
from ..error_mapping import raise_workspace_error
from ..schemas.privacy import PrivacySettingsRes, PrivacyUpdateRes, UpdatePrivacyReq
from ..schemas.workspaces import (
    CreateWorkspaceReq,
    DeleteWorkspaceRes,
    PrivacySummary,
    PublicWorkspaceRes,
    WorkspaceRes,
)

router = APIRouter()


# =============================================================================
# Helpers internos (puros / sin IO)
# =============================================================================


def _level_value(level: PrivacyLevel | str) -> str:
    return level.value if isinstance(level, PrivacyLevel) else str(level)


def _privacy_summary(privacy: PrivacyConfiguration) -> PrivacySummary:
    return PrivacySummary(
        level=_level_value(privacy.level),
        allow_search_engines=privacy.allow_search_engines,
        has_password=privacy.has_password,
    )


def _to_workspace_res(ws: Workspace, secret_token: str | None) -> WorkspaceRes:
    """Mapea entidad de dominio -> DTO HTTP (vista de owner)."""
    return WorkspaceRes(
        id=ws.id,
        name=ws.name,
        slug=ws.slug,
        description=ws.description,
        owner_user_id=ws.owner_user_id,
        privacy=_privacy_summary(ws.privacy),
        share_url=build_cv_url(
            get_settings().public_base_url, ws.slug, ws.privacy, include_secret=True
        ),
        secret_token=secret_token,
        created_at=ws.created_at,
        updated_at=ws.updated_at,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.post(
    "/workspaces",
    response_model=WorkspaceRes,
    status_code=201,
    tags=["workspaces"],
)
def create_workspace(
    req: CreateWorkspaceReq,
    use_case: CreateWorkspaceUseCase = Depends(get_create_workspace_use_case),
    principal: Principal = Depends(require_user()),
):
    result = use_case.execute(
        CreateWorkspaceInput(
            name=req.name,
            slug=req.slug,
            actor=to_actor(principal),
            description=req.description,
            privacy_level=req.privacy_level,
            password=req.password,
            allow_search_engines=req.allow_search_engines,
        )
    )
    if result.error is not None:
        raise_workspace_error(result.error, identifier=req.slug)

    if result.workspace is None:
        raise service_unavailable("Workspace")

    return _to_workspace_res(result.workspace, result.secret_token)


@router.get(
    "/workspaces/by-slug/{slug}",
    response_model=PublicWorkspaceRes,
    tags=["workspaces"],
)
def get_public_workspace(
    slug: str,
    use_case: GetPublicWorkspaceUseCase = Depends(get_get_public_workspace_use_case),
):
    result = use_case.execute(slug)
    if result.error is not None:
        raise_workspace_error(result.error, identifier=slug)

    view = result.view
    return PublicWorkspaceRes(
        name=view.name,
        slug=view.slug,
        description=view.description,
        level=_level_value(view.level),
        allow_search_engines=view.allow_search_engines,
    )


@router.get(
    "/workspaces/{workspace_id}/privacy",
    response_model=PrivacySettingsRes,
    tags=["privacy"],
)
def get_privacy_settings(
    workspace_id: UUID,
    use_case: GetPrivacySettingsUseCase = Depends(get_get_privacy_settings_use_case),
    principal: Principal = Depends(require_user()),
):
    result = use_case.execute(workspace_id, to_actor(principal))
    if result.error is not None:
        raise_workspace_error(result.error, identifier=workspace_id)

    settings = result.settings
    return PrivacySettingsRes(
        level=_level_value(settings.level),
        secret_token=settings.secret_token,
        allow_search_engines=settings.allow_search_engines,
        has_password=settings.has_password,
        description=describe_privacy_level(settings.level),
    )


@router.put(
    "/workspaces/{workspace_id}/privacy",
    response_model=PrivacyUpdateRes,
    tags=["privacy"],
)
def update_privacy(
    workspace_id: UUID,
    req: UpdatePrivacyReq,
    use_case: UpdatePrivacyUseCase = Depends(get_update_privacy_use_case),
    principal: Principal = Depends(require_user()),
    _rate_limit: None = Depends(require_rate_limit(ENDPOINT_PRIVACY_UPDATE)),
):
    result = use_case.execute(
        UpdatePrivacyInput(
            workspace_id=workspace_id,
            new_level=req.level,
            actor=to_actor(principal),
            new_password=req.password,
            allow_search_engines=req.allow_search_engines,
            regenerate_token=req.regenerate_token,
        )
    )
    if result.error is not None:
        raise_workspace_error(result.error, identifier=workspace_id)

    privacy = result.privacy
    return PrivacyUpdateRes(
        level=_level_value(privacy.level),
        allow_search_engines=privacy.allow_search_engines,
        has_password=privacy.has_password,
        secret_token=result.secret_token,
    )


@router.delete(
    "/workspaces/{workspace_id}",
    response_model=DeleteWorkspaceRes,
    tags=["workspaces"],
)
def delete_workspace(
    workspace_id: UUID,
    use_case: DeleteWorkspaceUseCase = Depends(get_delete_workspace_use_case),
    principal: Principal = Depends(require_user()),
):
    result = use_case.execute(workspace_id, to_actor(principal))
    if result.error is not None:
        raise_workspace_error(result.error, identifier=workspace_id)

    return DeleteWorkspaceRes(workspace_id=workspace_id, deleted=result.deleted)
