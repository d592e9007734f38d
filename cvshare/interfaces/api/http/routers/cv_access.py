"""
===============================================================================
TARJETA CRC - cvshare/interfaces/api/http/routers/cv_access.py
===============================================================================

Class/Module:
    CV Access Router (visitantes)

Responsibilities:
    - Resolver la decisión de acceso a un CV por slug.
    - GET: token por query (?token=), tal cual viene en el link compartido.
    - POST: token y/o password en el body (nunca password por query).
    - robots.txt por CV (Allow solo si es público e indexable).

Collaborators:
    - application.usecases.EvaluateAccessUseCase / GetPublicWorkspaceUseCase
    - application.sharing.render_robots_txt
    - identity.auth.optional_user (colaboradores logueados)
    - dependencies.require_rate_limit("cv_access")

Notes:
    - Una denegación es 200 con can_access=false; el único error es 404.
===============================================================================
"""

from __future__ import annotations

from urllib.parse import urljoin

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from .....application.sharing import render_robots_txt
from .....application.usecases import (
    EvaluateAccessInput,
    EvaluateAccessUseCase,
    GetPublicWorkspaceUseCase,
)
from .....container import (
    get_evaluate_access_use_case,
    get_get_public_workspace_use_case,
)
from .....crosscutting.config import get_settings
from .....crosscutting.rate_limit import ENDPOINT_CV_ACCESS
from .....domain.entities import PrivacyConfiguration
from .....identity.auth import Principal, optional_user
from ..dependencies import require_rate_limit
from ..error_mapping import raise_workspace_error
from ..schemas.access import AccessDecisionRes, CvAccessReq

router = APIRouter()


def _evaluate(
    use_case: EvaluateAccessUseCase,
    slug: str,
    *,
    token: str | None,
    password: str | None,
    principal: Principal | None,
) -> AccessDecisionRes:
    result = use_case.execute(
        EvaluateAccessInput(
            slug=slug,
            provided_token=token,
            provided_password=password,
            authenticated_user_id=principal.user_id if principal else None,
        )
    )
    if result.error is not None:
        raise_workspace_error(result.error, resource="CV", identifier=slug)

    return AccessDecisionRes(slug=slug, **result.decision.to_dict())


@router.get(
    "/cv/{slug}/access",
    response_model=AccessDecisionRes,
    response_model_exclude_none=True,
    tags=["access"],
)
def check_cv_access(
    slug: str,
    token: str | None = Query(default=None, max_length=256),
    use_case: EvaluateAccessUseCase = Depends(get_evaluate_access_use_case),
    principal: Principal | None = Depends(optional_user()),
    _rate_limit: None = Depends(require_rate_limit(ENDPOINT_CV_ACCESS)),
):
    return _evaluate(use_case, slug, token=token, password=None, principal=principal)


@router.post(
    "/cv/{slug}/access",
    response_model=AccessDecisionRes,
    response_model_exclude_none=True,
    tags=["access"],
)
def submit_cv_credentials(
    slug: str,
    req: CvAccessReq,
    use_case: EvaluateAccessUseCase = Depends(get_evaluate_access_use_case),
    principal: Principal | None = Depends(optional_user()),
    _rate_limit: None = Depends(require_rate_limit(ENDPOINT_CV_ACCESS)),
):
    return _evaluate(
        use_case, slug, token=req.token, password=req.password, principal=principal
    )


@router.get(
    "/cv/{slug}/robots.txt",
    response_class=PlainTextResponse,
    tags=["access"],
)
def cv_robots_txt(
    slug: str,
    use_case: GetPublicWorkspaceUseCase = Depends(get_get_public_workspace_use_case),
):
    result = use_case.execute(slug)
    config = None
    if result.view is not None:
        config = PrivacyConfiguration(
            level=result.view.level,
            allow_search_engines=result.view.allow_search_engines,
        )

    base_url = get_settings().public_base_url.rstrip("/") + "/"
    body = render_robots_txt(config, sitemap_url=urljoin(base_url, "sitemap.xml"))
    return PlainTextResponse(body)
