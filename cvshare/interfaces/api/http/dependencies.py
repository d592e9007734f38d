"""
===============================================================================
TARJETA CRC - dependencies.py (Dependencias y helpers comunes)
===============================================================================

Responsabilidades:
  - Centralizar helpers que se repiten en routers:
      * conversión Principal -> Actor
      * guardas de rate limit por endpoint (cv_access / privacy_update)

Colaboradores:
  - identity.auth.Principal
  - crosscutting.rate_limit (identidad de cliente + 429)
  - container.get_rate_limiter
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Request, Response

from ....application.rate_limiting import RateLimiter
from ....container import get_rate_limiter
from ....crosscutting.config import Settings, get_settings
from ....crosscutting.rate_limit import (
    ENDPOINT_CV_ACCESS,
    ENDPOINT_PRIVACY_UPDATE,
    enforce_rate_limit,
    get_client_identifier,
    rate_limit_headers,
)
from ....domain.entities import Actor
from ....identity.auth import Principal


def to_actor(principal: Principal | None) -> Actor | None:
    if principal is None:
        return None
    return Actor(user_id=principal.user_id, email=principal.email)


def _limits_for(endpoint: str, settings: Settings) -> tuple[int, int]:
    if endpoint == ENDPOINT_CV_ACCESS:
        return (
            settings.access_rate_limit_window_ms,
            settings.access_rate_limit_max_requests,
        )
    if endpoint == ENDPOINT_PRIVACY_UPDATE:
        return (
            settings.privacy_rate_limit_window_ms,
            settings.privacy_rate_limit_max_requests,
        )
    raise ValueError(f"Unknown rate-limited endpoint: {endpoint}")


def require_rate_limit(endpoint: str) -> Callable:
    """Dependency FastAPI: consume un intento de `endpoint` o responde 429."""

    def dependency(
        request: Request,
        response: Response,
        limiter: RateLimiter = Depends(get_rate_limiter),
    ) -> None:
        settings = get_settings()
        if not settings.rate_limit_enabled:
            return

        window_ms, max_requests = _limits_for(endpoint, settings)
        result = enforce_rate_limit(
            limiter,
            get_client_identifier(request, settings.get_trusted_proxies()),
            endpoint,
            window_ms=window_ms,
            max_requests=max_requests,
        )
        response.headers.update(rate_limit_headers(result))

    return dependency
