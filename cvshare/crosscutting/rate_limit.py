"""
===============================================================================
MÓDULO: Rate limiting HTTP (ventana fija por endpoint)
===============================================================================

Objetivo
--------
Frenar fuerza bruta sobre endpoints que adivinan credenciales:
- acceso a CV (token secreto / password)
- cambios de privacidad

Incluye:
- Identidad del cliente (IP directa; X-Forwarded-For solo tras proxy confiable)
- Headers x-ratelimit-remaining / x-ratelimit-limit
- Respuesta RFC7807 429 con Retry-After

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componentes:
  - get_client_identifier
  - enforce_rate_limit

Responsabilidades:
  - Traducir RateLimitResult -> allow / 429
  - Mantener el limiter fuera de los routers

Colaboradores:
  - application.rate_limiting.RateLimiter
  - crosscutting.error_responses.rate_limited
===============================================================================
"""

from __future__ import annotations

from ..application.rate_limiting import RateLimiter, RateLimitResult
from .error_responses import rate_limited

# Nombres de endpoint (clave del contador junto con el cliente)
ENDPOINT_CV_ACCESS = "cv_access"
ENDPOINT_PRIVACY_UPDATE = "privacy_update"


def get_client_identifier(request, trusted_proxies: frozenset[str] = frozenset()) -> str:
    """
    Identidad del cliente para el contador.

    X-Forwarded-For solo se respeta si el peer directo es un proxy confiable;
    se toma la entrada más a la derecha que no sea un proxy confiable.
    """
    client = request.client
    peer = client.host if client else None
    if not peer:
        return "ip:unknown"

    if peer not in trusted_proxies:
        return f"ip:{peer}"

    forwarded_for = request.headers.get("X-Forwarded-For") or ""
    hops = [hop.strip() for hop in forwarded_for.split(",") if hop.strip()]
    for hop in reversed(hops):
        if hop not in trusted_proxies:
            return f"ip:{hop}"

    return f"ip:{hops[0] if hops else peer}"


def rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    return {
        "x-ratelimit-limit": str(result.limit),
        "x-ratelimit-remaining": str(result.remaining),
    }


def enforce_rate_limit(
    limiter: RateLimiter,
    identifier: str,
    endpoint: str,
    *,
    window_ms: int,
    max_requests: int,
) -> RateLimitResult:
    """
    Consume un intento; si la ventana está agotada lanza 429.

    Returns:
        RateLimitResult del intento permitido (para headers de respuesta).
    """
    result = limiter.check(
        identifier, endpoint, window_ms=window_ms, max_requests=max_requests
    )
    if not result.allowed:
        raise rate_limited(
            retry_after=result.retry_after_seconds or 1,
            headers=rate_limit_headers(result),
        )
    return result
