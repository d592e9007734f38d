"""
===============================================================================
TARJETA CRC - identity/auth.py
===============================================================================

Módulo:
    Autenticación de usuarios por JWT (identidad provista externamente)

Responsabilidades:
    - Emitir JWT de acceso (útil para tests y herramientas internas).
    - Decodificar y validar JWT (firma, exp, claims sub + email).
    - Extraer token desde Authorization: Bearer o cookie.
    - Exponer dependencias FastAPI: require_user(), optional_user().

Colaboradores:
    - crosscutting.config.get_settings: secreto, TTL, cookie.
    - crosscutting.error_responses.unauthorized: 401 estándar.
    - crosscutting.logger: logging estructurado (sin tokens).

Decisiones de diseño:
    - No hay tabla de usuarios: el Principal sale de los claims del token.
    - optional_user() trata un token inválido como visitante anónimo; el
      acceso a un CV nunca falla por un header roto.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt
from fastapi import Header, Request

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import AppHTTPException, unauthorized
from ..crosscutting.logger import logger

JWT_ALGORITHM: str = "HS256"

DEFAULT_ACCESS_TOKEN_COOKIE: str = "access_token"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_TYP: str = "typ"

TOKEN_TYPE_ACCESS: str = "access"


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """Settings de auth (snapshot)."""

    jwt_secret: str
    jwt_access_ttl_minutes: int
    jwt_cookie_name: str


@dataclass(frozen=True, slots=True)
class Principal:
    """Usuario autenticado. email viene normalizado (trim + lower)."""

    user_id: str
    email: str


def get_auth_settings() -> AuthSettings:
    s = get_settings()
    return AuthSettings(
        jwt_secret=s.jwt_secret,
        jwt_access_ttl_minutes=s.jwt_access_ttl_minutes,
        jwt_cookie_name=s.jwt_cookie_name,
    )


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


# ---------------------------------------------------------------------------
# Tokens JWT (emitir / decodificar)
# ---------------------------------------------------------------------------


def create_access_token(
    user_id: str, email: str, settings: AuthSettings | None = None
) -> tuple[str, int]:
    """Crea un JWT de acceso firmado. Retorna (token, expires_in_seconds)."""
    auth_settings = settings or get_auth_settings()

    now = datetime.now(timezone.utc)
    expires_in = int(auth_settings.jwt_access_ttl_minutes * 60)

    payload: dict[str, object] = {
        CLAIM_SUB: str(user_id),
        CLAIM_EMAIL: normalize_email(email),
        CLAIM_IAT: int(now.timestamp()),
        CLAIM_EXP: int((now + timedelta(seconds=expires_in)).timestamp()),
        CLAIM_TYP: TOKEN_TYPE_ACCESS,
    }

    token = jwt.encode(payload, auth_settings.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, expires_in


def decode_access_token(token: str, settings: AuthSettings | None = None) -> Principal:
    """
    Decodifica y valida un JWT de acceso.

    Errores:
        - 401 si expiró, la firma es inválida o faltan claims.
    """
    auth_settings = settings or get_auth_settings()

    try:
        payload = jwt.decode(
            token,
            auth_settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": [CLAIM_SUB, CLAIM_EMAIL, CLAIM_EXP]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expirado.") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Token inválido.") from exc

    user_id = payload.get(CLAIM_SUB)
    email = normalize_email(payload.get(CLAIM_EMAIL))
    token_type = payload.get(CLAIM_TYP)

    if not user_id or not email:
        raise unauthorized("Token inválido.")

    if token_type is not None and token_type != TOKEN_TYPE_ACCESS:
        raise unauthorized("Tipo de token inválido.")

    return Principal(user_id=str(user_id), email=email)


# ---------------------------------------------------------------------------
# Extracción de token (header/cookie)
# ---------------------------------------------------------------------------


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def extract_access_token(request: Request, authorization: str | None) -> str | None:
    """Resuelve token desde Authorization o cookie."""
    token = _extract_bearer_token(authorization)
    if token:
        return token

    cookie_name = (
        get_auth_settings().jwt_cookie_name or ""
    ).strip() or DEFAULT_ACCESS_TOKEN_COOKIE
    return request.cookies.get(cookie_name)


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def require_user() -> Callable:
    """Dependency FastAPI: requiere usuario autenticado por JWT."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> Principal:
        token = extract_access_token(request, authorization)
        if not token:
            raise unauthorized("Falta token Bearer.")

        principal = decode_access_token(token)
        request.state.user = principal
        return principal

    return dependency


def optional_user() -> Callable:
    """Dependency FastAPI: Principal si hay token válido, si no None."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> Principal | None:
        token = extract_access_token(request, authorization)
        if not token:
            return None

        try:
            principal = decode_access_token(token)
        except AppHTTPException:
            logger.info("Token ignorado en acceso anónimo")
            return None

        request.state.user = principal
        return principal

    return dependency
