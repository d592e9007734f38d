"""
===============================================================================
TARJETA CRC - domain/privacy_policy.py
===============================================================================

Módulo:
    Política de Acceso a un CV (evaluate_access)

Responsabilidades:
    - Decidir si un visitante puede ver un CV dada la privacidad y el contexto.
    - Distinguir "pedir credencial" (prompt) de "denegar" (reason).
    - Ser 100% pura: sin DB, sin FastAPI, sin logs; nunca lanza.

Colaboradores:
    - domain.entities: PrivacyConfiguration, AccessRequestContext, AccessDecision
    - domain.services.CredentialCodec: verificación de password
    - application/usecases/workspace/evaluate_access.py: resuelve el contexto

Reglas (primer match gana):
    1. Colaboración ACCEPTED -> acceso, para cualquier nivel (incluye private).
    2. Según nivel:
       - public       -> acceso
       - secret_link  -> token exacto (case-sensitive)
       - password     -> sin password: prompt; con password: verificar
       - private      -> denegado (pide login si es anónimo)
       - desconocido  -> denegado, configuración inválida
===============================================================================
"""

from __future__ import annotations

import hmac
from typing import Final

from .entities import (
    AccessDecision,
    AccessRequestContext,
    CollaborationStatus,
    PrivacyConfiguration,
    PrivacyLevel,
)
from .services import CredentialCodec

REASON_INVALID_TOKEN: Final[str] = "Invalid or missing secret token"
REASON_INCORRECT_PASSWORD: Final[str] = "Incorrect password"
REASON_AUTH_REQUIRED: Final[str] = "Authentication required"
REASON_INSUFFICIENT_PERMISSIONS: Final[str] = "Access denied - insufficient permissions"
REASON_INVALID_CONFIGURATION: Final[str] = "Invalid privacy configuration"


def _grant(*, is_collaborator: bool = False) -> AccessDecision:
    return AccessDecision(can_access=True, is_collaborator=is_collaborator)


def _tokens_match(provided: str | None, expected: str | None) -> bool:
    if not provided or not expected:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def _evaluate_secret_link(
    config: PrivacyConfiguration, context: AccessRequestContext
) -> AccessDecision:
    if _tokens_match(context.provided_token, config.secret_token):
        return _grant()
    return AccessDecision(can_access=False, reason=REASON_INVALID_TOKEN)


def _evaluate_password(
    config: PrivacyConfiguration,
    context: AccessRequestContext,
    codec: CredentialCodec,
) -> AccessDecision:
    if not context.provided_password:
        return AccessDecision(can_access=False, requires_password=True)

    if config.password_hash and codec.verify_password(
        context.provided_password, config.password_hash
    ):
        return _grant()

    return AccessDecision(
        can_access=False,
        requires_password=True,
        reason=REASON_INCORRECT_PASSWORD,
    )


def _evaluate_private(context: AccessRequestContext) -> AccessDecision:
    if not context.is_authenticated:
        return AccessDecision(
            can_access=False,
            requires_authentication=True,
            reason=REASON_AUTH_REQUIRED,
        )
    return AccessDecision(can_access=False, reason=REASON_INSUFFICIENT_PERMISSIONS)


def evaluate_access(
    config: PrivacyConfiguration,
    context: AccessRequestContext,
    codec: CredentialCodec,
) -> AccessDecision:
    """Evalúa acceso a un CV. Total: siempre devuelve un AccessDecision."""
    collaboration = context.collaboration
    if (
        collaboration is not None
        and collaboration.status == CollaborationStatus.ACCEPTED
    ):
        return _grant(is_collaborator=True)

    level = PrivacyLevel.parse(config.level)

    if level == PrivacyLevel.PUBLIC:
        return _grant()
    if level == PrivacyLevel.SECRET_LINK:
        return _evaluate_secret_link(config, context)
    if level == PrivacyLevel.PASSWORD:
        return _evaluate_password(config, context, codec)
    if level == PrivacyLevel.PRIVATE:
        return _evaluate_private(context)

    return AccessDecision(can_access=False, reason=REASON_INVALID_CONFIGURATION)


def is_invalid_configuration(decision: AccessDecision) -> bool:
    """True si la denegación proviene de datos de privacidad corruptos."""
    return not decision.can_access and decision.reason == REASON_INVALID_CONFIGURATION
