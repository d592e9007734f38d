"""
===============================================================================
TARJETA CRC - domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Mantener estable el "surface area" del dominio.

Colaboradores:
    - domain.entities: Workspace, PrivacyConfiguration, CollaborationRecord, ...
    - domain.privacy_policy: evaluate_access (puro)
    - domain.privacy_transitions: set_privacy_level (puro)
    - domain.repositories / domain.services: puertos

Reglas:
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import (
    AccessDecision,
    AccessRequestContext,
    Actor,
    CollaborationRecord,
    CollaborationStatus,
    CollaboratorPermissions,
    CollaboratorRole,
    PrivacyConfiguration,
    PrivacyLevel,
    RateLimitRecord,
    Workspace,
)
from .errors import (
    InvalidPrivacyLevelError,
    PasswordRequiredError,
    PrivacyConfigurationError,
)
from .privacy_policy import evaluate_access
from .privacy_transitions import (
    PrivacyTransition,
    apply_privacy_level,
    set_privacy_level,
)
from .repositories import CollaboratorRepository, RateLimitStore, WorkspaceRepository
from .services import Clock, CredentialCodec

__all__ = [
    # Entities
    "AccessDecision",
    "AccessRequestContext",
    "Actor",
    "CollaborationRecord",
    "CollaborationStatus",
    "CollaboratorPermissions",
    "CollaboratorRole",
    "PrivacyConfiguration",
    "PrivacyLevel",
    "RateLimitRecord",
    "Workspace",
    # Errors
    "InvalidPrivacyLevelError",
    "PasswordRequiredError",
    "PrivacyConfigurationError",
    # Policy / transitions
    "PrivacyTransition",
    "apply_privacy_level",
    "evaluate_access",
    "set_privacy_level",
    # Ports
    "Clock",
    "CollaboratorRepository",
    "CredentialCodec",
    "RateLimitStore",
    "WorkspaceRepository",
]
