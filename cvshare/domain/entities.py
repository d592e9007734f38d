"""
===============================================================================
TARJETA CRC - domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Workspace de CV, Privacidad, Colaboración, Acceso)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Modelar la configuración de privacidad embebida en el workspace.
    - Modelar registros de colaboración con permisos por rol.
    - Definir los value objects efímeros de una evaluación de acceso.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - domain.privacy_policy / domain.privacy_transitions: reglas puras.
    - application/usecases: construyen/consumen estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - password_hash nunca contiene texto plano ("saltHex:keyHex").
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Privacy
# ---------------------------------------------------------------------------


class PrivacyLevel(str, Enum):
    """Nivel de privacidad activo de un CV (exactamente uno por workspace)."""

    PUBLIC = "public"
    SECRET_LINK = "secret_link"
    PASSWORD = "password"
    PRIVATE = "private"

    @classmethod
    def parse(cls, value: object) -> Optional["PrivacyLevel"]:
        """Convierte un valor crudo en PrivacyLevel, o None si no es válido."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class PrivacyConfiguration:
    """
    Configuración de privacidad embebida en el workspace.

    Notas:
      - level se tipa como PrivacyLevel, pero datos persistidos corruptos
        pueden traer un str desconocido; la policy lo trata como inválido.
      - secret_token se guarda en claro: se presenta al usuario en la URL.
      - ever_public registra si el CV fue público alguna vez (default de SEO).
    """

    level: PrivacyLevel | str = PrivacyLevel.PUBLIC
    secret_token: Optional[str] = None
    password_hash: Optional[str] = None
    allow_search_engines: bool = False
    ever_public: bool = False

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    def with_changes(self, **changes) -> "PrivacyConfiguration":
        return replace(self, **changes)


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------


@dataclass
class Workspace:
    """Workspace: un CV publicable con su configuración de privacidad."""

    id: UUID
    name: str
    slug: str
    owner_user_id: str
    privacy: PrivacyConfiguration = field(default_factory=PrivacyConfiguration)
    description: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and user_id == self.owner_user_id

    def apply_privacy(
        self, privacy: PrivacyConfiguration, *, at: datetime | None = None
    ) -> None:
        """Reemplaza la configuración de privacidad y toca updated_at."""
        self.privacy = privacy
        self.updated_at = at or _utcnow()


# ---------------------------------------------------------------------------
# Collaboration
# ---------------------------------------------------------------------------


class CollaboratorRole(str, Enum):
    OWNER = "owner"
    COLLABORATOR = "collaborator"
    VIEWER = "viewer"


class CollaborationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


@dataclass(frozen=True)
class CollaboratorPermissions:
    can_edit: bool = False
    can_suggest_changes: bool = False
    can_view_analytics: bool = False
    can_invite_others: bool = False
    can_manage_settings: bool = False

    @classmethod
    def for_role(cls, role: CollaboratorRole) -> "CollaboratorPermissions":
        """Permisos por defecto de cada rol."""
        if role == CollaboratorRole.OWNER:
            return cls(
                can_edit=True,
                can_suggest_changes=True,
                can_view_analytics=True,
                can_invite_others=True,
                can_manage_settings=True,
            )
        if role == CollaboratorRole.COLLABORATOR:
            return cls(can_suggest_changes=True)
        return cls()

    def to_dict(self) -> dict[str, bool]:
        return {
            "can_edit": self.can_edit,
            "can_suggest_changes": self.can_suggest_changes,
            "can_view_analytics": self.can_view_analytics,
            "can_invite_others": self.can_invite_others,
            "can_manage_settings": self.can_manage_settings,
        }


@dataclass
class CollaborationRecord:
    """
    Relación usuario <-> workspace.

    - Nace PENDING por invitación (user_id None hasta aceptar).
    - El registro OWNER nace ACCEPTED junto con el workspace.
    - Solo ACCEPTED otorga acceso.
    """

    id: UUID
    workspace_id: UUID
    role: CollaboratorRole
    permissions: CollaboratorPermissions
    status: CollaborationStatus = CollaborationStatus.PENDING
    user_id: Optional[str] = None
    invite_email: Optional[str] = None
    invited_by: Optional[str] = None
    invited_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None

    @property
    def is_accepted(self) -> bool:
        return self.status == CollaborationStatus.ACCEPTED

    @property
    def is_pending(self) -> bool:
        return self.status == CollaborationStatus.PENDING

    @property
    def is_owner(self) -> bool:
        return self.role == CollaboratorRole.OWNER

    def accept(self, user_id: str, *, at: datetime | None = None) -> None:
        self.user_id = user_id
        self.status = CollaborationStatus.ACCEPTED
        self.accepted_at = at or _utcnow()

    def decline(self) -> None:
        self.status = CollaborationStatus.DECLINED


# ---------------------------------------------------------------------------
# Access evaluation (efímeros)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Actor:
    """Usuario autenticado que ejecuta un caso de uso (email normalizado)."""

    user_id: str
    email: str = ""


@dataclass(frozen=True)
class AccessRequestContext:
    """Todo lo que la policy necesita, ya resuelto por el caso de uso."""

    is_authenticated: bool = False
    collaboration: Optional[CollaborationRecord] = None
    provided_token: Optional[str] = None
    provided_password: Optional[str] = None


@dataclass(frozen=True)
class AccessDecision:
    """Resultado de evaluar acceso. reason solo en denegaciones/credencial mala."""

    can_access: bool
    requires_password: bool = False
    requires_authentication: bool = False
    is_collaborator: bool = False
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "can_access": self.can_access,
            "requires_password": self.requires_password,
            "requires_authentication": self.requires_authentication,
            "is_collaborator": self.is_collaborator,
        }
        if self.reason is not None:
            data["reason"] = self.reason
        return data


# ---------------------------------------------------------------------------
# Rate limiting
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RateLimitRecord:
    """Ventana fija vigente para (identifier, endpoint). Tiempos en ms epoch."""

    identifier: str
    endpoint: str
    count: int
    window_start: int
    window_end: int

    def is_expired(self, now_ms: int) -> bool:
        return now_ms >= self.window_end
