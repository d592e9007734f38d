"""
===============================================================================
TARJETA CRC - domain/privacy_transitions.py
===============================================================================

Módulo:
    Transición de nivel de privacidad (mutación pura)

Responsabilidades:
    - Calcular la nueva PrivacyConfiguration a partir de la actual.
    - Generar token / hashear password solo cuando el nivel lo requiere.
    - Preservar credenciales existentes entre cambios de nivel.

Colaboradores:
    - domain.services.CredentialCodec
    - domain.errors: InvalidPrivacyLevelError, PasswordRequiredError
    - application/usecases/workspace: create_workspace, update_privacy

Reglas:
    - La autorización (solo owner) la hace el caso de uso, no este módulo.
    - allow_search_engines explícito gana; omitido se preserva, salvo la
      primera vez que el CV pasa a public (default True).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .entities import PrivacyConfiguration, PrivacyLevel
from .errors import InvalidPrivacyLevelError, PasswordRequiredError
from .services import CredentialCodec


@dataclass(frozen=True)
class PrivacyTransition:
    """Configuración resultante + token en claro si se generó en esta llamada."""

    config: PrivacyConfiguration
    generated_token: Optional[str] = None


def apply_privacy_level(
    current: PrivacyConfiguration,
    new_level: PrivacyLevel | str,
    *,
    codec: CredentialCodec,
    new_password: str | None = None,
    regenerate_token: bool = False,
    allow_search_engines: bool | None = None,
) -> PrivacyTransition:
    """
    Aplica un cambio de nivel.

    Raises:
        InvalidPrivacyLevelError: new_level no es uno de los cuatro niveles.
        PasswordRequiredError: nivel password sin password nueva ni hash previo.
    """
    level = PrivacyLevel.parse(new_level)
    if level is None:
        raise InvalidPrivacyLevelError(new_level)

    secret_token = current.secret_token
    password_hash = current.password_hash
    generated_token: str | None = None

    if level == PrivacyLevel.SECRET_LINK and (regenerate_token or not secret_token):
        secret_token = codec.generate_token()
        generated_token = secret_token

    if level == PrivacyLevel.PASSWORD:
        if new_password:
            password_hash = codec.hash_password(new_password)
        elif not password_hash:
            raise PasswordRequiredError()

    if allow_search_engines is not None:
        allow = allow_search_engines
    elif level == PrivacyLevel.PUBLIC and not current.ever_public:
        allow = True
    else:
        allow = current.allow_search_engines

    config = PrivacyConfiguration(
        level=level,
        secret_token=secret_token,
        password_hash=password_hash,
        allow_search_engines=allow,
        ever_public=current.ever_public or level == PrivacyLevel.PUBLIC,
    )
    return PrivacyTransition(config=config, generated_token=generated_token)


def set_privacy_level(
    current: PrivacyConfiguration,
    new_level: PrivacyLevel | str,
    *,
    codec: CredentialCodec,
    new_password: str | None = None,
    regenerate_token: bool = False,
    allow_search_engines: bool | None = None,
) -> PrivacyConfiguration:
    """Igual que apply_privacy_level, devolviendo solo la configuración."""
    return apply_privacy_level(
        current,
        new_level,
        codec=codec,
        new_password=new_password,
        regenerate_token=regenerate_token,
        allow_search_engines=allow_search_engines,
    ).config
