"""
===============================================================================
SERVICE: Sharing helpers (links, indexación, robots.txt)
===============================================================================

Name:
    CV sharing helpers

Responsibilities:
    - Construir la URL pública de un CV (con token solo si se pide).
    - Decidir si un CV es indexable por buscadores.
    - Renderizar robots.txt por workspace.
    - Describir niveles y validar configuraciones persistidas.

Collaborators:
    - domain.entities.PrivacyConfiguration / PrivacyLevel
    - interfaces/api/http/routers/cv_access.py (robots.txt)
    - application/usecases/workspace/create_workspace.py (share URL)
===============================================================================
"""

from __future__ import annotations

from typing import Final, List, Optional
from urllib.parse import urlencode, urljoin

from ..domain.entities import PrivacyConfiguration, PrivacyLevel

_DESCRIPTIONS: Final[dict[PrivacyLevel, str]] = {
    PrivacyLevel.PUBLIC: "Anyone can view this CV",
    PrivacyLevel.SECRET_LINK: "Only people with the secret link can view this CV",
    PrivacyLevel.PASSWORD: "Anyone with the password can view this CV",
    PrivacyLevel.PRIVATE: "Only invited collaborators can view this CV",
}

ROBOTS_DISALLOW_ALL: Final[str] = "User-agent: *\nDisallow: /\n"


def build_cv_url(
    base_url: str,
    slug: str,
    config: PrivacyConfiguration,
    *,
    include_secret: bool = False,
) -> str:
    """/cv/<slug>, con ?token=... solo para secret_link cuando se pide."""
    url = urljoin(base_url.rstrip("/") + "/", f"cv/{slug}")
    if (
        include_secret
        and PrivacyLevel.parse(config.level) == PrivacyLevel.SECRET_LINK
        and config.secret_token
    ):
        url = f"{url}?{urlencode({'token': config.secret_token})}"
    return url


def should_index(config: PrivacyConfiguration) -> bool:
    return (
        PrivacyLevel.parse(config.level) == PrivacyLevel.PUBLIC
        and config.allow_search_engines
    )


def render_robots_txt(
    config: Optional[PrivacyConfiguration], sitemap_url: str | None = None
) -> str:
    """Workspace desconocido o no indexable -> Disallow."""
    if config is None or not should_index(config):
        return ROBOTS_DISALLOW_ALL

    lines = ["User-agent: *", "Allow: /"]
    if sitemap_url:
        lines.append(f"Sitemap: {sitemap_url}")
    return "\n".join(lines) + "\n"


def describe_privacy_level(level: PrivacyLevel | str) -> str:
    parsed = PrivacyLevel.parse(level)
    if parsed is None:
        return "Unknown privacy level"
    return _DESCRIPTIONS[parsed]


def validate_privacy_settings(config: PrivacyConfiguration) -> List[str]:
    """Mensajes de validación; lista vacía si la configuración es coherente."""
    errors: List[str] = []

    level = PrivacyLevel.parse(config.level) if config.level else None
    if not config.level:
        errors.append("Privacy level is required")
    elif level is None:
        errors.append("Invalid privacy level")

    if level == PrivacyLevel.SECRET_LINK and not config.secret_token:
        errors.append("Secret token is required for secret link privacy")

    if level == PrivacyLevel.PASSWORD and not config.password_hash:
        errors.append("Password is required for password privacy")

    return errors
