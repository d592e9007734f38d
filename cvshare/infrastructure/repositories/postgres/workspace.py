"""
============================================================
TARJETA CRC - infrastructure/repositories/postgres/workspace.py
============================================================
Class: PostgresWorkspaceRepository

Responsibilities:
- Acceso a datos de workspaces de CV en PostgreSQL (SQL crudo).
- La privacidad vive embebida en columnas privacy_* de la misma fila.
- update_privacy() es un único UPDATE ... RETURNING.

Collaborators:
- domain.entities.Workspace, PrivacyConfiguration, PrivacyLevel
- PostgresRepositoryBase (pool + errores)
- Tabla: workspaces

Constraints / Notes:
- Queries siempre parametrizadas.
- Un privacy_level desconocido en DB se conserva como str: la policy lo
  trata como configuración inválida.
============================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import PrivacyConfiguration, PrivacyLevel, Workspace
from ._base import PostgresRepositoryBase

_SELECT_COLUMNS = """
    id, name, slug, description, owner_user_id,
    privacy_level, privacy_secret_token, privacy_password_hash,
    privacy_allow_search_engines, privacy_ever_public,
    created_at, updated_at
"""

_SQL_INSERT = f"""
    INSERT INTO workspaces (
        id, name, slug, description, owner_user_id,
        privacy_level, privacy_secret_token, privacy_password_hash,
        privacy_allow_search_engines, privacy_ever_public
    )
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
    RETURNING {_SELECT_COLUMNS}
"""

_SQL_GET_BY_ID = f"SELECT {_SELECT_COLUMNS} FROM workspaces WHERE id = %s"

_SQL_GET_BY_SLUG = f"SELECT {_SELECT_COLUMNS} FROM workspaces WHERE slug = %s"

_SQL_UPDATE_PRIVACY = f"""
    UPDATE workspaces
    SET privacy_level = %s,
        privacy_secret_token = %s,
        privacy_password_hash = %s,
        privacy_allow_search_engines = %s,
        privacy_ever_public = %s,
        updated_at = NOW()
    WHERE id = %s
    RETURNING {_SELECT_COLUMNS}
"""

_SQL_DELETE = "DELETE FROM workspaces WHERE id = %s"


def _level_value(level: PrivacyLevel | str) -> str:
    return level.value if isinstance(level, PrivacyLevel) else str(level)


class PostgresWorkspaceRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de workspaces."""

    def _row_to_workspace(self, row: tuple) -> Workspace:
        (
            workspace_id,
            name,
            slug,
            description,
            owner_user_id,
            privacy_level,
            secret_token,
            password_hash,
            allow_search_engines,
            ever_public,
            created_at,
            updated_at,
        ) = row

        return Workspace(
            id=workspace_id,
            name=name,
            slug=slug,
            owner_user_id=owner_user_id,
            description=description,
            privacy=PrivacyConfiguration(
                level=PrivacyLevel.parse(privacy_level) or privacy_level,
                secret_token=secret_token,
                password_hash=password_hash,
                allow_search_engines=bool(allow_search_engines),
                ever_public=bool(ever_public),
            ),
            created_at=created_at,
            updated_at=updated_at,
        )

    def create_workspace(self, workspace: Workspace) -> Workspace:
        privacy = workspace.privacy
        row = self._fetchone(
            query=_SQL_INSERT,
            params=[
                workspace.id,
                workspace.name,
                workspace.slug,
                workspace.description,
                workspace.owner_user_id,
                _level_value(privacy.level),
                privacy.secret_token,
                privacy.password_hash,
                privacy.allow_search_engines,
                privacy.ever_public,
            ],
            context_msg="PostgresWorkspaceRepository: Failed to create workspace",
            extra={"workspace_id": str(workspace.id), "slug": workspace.slug},
        )
        if not row:
            raise DatabaseError("PostgresWorkspaceRepository: Insert returned no row")
        return self._row_to_workspace(row)

    def get_workspace(self, workspace_id: UUID) -> Optional[Workspace]:
        row = self._fetchone(
            query=_SQL_GET_BY_ID,
            params=[workspace_id],
            context_msg="PostgresWorkspaceRepository: Failed to get workspace",
            extra={"workspace_id": str(workspace_id)},
        )
        return self._row_to_workspace(row) if row else None

    def get_workspace_by_slug(self, slug: str) -> Optional[Workspace]:
        row = self._fetchone(
            query=_SQL_GET_BY_SLUG,
            params=[slug],
            context_msg="PostgresWorkspaceRepository: Failed to get workspace by slug",
            extra={"slug": slug},
        )
        return self._row_to_workspace(row) if row else None

    def update_privacy(
        self, workspace_id: UUID, privacy: PrivacyConfiguration
    ) -> Optional[Workspace]:
        row = self._fetchone(
            query=_SQL_UPDATE_PRIVACY,
            params=[
                _level_value(privacy.level),
                privacy.secret_token,
                privacy.password_hash,
                privacy.allow_search_engines,
                privacy.ever_public,
                workspace_id,
            ],
            context_msg="PostgresWorkspaceRepository: Failed to update privacy",
            extra={"workspace_id": str(workspace_id)},
        )
        return self._row_to_workspace(row) if row else None

    def delete_workspace(self, workspace_id: UUID) -> bool:
        deleted = self._execute(
            query=_SQL_DELETE,
            params=[workspace_id],
            context_msg="PostgresWorkspaceRepository: Failed to delete workspace",
            extra={"workspace_id": str(workspace_id)},
        )
        return deleted > 0
