"""
============================================================
TARJETA CRC - infrastructure/repositories/postgres/collaborator.py
============================================================
Class: PostgresCollaboratorRepository

Responsibilities:
- Persistir registros de colaboración (tabla collaborators).
- Permisos en 5 columnas booleanas (consultables sin parsear JSON).

Collaborators:
- domain.entities.CollaborationRecord / CollaboratorPermissions
- PostgresRepositoryBase

Constraints / Notes:
- Unicidad de membresía aceptada por (workspace_id, user_id) vía índice
  parcial (ver migración).
- ON DELETE CASCADE desde workspaces; delete_by_workspace igual existe para
  el adapter en memoria y para borrar explícitamente.
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import (
    CollaborationRecord,
    CollaborationStatus,
    CollaboratorPermissions,
    CollaboratorRole,
)
from ._base import PostgresRepositoryBase

_COLUMNS = """
    id, workspace_id, user_id, role,
    can_edit, can_suggest_changes, can_view_analytics,
    can_invite_others, can_manage_settings,
    status, invite_email, invited_by, invited_at, accepted_at
"""

_ORDER_BY = "ORDER BY invited_at ASC NULLS FIRST, id ASC"

_SQL_INSERT = f"""
    INSERT INTO collaborators ({_COLUMNS})
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
    RETURNING {_COLUMNS}
"""

_SQL_GET = f"SELECT {_COLUMNS} FROM collaborators WHERE id = %s"

_SQL_GET_ACCEPTED_FOR_USER = f"""
    SELECT {_COLUMNS} FROM collaborators
    WHERE workspace_id = %s AND user_id = %s AND status = 'accepted'
    LIMIT 1
"""

_SQL_FIND_BY_EMAIL = f"""
    SELECT {_COLUMNS} FROM collaborators
    WHERE workspace_id = %s AND invite_email = %s AND status = %s
    LIMIT 1
"""

_SQL_LIST_BY_WORKSPACE = f"""
    SELECT {_COLUMNS} FROM collaborators
    WHERE workspace_id = %s
    {_ORDER_BY}
"""

_SQL_LIST_BY_WORKSPACE_AND_STATUS = f"""
    SELECT {_COLUMNS} FROM collaborators
    WHERE workspace_id = %s AND status = %s
    {_ORDER_BY}
"""

_SQL_LIST_PENDING_FOR_EMAIL = f"""
    SELECT {_COLUMNS} FROM collaborators
    WHERE invite_email = %s AND status = 'pending'
    {_ORDER_BY}
"""

_SQL_UPDATE = f"""
    UPDATE collaborators
    SET user_id = %s, role = %s,
        can_edit = %s, can_suggest_changes = %s, can_view_analytics = %s,
        can_invite_others = %s, can_manage_settings = %s,
        status = %s, accepted_at = %s
    WHERE id = %s
    RETURNING {_COLUMNS}
"""

_SQL_DELETE = "DELETE FROM collaborators WHERE id = %s"

_SQL_DELETE_BY_WORKSPACE = "DELETE FROM collaborators WHERE workspace_id = %s"


class PostgresCollaboratorRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de colaboradores."""

    @staticmethod
    def _row_to_record(row: tuple) -> CollaborationRecord:
        (
            record_id,
            workspace_id,
            user_id,
            role,
            can_edit,
            can_suggest_changes,
            can_view_analytics,
            can_invite_others,
            can_manage_settings,
            status,
            invite_email,
            invited_by,
            invited_at,
            accepted_at,
        ) = row

        return CollaborationRecord(
            id=record_id,
            workspace_id=workspace_id,
            user_id=user_id,
            role=CollaboratorRole(role),
            permissions=CollaboratorPermissions(
                can_edit=bool(can_edit),
                can_suggest_changes=bool(can_suggest_changes),
                can_view_analytics=bool(can_view_analytics),
                can_invite_others=bool(can_invite_others),
                can_manage_settings=bool(can_manage_settings),
            ),
            status=CollaborationStatus(status),
            invite_email=invite_email,
            invited_by=invited_by,
            invited_at=invited_at,
            accepted_at=accepted_at,
        )

    def _select_many(self, query: str, params: list[object], context_msg: str, extra: dict):
        rows = self._fetchall(
            query=query, params=params, context_msg=context_msg, extra=extra
        )
        return [self._row_to_record(r) for r in rows]

    def create(self, record: CollaborationRecord) -> CollaborationRecord:
        p = record.permissions
        row = self._fetchone(
            query=_SQL_INSERT,
            params=[
                record.id,
                record.workspace_id,
                record.user_id,
                record.role.value,
                p.can_edit,
                p.can_suggest_changes,
                p.can_view_analytics,
                p.can_invite_others,
                p.can_manage_settings,
                record.status.value,
                record.invite_email,
                record.invited_by,
                record.invited_at,
                record.accepted_at,
            ],
            context_msg="PostgresCollaboratorRepository: Failed to create record",
            extra={"workspace_id": str(record.workspace_id)},
        )
        if not row:
            raise DatabaseError("PostgresCollaboratorRepository: Insert returned no row")
        return self._row_to_record(row)

    def get(self, collaborator_id: UUID) -> Optional[CollaborationRecord]:
        row = self._fetchone(
            query=_SQL_GET,
            params=[collaborator_id],
            context_msg="PostgresCollaboratorRepository: Failed to get record",
            extra={"collaborator_id": str(collaborator_id)},
        )
        return self._row_to_record(row) if row else None

    def get_accepted_for_user(
        self, workspace_id: UUID, user_id: str
    ) -> Optional[CollaborationRecord]:
        row = self._fetchone(
            query=_SQL_GET_ACCEPTED_FOR_USER,
            params=[workspace_id, user_id],
            context_msg="PostgresCollaboratorRepository: Failed to get membership",
            extra={"workspace_id": str(workspace_id)},
        )
        return self._row_to_record(row) if row else None

    def find_by_email(
        self, workspace_id: UUID, email: str, status: CollaborationStatus
    ) -> Optional[CollaborationRecord]:
        row = self._fetchone(
            query=_SQL_FIND_BY_EMAIL,
            params=[workspace_id, email, status.value],
            context_msg="PostgresCollaboratorRepository: Failed to find by email",
            extra={"workspace_id": str(workspace_id), "status": status.value},
        )
        return self._row_to_record(row) if row else None

    def list_by_workspace(
        self, workspace_id: UUID, *, status: CollaborationStatus | None = None
    ) -> List[CollaborationRecord]:
        if status is None:
            query, params = _SQL_LIST_BY_WORKSPACE, [workspace_id]
        else:
            query, params = _SQL_LIST_BY_WORKSPACE_AND_STATUS, [workspace_id, status.value]
        return self._select_many(
            query,
            params,
            "PostgresCollaboratorRepository: Failed to list records",
            {"workspace_id": str(workspace_id)},
        )

    def list_pending_for_email(self, email: str) -> List[CollaborationRecord]:
        return self._select_many(
            _SQL_LIST_PENDING_FOR_EMAIL,
            [email],
            "PostgresCollaboratorRepository: Failed to list pending invitations",
            {},
        )

    def update(self, record: CollaborationRecord) -> CollaborationRecord:
        p = record.permissions
        row = self._fetchone(
            query=_SQL_UPDATE,
            params=[
                record.user_id,
                record.role.value,
                p.can_edit,
                p.can_suggest_changes,
                p.can_view_analytics,
                p.can_invite_others,
                p.can_manage_settings,
                record.status.value,
                record.accepted_at,
                record.id,
            ],
            context_msg="PostgresCollaboratorRepository: Failed to update record",
            extra={"collaborator_id": str(record.id)},
        )
        if not row:
            raise DatabaseError(
                "PostgresCollaboratorRepository: Record vanished during update"
            )
        return self._row_to_record(row)

    def delete(self, collaborator_id: UUID) -> bool:
        return (
            self._execute(
                query=_SQL_DELETE,
                params=[collaborator_id],
                context_msg="PostgresCollaboratorRepository: Failed to delete record",
                extra={"collaborator_id": str(collaborator_id)},
            )
            > 0
        )

    def delete_by_workspace(self, workspace_id: UUID) -> int:
        return self._execute(
            query=_SQL_DELETE_BY_WORKSPACE,
            params=[workspace_id],
            context_msg="PostgresCollaboratorRepository: Failed to delete records",
            extra={"workspace_id": str(workspace_id)},
        )
