"""
============================================================
TARJETA CRC - infrastructure/repositories/in_memory/collaborator.py
============================================================
Class: InMemoryCollaboratorRepository

Responsibilities:
  - Guardar registros de colaboración (invitaciones y membresías) en memoria.
  - Lookups por workspace, usuario y email.

Collaborators:
  - domain.entities.CollaborationRecord, CollaborationStatus
  - domain.repositories.CollaboratorRepository

Constraints / Notes:
  - Thread-safe (Lock) + copias defensivas.
  - Orden determinístico: invited_at ASC, id ASC (igual que Postgres).
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from ....domain.entities import CollaborationRecord, CollaborationStatus
from ....domain.repositories import CollaboratorRepository

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryCollaboratorRepository(CollaboratorRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._records: Dict[UUID, CollaborationRecord] = {}

    @staticmethod
    def _sorted(items: Iterable[CollaborationRecord]) -> List[CollaborationRecord]:
        return [
            replace(r)
            for r in sorted(items, key=lambda r: (r.invited_at or _EPOCH, str(r.id)))
        ]

    def create(self, record: CollaborationRecord) -> CollaborationRecord:
        with self._lock:
            self._records[record.id] = replace(record)
        return replace(record)

    def get(self, collaborator_id: UUID) -> Optional[CollaborationRecord]:
        with self._lock:
            stored = self._records.get(collaborator_id)
        return replace(stored) if stored else None

    def get_accepted_for_user(
        self, workspace_id: UUID, user_id: str
    ) -> Optional[CollaborationRecord]:
        with self._lock:
            stored = next(
                (
                    r
                    for r in self._records.values()
                    if r.workspace_id == workspace_id
                    and r.user_id == user_id
                    and r.status == CollaborationStatus.ACCEPTED
                ),
                None,
            )
        return replace(stored) if stored else None

    def find_by_email(
        self, workspace_id: UUID, email: str, status: CollaborationStatus
    ) -> Optional[CollaborationRecord]:
        with self._lock:
            stored = next(
                (
                    r
                    for r in self._records.values()
                    if r.workspace_id == workspace_id
                    and r.invite_email == email
                    and r.status == status
                ),
                None,
            )
        return replace(stored) if stored else None

    def list_by_workspace(
        self, workspace_id: UUID, *, status: CollaborationStatus | None = None
    ) -> List[CollaborationRecord]:
        with self._lock:
            values = [
                r
                for r in self._records.values()
                if r.workspace_id == workspace_id
                and (status is None or r.status == status)
            ]
        return self._sorted(values)

    def list_pending_for_email(self, email: str) -> List[CollaborationRecord]:
        with self._lock:
            values = [
                r
                for r in self._records.values()
                if r.invite_email == email and r.status == CollaborationStatus.PENDING
            ]
        return self._sorted(values)

    def update(self, record: CollaborationRecord) -> CollaborationRecord:
        with self._lock:
            self._records[record.id] = replace(record)
        return replace(record)

    def delete(self, collaborator_id: UUID) -> bool:
        with self._lock:
            return self._records.pop(collaborator_id, None) is not None

    def delete_by_workspace(self, workspace_id: UUID) -> int:
        with self._lock:
            doomed = [
                rid for rid, r in self._records.items() if r.workspace_id == workspace_id
            ]
            for rid in doomed:
                del self._records[rid]
        return len(doomed)
