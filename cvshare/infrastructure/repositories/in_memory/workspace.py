"""
============================================================
TARJETA CRC - infrastructure/repositories/in_memory/workspace.py
============================================================
Class: InMemoryWorkspaceRepository

Responsibilities:
  - Almacenar workspaces de CV en memoria (tests / local dev).
  - Lookup por id y por slug.
  - Reemplazar la privacidad embebida en una sola operación bajo lock.

Collaborators:
  - domain.entities.Workspace, PrivacyConfiguration
  - domain.repositories.WorkspaceRepository (contrato a implementar)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: los callers nunca comparten la instancia guardada.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....domain.entities import PrivacyConfiguration, Workspace
from ....domain.repositories import WorkspaceRepository


class InMemoryWorkspaceRepository(WorkspaceRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._workspaces: Dict[UUID, Workspace] = {}

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def _copy(workspace: Workspace) -> Workspace:
        # R: PrivacyConfiguration es frozen; alcanza con copiar el contenedor.
        return replace(workspace)

    def create_workspace(self, workspace: Workspace) -> Workspace:
        now = self._now()
        stored = replace(
            workspace,
            created_at=workspace.created_at or now,
            updated_at=workspace.updated_at or now,
        )
        with self._lock:
            self._workspaces[stored.id] = stored
        return self._copy(stored)

    def get_workspace(self, workspace_id: UUID) -> Optional[Workspace]:
        with self._lock:
            stored = self._workspaces.get(workspace_id)
        return self._copy(stored) if stored else None

    def get_workspace_by_slug(self, slug: str) -> Optional[Workspace]:
        with self._lock:
            stored = next(
                (w for w in self._workspaces.values() if w.slug == slug), None
            )
        return self._copy(stored) if stored else None

    def update_privacy(
        self, workspace_id: UUID, privacy: PrivacyConfiguration
    ) -> Optional[Workspace]:
        with self._lock:
            stored = self._workspaces.get(workspace_id)
            if stored is None:
                return None
            updated = replace(stored, privacy=privacy, updated_at=self._now())
            self._workspaces[workspace_id] = updated
        return self._copy(updated)

    def delete_workspace(self, workspace_id: UUID) -> bool:
        with self._lock:
            return self._workspaces.pop(workspace_id, None) is not None
