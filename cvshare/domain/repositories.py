"""
CRC - domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for workspaces, collaborators and rate-limit windows.
- Keep application/domain independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing.

Collaborators
- domain.entities: Workspace, PrivacyConfiguration, CollaborationRecord, RateLimitRecord
- infrastructure.repositories: postgres/* and in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Implementations MUST match method signatures exactly.

Notes
- typing.Protocol for structural subtyping.
- Emails are stored normalized (strip + lower); callers normalize before lookups.
"""

from typing import List, Optional, Protocol
from uuid import UUID

from .entities import (
    CollaborationRecord,
    CollaborationStatus,
    PrivacyConfiguration,
    RateLimitRecord,
    Workspace,
)


class WorkspaceRepository(Protocol):
    """R: Interface for CV workspace persistence (privacy embedded)."""

    def create_workspace(self, workspace: Workspace) -> Workspace:
        """R: Persist a new workspace. Slug uniqueness is enforced by callers."""
        ...

    def get_workspace(self, workspace_id: UUID) -> Optional[Workspace]:
        ...

    def get_workspace_by_slug(self, slug: str) -> Optional[Workspace]:
        ...

    def update_privacy(
        self, workspace_id: UUID, privacy: PrivacyConfiguration
    ) -> Optional[Workspace]:
        """
        R: Replace the privacy configuration in a single write.

        Returns the updated workspace, or None if it does not exist.
        """
        ...

    def delete_workspace(self, workspace_id: UUID) -> bool:
        """R: Hard delete. Returns False if it did not exist."""
        ...


class CollaboratorRepository(Protocol):
    """R: Interface for collaboration records (invites and memberships)."""

    def create(self, record: CollaborationRecord) -> CollaborationRecord:
        ...

    def get(self, collaborator_id: UUID) -> Optional[CollaborationRecord]:
        ...

    def get_accepted_for_user(
        self, workspace_id: UUID, user_id: str
    ) -> Optional[CollaborationRecord]:
        """R: The single accepted record of user in workspace, if any."""
        ...

    def find_by_email(
        self, workspace_id: UUID, email: str, status: CollaborationStatus
    ) -> Optional[CollaborationRecord]:
        ...

    def list_by_workspace(
        self, workspace_id: UUID, *, status: CollaborationStatus | None = None
    ) -> List[CollaborationRecord]:
        ...

    def list_pending_for_email(self, email: str) -> List[CollaborationRecord]:
        ...

    def update(self, record: CollaborationRecord) -> CollaborationRecord:
        ...

    def delete(self, collaborator_id: UUID) -> bool:
        ...

    def delete_by_workspace(self, workspace_id: UUID) -> int:
        """R: Remove every record of a workspace. Returns count removed."""
        ...


class RateLimitStore(Protocol):
    """
    R: Fixed-window counters keyed by (identifier, endpoint).

    increment() MUST be atomic per key: reset-or-increment in one step.
    """

    def increment(
        self, identifier: str, endpoint: str, *, now_ms: int, window_ms: int
    ) -> RateLimitRecord:
        """
        R: Start a fresh window (count=1) when missing or now >= window_end,
        otherwise count += 1. Returns the stored record after the write.
        """
        ...

    def get(self, identifier: str, endpoint: str) -> Optional[RateLimitRecord]:
        ...

    def delete_expired(self, before_ms: int, limit: int) -> int:
        """R: Delete up to `limit` records with window_end < before_ms."""
        ...

    def list_active(self, now_ms: int) -> List[RateLimitRecord]:
        """R: Records whose window has not ended yet."""
        ...

    def list_since(self, since_ms: int) -> List[RateLimitRecord]:
        """R: Records whose window started at or after since_ms."""
        ...
