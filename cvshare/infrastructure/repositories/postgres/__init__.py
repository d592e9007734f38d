"""PostgreSQL repositories (psycopg + psycopg_pool, SQL crudo)."""

from .collaborator import PostgresCollaboratorRepository
from .rate_limit import PostgresRateLimitStore
from .workspace import PostgresWorkspaceRepository

__all__ = [
    "PostgresCollaboratorRepository",
    "PostgresRateLimitStore",
    "PostgresWorkspaceRepository",
]
