"""
Repository adapters.

- in_memory/: tests y desarrollo local (sin DATABASE_URL)
- postgres/: producción
"""

from .in_memory import (
    InMemoryCollaboratorRepository,
    InMemoryRateLimitStore,
    InMemoryWorkspaceRepository,
)
from .postgres import (
    PostgresCollaboratorRepository,
    PostgresRateLimitStore,
    PostgresWorkspaceRepository,
)

__all__ = [
    "InMemoryCollaboratorRepository",
    "InMemoryRateLimitStore",
    "InMemoryWorkspaceRepository",
    "PostgresCollaboratorRepository",
    "PostgresRateLimitStore",
    "PostgresWorkspaceRepository",
]
