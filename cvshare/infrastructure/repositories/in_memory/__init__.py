"""In-memory repositories (tests / local dev)."""

from ....application.rate_limiting import InMemoryRateLimitStore
from .collaborator import InMemoryCollaboratorRepository
from .workspace import InMemoryWorkspaceRepository

__all__ = [
    "InMemoryCollaboratorRepository",
    "InMemoryRateLimitStore",
    "InMemoryWorkspaceRepository",
]
