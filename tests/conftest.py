"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test -> in-memory adapters)
  - Provide fakes for CredentialCodec and Clock
  - Provide in-memory repositories and actors

Collaborators:
  - pytest: Test framework
  - cvshare.domain: entities and ports
  - cvshare.infrastructure.repositories.in_memory

Notes:
  - Settings and container singletons are reset around every test
"""

import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ["APP_ENV"] = "test"
os.environ.setdefault("JWT_SECRET", "test-secret-with-enough-length-for-hs256")

from cvshare.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from cvshare.application.rate_limiting import InMemoryRateLimitStore  # noqa: E402
from cvshare.domain.entities import Actor  # noqa: E402
from cvshare.infrastructure.repositories.in_memory import (  # noqa: E402
    InMemoryCollaboratorRepository,
    InMemoryWorkspaceRepository,
)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Fakes
# ============================================================================


class FakeCodec:
    """
    CredentialCodec determinístico.

    - Tokens: token-1, token-2, ...
    - Hash: "fakesalt:<plaintext>" (mismo layout salt:key)
    """

    def __init__(self) -> None:
        self.tokens_generated = 0
        self.hashed: list[str] = []

    def generate_token(self) -> str:
        self.tokens_generated += 1
        return f"token-{self.tokens_generated}"

    def hash_password(self, plaintext: str) -> str:
        self.hashed.append(plaintext)
        return f"fakesalt:{plaintext}"

    def verify_password(self, plaintext: str, stored: str) -> bool:
        return bool(stored) and stored == f"fakesalt:{plaintext}"


class FakeClock:
    def __init__(self, now_ms: int = 1_000_000) -> None:
        self.now = now_ms

    def now_ms(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_singletons():
    from cvshare.container import clear_container_caches

    app_config.get_settings.cache_clear()
    clear_container_caches()
    yield
    app_config.get_settings.cache_clear()
    clear_container_caches()


@pytest.fixture
def codec() -> FakeCodec:
    return FakeCodec()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def workspace_repo() -> InMemoryWorkspaceRepository:
    return InMemoryWorkspaceRepository()


@pytest.fixture
def collaborator_repo() -> InMemoryCollaboratorRepository:
    return InMemoryCollaboratorRepository()


@pytest.fixture
def rate_limit_store() -> InMemoryRateLimitStore:
    return InMemoryRateLimitStore()


@pytest.fixture
def owner() -> Actor:
    return Actor(user_id="user-owner", email="owner@example.com")


@pytest.fixture
def invitee() -> Actor:
    return Actor(user_id="user-invitee", email="invitee@example.com")


@pytest.fixture
def stranger() -> Actor:
    return Actor(user_id="user-stranger", email="stranger@example.com")


# ============================================================================
# API
# ============================================================================


@pytest.fixture
def client(monkeypatch, codec):
    """TestClient con adapters in-memory y codec determinístico."""
    from fastapi.testclient import TestClient

    from cvshare import container
    from cvshare.api.main import app

    monkeypatch.setattr(container, "Argon2CredentialCodec", lambda: codec)
    return TestClient(app)


@pytest.fixture
def auth_headers():
    from cvshare.identity.auth import create_access_token

    def _headers(actor: Actor) -> dict[str, str]:
        token, _ = create_access_token(actor.user_id, actor.email)
        return {"Authorization": f"Bearer {token}"}

    return _headers
