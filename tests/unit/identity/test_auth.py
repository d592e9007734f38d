"""
Name: JWT Auth Tests

Responsibilities:
  - Test access token issue/decode
  - Test 401 on expired/invalid/incomplete tokens
  - Test token extraction (Bearer header / cookie)

Notes:
  - Unit tests (no external dependencies)
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import jwt
import pytest

from cvshare.crosscutting.error_responses import AppHTTPException
from cvshare.identity.auth import (
    JWT_ALGORITHM,
    AuthSettings,
    create_access_token,
    decode_access_token,
    extract_access_token,
    normalize_email,
)

SECRET = "unit-test-secret-with-enough-length"


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(
        jwt_secret=SECRET, jwt_access_ttl_minutes=5, jwt_cookie_name="cv_token"
    )


def _encode(payload: dict) -> str:
    return jwt.encode(payload, SECRET, algorithm=JWT_ALGORITHM)


def _exp(seconds: int) -> int:
    return int((datetime.now(timezone.utc) + timedelta(seconds=seconds)).timestamp())


@pytest.mark.unit
class TestAccessTokens:
    def test_issued_token_decodes_to_principal(self, auth_settings):
        token, expires_in = create_access_token(
            "user-1", " Owner@Example.com ", auth_settings
        )

        principal = decode_access_token(token, auth_settings)

        assert expires_in == 300
        assert principal.user_id == "user-1"
        assert principal.email == "owner@example.com"

    def test_expired_token_is_401(self, auth_settings):
        token = _encode({"sub": "u", "email": "a@b.c", "exp": _exp(-10)})

        with pytest.raises(AppHTTPException) as exc_info:
            decode_access_token(token, auth_settings)

        assert exc_info.value.status_code == 401

    def test_wrong_signature_is_401(self, auth_settings):
        token = jwt.encode(
            {"sub": "u", "email": "a@b.c", "exp": _exp(60)},
            "another-secret-with-enough-length!!",
            algorithm=JWT_ALGORITHM,
        )

        with pytest.raises(AppHTTPException) as exc_info:
            decode_access_token(token, auth_settings)

        assert exc_info.value.status_code == 401

    def test_missing_email_claim_is_401(self, auth_settings):
        token = _encode({"sub": "u", "exp": _exp(60)})

        with pytest.raises(AppHTTPException):
            decode_access_token(token, auth_settings)

    def test_non_access_token_type_is_401(self, auth_settings):
        token = _encode({"sub": "u", "email": "a@b.c", "exp": _exp(60), "typ": "refresh"})

        with pytest.raises(AppHTTPException):
            decode_access_token(token, auth_settings)


@pytest.mark.unit
class TestTokenExtraction:
    def test_bearer_header_wins(self):
        request = MagicMock()
        request.cookies = {"access_token": "from-cookie"}

        assert extract_access_token(request, "Bearer from-header") == "from-header"

    def test_cookie_fallback(self):
        request = MagicMock()
        request.cookies = {"access_token": "from-cookie"}

        assert extract_access_token(request, None) == "from-cookie"

    def test_non_bearer_scheme_is_ignored(self):
        request = MagicMock()
        request.cookies = {}

        assert extract_access_token(request, "Basic abc") is None


@pytest.mark.unit
def test_normalize_email():
    assert normalize_email("  A@B.COM ") == "a@b.com"
    assert normalize_email(None) == ""
