"""
Name: Credential Codec Tests

Responsibilities:
  - Test token format (64 lowercase hex)
  - Test Argon2id hash format and verification
  - Test fail-closed behavior on malformed stored hashes
  - Secret link and password access flows with the real codec

Notes:
  - Low-cost Argon2 parameters to keep the suite fast
"""

import re

import pytest

from cvshare.domain.entities import (
    AccessRequestContext,
    PrivacyConfiguration,
    PrivacyLevel,
)
from cvshare.domain.privacy_policy import (
    REASON_INCORRECT_PASSWORD,
    REASON_INVALID_TOKEN,
    evaluate_access,
)
from cvshare.domain.privacy_transitions import apply_privacy_level, set_privacy_level
from cvshare.identity.credentials import (
    KEY_BYTES,
    SALT_BYTES,
    Argon2CredentialCodec,
)

_HEX64 = re.compile(r"^[0-9a-f]{64}$")


@pytest.fixture
def argon_codec() -> Argon2CredentialCodec:
    return Argon2CredentialCodec(time_cost=1, memory_cost=8, parallelism=1)


@pytest.mark.unit
class TestGenerateToken:
    def test_token_is_64_lowercase_hex(self, argon_codec):
        assert _HEX64.match(argon_codec.generate_token())

    def test_tokens_are_unique(self, argon_codec):
        tokens = {argon_codec.generate_token() for _ in range(10_000)}

        assert len(tokens) == 10_000


@pytest.mark.unit
class TestHashPassword:
    def test_hash_layout_is_salt_colon_key(self, argon_codec):
        salt_hex, sep, key_hex = argon_codec.hash_password("pw").partition(":")

        assert sep == ":"
        assert len(bytes.fromhex(salt_hex)) == SALT_BYTES
        assert len(bytes.fromhex(key_hex)) == KEY_BYTES

    def test_fresh_salt_every_call(self, argon_codec):
        assert argon_codec.hash_password("pw") != argon_codec.hash_password("pw")

    def test_both_hashes_of_same_password_verify(self, argon_codec):
        first = argon_codec.hash_password("pw")
        second = argon_codec.hash_password("pw")

        assert first != second
        assert argon_codec.verify_password("pw", first) is True
        assert argon_codec.verify_password("pw", second) is True

    def test_plaintext_is_not_in_hash(self, argon_codec):
        assert "hunter2" not in argon_codec.hash_password("hunter2")


@pytest.mark.unit
class TestVerifyPassword:
    def test_correct_password(self, argon_codec):
        stored = argon_codec.hash_password("correct horse")

        assert argon_codec.verify_password("correct horse", stored) is True

    def test_wrong_password(self, argon_codec):
        stored = argon_codec.hash_password("correct horse")

        assert argon_codec.verify_password("battery staple", stored) is False

    def test_hash_from_other_parameters_does_not_verify(self, argon_codec):
        other = Argon2CredentialCodec(time_cost=2, memory_cost=8, parallelism=1)
        stored = other.hash_password("pw")

        assert argon_codec.verify_password("pw", stored) is False

    @pytest.mark.parametrize(
        "stored",
        ["", "nocolon", ":abcd", "abcd:", "zz:abcd", "abcd:zz", "0:abcd"],
        ids=["empty", "no-sep", "no-salt", "no-key", "bad-salt", "bad-key", "odd"],
    )
    def test_malformed_hash_fails_closed(self, argon_codec, stored):
        assert argon_codec.verify_password("pw", stored) is False

    def test_short_salt_fails_closed(self, argon_codec):
        # argon2 rechaza salts < 8 bytes con HashingError
        assert argon_codec.verify_password("pw", "abcd:" + "00" * KEY_BYTES) is False


@pytest.mark.unit
class TestAccessWithRealCodec:
    def test_secret_link_round_trip(self, argon_codec):
        transition = apply_privacy_level(
            PrivacyConfiguration(), PrivacyLevel.SECRET_LINK, codec=argon_codec
        )
        token = transition.generated_token

        granted = evaluate_access(
            transition.config, AccessRequestContext(provided_token=token), argon_codec
        )
        tampered = evaluate_access(
            transition.config,
            AccessRequestContext(provided_token=token[:-1]),
            argon_codec,
        )

        assert _HEX64.match(token)
        assert granted.can_access is True
        assert tampered.can_access is False
        assert tampered.reason == REASON_INVALID_TOKEN

    def test_password_flow(self, argon_codec):
        config = set_privacy_level(
            PrivacyConfiguration(),
            PrivacyLevel.PASSWORD,
            new_password="sesame",
            codec=argon_codec,
        )

        prompt = evaluate_access(config, AccessRequestContext(), argon_codec)
        wrong = evaluate_access(
            config, AccessRequestContext(provided_password="Sesame"), argon_codec
        )
        right = evaluate_access(
            config, AccessRequestContext(provided_password="sesame"), argon_codec
        )

        assert "sesame" not in config.password_hash
        assert prompt.can_access is False
        assert prompt.requires_password is True
        assert prompt.reason is None
        assert wrong.can_access is False
        assert wrong.requires_password is True
        assert wrong.reason == REASON_INCORRECT_PASSWORD
        assert right.can_access is True
