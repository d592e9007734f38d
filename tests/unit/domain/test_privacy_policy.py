"""
Name: Access Policy Tests

Responsibilities:
  - Test first-match-wins evaluation per privacy level
  - Test collaborator override (including private)
  - Test reasons and prompt flags

Notes:
  - Pure function, FakeCodec from conftest
"""

from uuid import uuid4

import pytest

from cvshare.domain.entities import (
    AccessRequestContext,
    CollaborationRecord,
    CollaborationStatus,
    CollaboratorPermissions,
    CollaboratorRole,
    PrivacyConfiguration,
    PrivacyLevel,
)
from cvshare.domain.privacy_policy import (
    REASON_AUTH_REQUIRED,
    REASON_INCORRECT_PASSWORD,
    REASON_INSUFFICIENT_PERMISSIONS,
    REASON_INVALID_CONFIGURATION,
    REASON_INVALID_TOKEN,
    evaluate_access,
    is_invalid_configuration,
)


def _record(status: CollaborationStatus) -> CollaborationRecord:
    return CollaborationRecord(
        id=uuid4(),
        workspace_id=uuid4(),
        role=CollaboratorRole.VIEWER,
        permissions=CollaboratorPermissions.for_role(CollaboratorRole.VIEWER),
        status=status,
        user_id="user-1",
    )


@pytest.mark.unit
class TestCollaboratorOverride:
    @pytest.mark.parametrize("level", list(PrivacyLevel))
    def test_accepted_collaborator_is_granted_on_every_level(self, codec, level):
        config = PrivacyConfiguration(level=level, secret_token="abc")
        context = AccessRequestContext(
            is_authenticated=True,
            collaboration=_record(CollaborationStatus.ACCEPTED),
        )

        decision = evaluate_access(config, context, codec)

        assert decision.can_access is True
        assert decision.is_collaborator is True
        assert decision.reason is None

    def test_pending_collaboration_does_not_grant_private(self, codec):
        config = PrivacyConfiguration(level=PrivacyLevel.PRIVATE)
        context = AccessRequestContext(
            is_authenticated=True,
            collaboration=_record(CollaborationStatus.PENDING),
        )

        decision = evaluate_access(config, context, codec)

        assert decision.can_access is False
        assert decision.is_collaborator is False
        assert decision.reason == REASON_INSUFFICIENT_PERMISSIONS


@pytest.mark.unit
class TestPublic:
    def test_anonymous_visitor_is_granted(self, codec):
        decision = evaluate_access(
            PrivacyConfiguration(level=PrivacyLevel.PUBLIC),
            AccessRequestContext(),
            codec,
        )

        assert decision.can_access is True
        assert decision.requires_password is False
        assert decision.requires_authentication is False
        assert decision.reason is None


@pytest.mark.unit
class TestSecretLink:
    def test_matching_token_grants(self, codec):
        config = PrivacyConfiguration(
            level=PrivacyLevel.SECRET_LINK, secret_token="a" * 64
        )

        decision = evaluate_access(
            config, AccessRequestContext(provided_token="a" * 64), codec
        )

        assert decision.can_access is True

    @pytest.mark.parametrize(
        "provided",
        [None, "", "A" * 64, "a" * 63, "a" * 65],
        ids=["missing", "empty", "case", "prefix", "longer"],
    )
    def test_mismatching_token_denies_without_prompts(self, codec, provided):
        config = PrivacyConfiguration(
            level=PrivacyLevel.SECRET_LINK, secret_token="a" * 64
        )

        decision = evaluate_access(
            config, AccessRequestContext(provided_token=provided), codec
        )

        assert decision.can_access is False
        assert decision.reason == REASON_INVALID_TOKEN
        assert decision.requires_password is False
        assert decision.requires_authentication is False

    def test_no_stored_token_denies(self, codec):
        config = PrivacyConfiguration(level=PrivacyLevel.SECRET_LINK)

        decision = evaluate_access(
            config, AccessRequestContext(provided_token="anything"), codec
        )

        assert decision.can_access is False
        assert decision.reason == REASON_INVALID_TOKEN


@pytest.mark.unit
class TestPassword:
    def _config(self, codec):
        return PrivacyConfiguration(
            level=PrivacyLevel.PASSWORD, password_hash=codec.hash_password("s3cret")
        )

    def test_missing_password_prompts_without_reason(self, codec):
        decision = evaluate_access(self._config(codec), AccessRequestContext(), codec)

        assert decision.can_access is False
        assert decision.requires_password is True
        assert decision.reason is None

    def test_correct_password_grants(self, codec):
        decision = evaluate_access(
            self._config(codec),
            AccessRequestContext(provided_password="s3cret"),
            codec,
        )

        assert decision.can_access is True
        assert decision.requires_password is False

    def test_wrong_password_prompts_with_reason(self, codec):
        decision = evaluate_access(
            self._config(codec),
            AccessRequestContext(provided_password="nope"),
            codec,
        )

        assert decision.can_access is False
        assert decision.requires_password is True
        assert decision.reason == REASON_INCORRECT_PASSWORD

    def test_missing_hash_fails_closed(self, codec):
        decision = evaluate_access(
            PrivacyConfiguration(level=PrivacyLevel.PASSWORD),
            AccessRequestContext(provided_password="anything"),
            codec,
        )

        assert decision.can_access is False
        assert decision.reason == REASON_INCORRECT_PASSWORD


@pytest.mark.unit
class TestPrivate:
    def test_anonymous_requires_authentication(self, codec):
        decision = evaluate_access(
            PrivacyConfiguration(level=PrivacyLevel.PRIVATE),
            AccessRequestContext(),
            codec,
        )

        assert decision.can_access is False
        assert decision.requires_authentication is True
        assert decision.reason == REASON_AUTH_REQUIRED

    def test_authenticated_non_member_is_denied(self, codec):
        decision = evaluate_access(
            PrivacyConfiguration(level=PrivacyLevel.PRIVATE),
            AccessRequestContext(is_authenticated=True),
            codec,
        )

        assert decision.can_access is False
        assert decision.requires_authentication is False
        assert decision.reason == REASON_INSUFFICIENT_PERMISSIONS


@pytest.mark.unit
@pytest.mark.parametrize("level", ["friends_only", "PUBLIC", " public", "Private"])
def test_unknown_level_is_invalid_configuration(codec, level):
    decision = evaluate_access(
        PrivacyConfiguration(level=level), AccessRequestContext(), codec
    )

    assert decision.can_access is False
    assert decision.reason == REASON_INVALID_CONFIGURATION
    assert is_invalid_configuration(decision) is True


@pytest.mark.unit
def test_decision_to_dict_omits_reason_when_granted(codec):
    decision = evaluate_access(PrivacyConfiguration(), AccessRequestContext(), codec)

    assert "reason" not in decision.to_dict()
