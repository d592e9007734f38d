"""
Name: Workspace Use Case Tests

Responsibilities:
  - Create workspace (slug rules, initial privacy, owner record)
  - Public read exposes no credentials
  - Evaluate access (slug -> config, user -> collaboration)
  - Owner-only privacy update / settings / delete

Notes:
  - In-memory repositories + FakeCodec (conftest)
"""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from cvshare.application.usecases import (
    GENERIC_DENIAL_REASON,
    CreateWorkspaceInput,
    CreateWorkspaceUseCase,
    DeleteWorkspaceUseCase,
    EvaluateAccessInput,
    EvaluateAccessUseCase,
    GetPrivacySettingsUseCase,
    GetPublicWorkspaceUseCase,
    UpdatePrivacyInput,
    UpdatePrivacyUseCase,
    WorkspaceErrorCode,
)
from cvshare.crosscutting.exceptions import DatabaseError
from cvshare.domain.entities import (
    CollaborationRecord,
    CollaborationStatus,
    CollaboratorPermissions,
    CollaboratorRole,
    PrivacyConfiguration,
    PrivacyLevel,
)


@pytest.fixture
def create_uc(workspace_repo, collaborator_repo, codec) -> CreateWorkspaceUseCase:
    return CreateWorkspaceUseCase(
        workspace_repository=workspace_repo,
        collaborator_repository=collaborator_repo,
        codec=codec,
    )


@pytest.fixture
def make_workspace(create_uc, owner):
    def _make(slug="jane-doe", **kwargs):
        result = create_uc.execute(
            CreateWorkspaceInput(name="Jane CV", slug=slug, actor=owner, **kwargs)
        )
        assert result.error is None
        return result

    return _make


@pytest.mark.unit
class TestCreateWorkspace:
    def test_defaults_to_public_and_indexable(self, make_workspace):
        ws = make_workspace().workspace

        assert ws.privacy.level == PrivacyLevel.PUBLIC
        assert ws.privacy.allow_search_engines is True
        assert ws.privacy.ever_public is True

    def test_owner_record_is_accepted_with_full_permissions(
        self, make_workspace, collaborator_repo, owner
    ):
        ws = make_workspace().workspace

        record = collaborator_repo.get_accepted_for_user(ws.id, owner.user_id)

        assert record is not None
        assert record.role == CollaboratorRole.OWNER
        assert all(record.permissions.to_dict().values())

    def test_secret_link_returns_generated_token(self, make_workspace):
        result = make_workspace(privacy_level="secret_link")

        assert result.secret_token == "token-1"
        assert result.workspace.privacy.secret_token == "token-1"
        assert result.workspace.privacy.allow_search_engines is False

    def test_password_level_requires_password(self, create_uc, owner):
        result = create_uc.execute(
            CreateWorkspaceInput(
                name="CV", slug="jane", actor=owner, privacy_level="password"
            )
        )

        assert result.error.code == WorkspaceErrorCode.PASSWORD_REQUIRED

    def test_invalid_level(self, create_uc, owner):
        result = create_uc.execute(
            CreateWorkspaceInput(name="CV", slug="jane", actor=owner, privacy_level="x")
        )

        assert result.error.code == WorkspaceErrorCode.INVALID_PRIVACY_LEVEL

    def test_slug_is_normalized(self, make_workspace):
        assert make_workspace(slug="  Jane-Doe ").workspace.slug == "jane-doe"

    @pytest.mark.parametrize("slug", ["ab", "jane doe", "jane_doe", "a" * 65])
    def test_invalid_slug(self, create_uc, owner, slug):
        result = create_uc.execute(CreateWorkspaceInput(name="CV", slug=slug, actor=owner))

        assert result.error.code == WorkspaceErrorCode.VALIDATION_ERROR

    def test_duplicate_slug_conflicts(self, make_workspace, create_uc, owner):
        make_workspace()

        result = create_uc.execute(
            CreateWorkspaceInput(name="Other", slug="jane-doe", actor=owner)
        )

        assert result.error.code == WorkspaceErrorCode.CONFLICT

    def test_requires_actor(self, create_uc):
        result = create_uc.execute(CreateWorkspaceInput(name="CV", slug="jane"))

        assert result.error.code == WorkspaceErrorCode.FORBIDDEN

    def test_owner_record_failure_rolls_back_workspace(
        self, workspace_repo, collaborator_repo, codec, owner
    ):
        collaborator_repo.create = MagicMock(side_effect=DatabaseError("insert failed"))
        use_case = CreateWorkspaceUseCase(
            workspace_repository=workspace_repo,
            collaborator_repository=collaborator_repo,
            codec=codec,
        )

        with pytest.raises(DatabaseError):
            use_case.execute(
                CreateWorkspaceInput(name="Jane CV", slug="jane-doe", actor=owner)
            )

        assert workspace_repo.get_workspace_by_slug("jane-doe") is None


@pytest.mark.unit
class TestGetPublicWorkspace:
    def test_view_has_no_credentials(self, make_workspace, workspace_repo):
        make_workspace(privacy_level="secret_link")

        result = GetPublicWorkspaceUseCase(workspace_repo).execute("jane-doe")

        assert result.view.level == PrivacyLevel.SECRET_LINK
        assert not hasattr(result.view, "secret_token")
        assert not hasattr(result.view, "password_hash")

    def test_unknown_slug(self, workspace_repo):
        result = GetPublicWorkspaceUseCase(workspace_repo).execute("nobody")

        assert result.error.code == WorkspaceErrorCode.NOT_FOUND


@pytest.mark.unit
class TestEvaluateAccess:
    @pytest.fixture
    def access_uc(self, workspace_repo, collaborator_repo, codec):
        return EvaluateAccessUseCase(
            workspace_repository=workspace_repo,
            collaborator_repository=collaborator_repo,
            codec=codec,
        )

    def test_unknown_slug_is_not_found(self, access_uc):
        result = access_uc.execute(EvaluateAccessInput(slug="missing"))

        assert result.error.code == WorkspaceErrorCode.NOT_FOUND

    def test_secret_link_with_token(self, make_workspace, access_uc):
        token = make_workspace(privacy_level="secret_link").secret_token

        result = access_uc.execute(
            EvaluateAccessInput(slug="jane-doe", provided_token=token)
        )

        assert result.decision.can_access is True

    def test_owner_reads_private_cv(self, make_workspace, access_uc, owner):
        make_workspace(privacy_level="private")

        result = access_uc.execute(
            EvaluateAccessInput(slug="jane-doe", authenticated_user_id=owner.user_id)
        )

        assert result.decision.can_access is True
        assert result.decision.is_collaborator is True

    def test_stranger_denied_on_private_cv(self, make_workspace, access_uc, stranger):
        make_workspace(privacy_level="private")

        result = access_uc.execute(
            EvaluateAccessInput(
                slug="jane-doe", authenticated_user_id=stranger.user_id
            )
        )

        assert result.decision.can_access is False
        assert result.decision.requires_authentication is False

    def test_pending_invitee_is_not_a_collaborator(
        self, make_workspace, access_uc, collaborator_repo, invitee
    ):
        ws = make_workspace(privacy_level="private").workspace
        collaborator_repo.create(
            CollaborationRecord(
                id=uuid4(),
                workspace_id=ws.id,
                role=CollaboratorRole.VIEWER,
                permissions=CollaboratorPermissions(),
                status=CollaborationStatus.PENDING,
                user_id=invitee.user_id,
                invite_email=invitee.email,
            )
        )

        result = access_uc.execute(
            EvaluateAccessInput(slug="jane-doe", authenticated_user_id=invitee.user_id)
        )

        assert result.decision.can_access is False

    def test_corrupt_level_shows_generic_reason(
        self, make_workspace, access_uc, workspace_repo
    ):
        ws = make_workspace().workspace
        workspace_repo.update_privacy(ws.id, PrivacyConfiguration(level="bogus"))

        result = access_uc.execute(EvaluateAccessInput(slug="jane-doe"))

        assert result.decision.can_access is False
        assert result.decision.reason == GENERIC_DENIAL_REASON


@pytest.mark.unit
class TestUpdatePrivacy:
    @pytest.fixture
    def update_uc(self, workspace_repo, codec):
        return UpdatePrivacyUseCase(repository=workspace_repo, codec=codec)

    def test_owner_switches_to_secret_link(self, make_workspace, update_uc, owner):
        ws = make_workspace().workspace

        result = update_uc.execute(
            UpdatePrivacyInput(workspace_id=ws.id, new_level="secret_link", actor=owner)
        )

        assert result.error is None
        assert result.secret_token == "token-1"
        assert result.privacy.level == PrivacyLevel.SECRET_LINK

    def test_token_only_returned_when_generated(self, make_workspace, update_uc, owner):
        ws = make_workspace(privacy_level="secret_link").workspace

        result = update_uc.execute(
            UpdatePrivacyInput(workspace_id=ws.id, new_level="secret_link", actor=owner)
        )

        assert result.secret_token is None
        assert result.privacy.secret_token == "token-1"

    def test_non_owner_forbidden(self, make_workspace, update_uc, stranger):
        ws = make_workspace().workspace

        result = update_uc.execute(
            UpdatePrivacyInput(workspace_id=ws.id, new_level="private", actor=stranger)
        )

        assert result.error.code == WorkspaceErrorCode.FORBIDDEN

    def test_password_required(self, make_workspace, update_uc, owner):
        ws = make_workspace().workspace

        result = update_uc.execute(
            UpdatePrivacyInput(workspace_id=ws.id, new_level="password", actor=owner)
        )

        assert result.error.code == WorkspaceErrorCode.PASSWORD_REQUIRED

    def test_invalid_level(self, make_workspace, update_uc, owner):
        ws = make_workspace().workspace

        result = update_uc.execute(
            UpdatePrivacyInput(workspace_id=ws.id, new_level="nope", actor=owner)
        )

        assert result.error.code == WorkspaceErrorCode.INVALID_PRIVACY_LEVEL

    def test_unknown_workspace(self, update_uc, owner):
        result = update_uc.execute(
            UpdatePrivacyInput(workspace_id=uuid4(), new_level="public", actor=owner)
        )

        assert result.error.code == WorkspaceErrorCode.NOT_FOUND

    def test_change_is_persisted(self, make_workspace, update_uc, owner, workspace_repo):
        ws = make_workspace().workspace

        update_uc.execute(
            UpdatePrivacyInput(
                workspace_id=ws.id, new_level="password", actor=owner, new_password="pw"
            )
        )

        stored = workspace_repo.get_workspace(ws.id)
        assert stored.privacy.level == PrivacyLevel.PASSWORD
        assert stored.privacy.password_hash == "fakesalt:pw"


@pytest.mark.unit
class TestPrivacySettingsAndDelete:
    def test_owner_sees_token_but_not_hash(self, make_workspace, workspace_repo, owner):
        ws = make_workspace(privacy_level="secret_link").workspace

        result = GetPrivacySettingsUseCase(workspace_repo).execute(ws.id, owner)

        assert result.settings.secret_token == "token-1"
        assert result.settings.has_password is False
        assert not hasattr(result.settings, "password_hash")

    def test_settings_forbidden_for_others(self, make_workspace, workspace_repo, stranger):
        ws = make_workspace().workspace

        result = GetPrivacySettingsUseCase(workspace_repo).execute(ws.id, stranger)

        assert result.error.code == WorkspaceErrorCode.FORBIDDEN

    def test_delete_removes_workspace_and_collaborations(
        self, make_workspace, workspace_repo, collaborator_repo, owner
    ):
        ws = make_workspace().workspace
        delete_uc = DeleteWorkspaceUseCase(workspace_repo, collaborator_repo)

        result = delete_uc.execute(ws.id, owner)

        assert result.deleted is True
        assert workspace_repo.get_workspace(ws.id) is None
        assert collaborator_repo.list_by_workspace(ws.id) == []

    def test_delete_forbidden_for_others(
        self, make_workspace, workspace_repo, collaborator_repo, stranger
    ):
        ws = make_workspace().workspace

        result = DeleteWorkspaceUseCase(workspace_repo, collaborator_repo).execute(
            ws.id, stranger
        )

        assert result.error.code == WorkspaceErrorCode.FORBIDDEN
        assert workspace_repo.get_workspace(ws.id) is not None
