"""
Name: Collaborator + Invitation Endpoint Tests

Responsibilities:
  - Invite -> list pending -> accept/decline flow over HTTP
  - Owner-only management (PATCH / DELETE)
  - Leave workspace
  - Error mapping (401/403/404/409/422)
"""

from uuid import uuid4

import pytest

pytestmark = pytest.mark.unit


@pytest.fixture
def workspace_id(client, auth_headers, owner):
    res = client.post(
        "/v1/workspaces",
        json={"name": "Jane CV", "slug": "jane-doe", "privacy_level": "private"},
        headers=auth_headers(owner),
    )
    return res.json()["id"]


@pytest.fixture
def invite(client, auth_headers, owner, invitee, workspace_id):
    def _invite(email=invitee.email, role="viewer", actor=owner, **body):
        return client.post(
            f"/v1/workspaces/{workspace_id}/collaborators",
            json={"email": email, "role": role, **body},
            headers=auth_headers(actor),
        )

    return _invite


class TestInvitations:
    def test_invite_creates_pending_record(self, invite):
        res = invite(email=" Invitee@Example.com ")

        assert res.status_code == 201
        data = res.json()
        assert data["status"] == "pending"
        assert data["invite_email"] == "invitee@example.com"
        assert data["user_id"] is None

    def test_custom_permissions(self, invite):
        res = invite(permissions={"can_view_analytics": True})

        assert res.json()["permissions"]["can_view_analytics"] is True

    def test_duplicate_is_409(self, invite):
        invite()

        res = invite()

        assert res.status_code == 409
        assert res.json()["detail"] == "Email already has a pending invitation"

    def test_owner_role_is_422(self, invite):
        res = invite(role="owner")

        assert res.status_code == 422
        assert res.json()["code"] == "VALIDATION_ERROR"

    def test_stranger_is_403(self, invite, stranger):
        assert invite(actor=stranger).status_code == 403

    def test_unknown_workspace_is_404(self, client, auth_headers, owner):
        res = client.post(
            f"/v1/workspaces/{uuid4()}/collaborators",
            json={"email": "a@b.co", "role": "viewer"},
            headers=auth_headers(owner),
        )

        assert res.status_code == 404

    def test_requires_token(self, client, workspace_id):
        res = client.post(
            f"/v1/workspaces/{workspace_id}/collaborators",
            json={"email": "a@b.co", "role": "viewer"},
        )

        assert res.status_code == 401


class TestInvitationResponses:
    def test_accept_grants_access_to_private_cv(
        self, client, invite, auth_headers, invitee
    ):
        invite_id = invite().json()["id"]

        pending = client.get("/v1/invitations", headers=auth_headers(invitee)).json()
        accepted = client.post(
            f"/v1/invitations/{invite_id}/accept", headers=auth_headers(invitee)
        )
        access = client.get(
            "/v1/cv/jane-doe/access", headers=auth_headers(invitee)
        ).json()

        assert [c["id"] for c in pending["collaborators"]] == [invite_id]
        assert accepted.status_code == 200
        assert accepted.json()["status"] == "accepted"
        assert accepted.json()["user_id"] == invitee.user_id
        assert access["can_access"] is True
        assert access["is_collaborator"] is True

    def test_wrong_email_is_403(self, client, invite, auth_headers, stranger):
        invite_id = invite().json()["id"]

        res = client.post(
            f"/v1/invitations/{invite_id}/accept", headers=auth_headers(stranger)
        )

        assert res.status_code == 403
        assert res.json()["detail"] == "Email does not match invitation"

    def test_decline(self, client, invite, auth_headers, invitee):
        invite_id = invite().json()["id"]

        res = client.post(
            f"/v1/invitations/{invite_id}/decline", headers=auth_headers(invitee)
        )

        assert res.json()["status"] == "declined"
        assert (
            client.get("/v1/invitations", headers=auth_headers(invitee)).json()[
                "collaborators"
            ]
            == []
        )

    def test_unknown_invitation_is_404(self, client, auth_headers, invitee):
        res = client.post(
            f"/v1/invitations/{uuid4()}/accept", headers=auth_headers(invitee)
        )

        assert res.status_code == 404


class TestManagement:
    @pytest.fixture
    def member_id(self, client, invite, auth_headers, invitee):
        invite_id = invite(role="collaborator").json()["id"]
        client.post(f"/v1/invitations/{invite_id}/accept", headers=auth_headers(invitee))
        return invite_id

    def test_list_for_members_only(
        self, client, member_id, workspace_id, auth_headers, invitee, stranger
    ):
        members = client.get(
            f"/v1/workspaces/{workspace_id}/collaborators",
            headers=auth_headers(invitee),
        )
        outsider = client.get(
            f"/v1/workspaces/{workspace_id}/collaborators",
            headers=auth_headers(stranger),
        )

        assert len(members.json()["collaborators"]) == 2
        assert outsider.status_code == 403

    def test_owner_changes_role(self, client, member_id, auth_headers, owner):
        res = client.patch(
            f"/v1/collaborators/{member_id}",
            json={"role": "viewer"},
            headers=auth_headers(owner),
        )

        assert res.status_code == 200
        assert res.json()["role"] == "viewer"
        assert res.json()["permissions"]["can_suggest_changes"] is False

    def test_member_cannot_manage(self, client, member_id, auth_headers, invitee):
        res = client.delete(
            f"/v1/collaborators/{member_id}", headers=auth_headers(invitee)
        )

        assert res.status_code == 403

    def test_owner_record_cannot_be_removed(
        self, client, workspace_id, auth_headers, owner
    ):
        records = client.get(
            f"/v1/workspaces/{workspace_id}/collaborators", headers=auth_headers(owner)
        ).json()["collaborators"]
        owner_id = next(r["id"] for r in records if r["role"] == "owner")

        res = client.delete(f"/v1/collaborators/{owner_id}", headers=auth_headers(owner))

        assert res.status_code == 409
        assert res.json()["detail"] == "Cannot remove workspace owner"

    def test_owner_removes_member(self, client, member_id, auth_headers, owner):
        res = client.delete(f"/v1/collaborators/{member_id}", headers=auth_headers(owner))

        assert res.json() == {"removed": True}

    def test_member_leaves(self, client, member_id, workspace_id, auth_headers, invitee):
        res = client.post(
            f"/v1/workspaces/{workspace_id}/leave", headers=auth_headers(invitee)
        )
        again = client.post(
            f"/v1/workspaces/{workspace_id}/leave", headers=auth_headers(invitee)
        )

        assert res.json() == {"removed": True}
        assert again.status_code == 404

    def test_owner_cannot_leave(self, client, workspace_id, auth_headers, owner):
        res = client.post(
            f"/v1/workspaces/{workspace_id}/leave", headers=auth_headers(owner)
        )

        assert res.status_code == 409
