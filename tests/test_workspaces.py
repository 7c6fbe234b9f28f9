"""Tests for the workspace store and workspace visibility."""


class TestCreateWorkspace:
    def test_creator_becomes_owner_member(self, client, supabase, owner, workspace):
        user, _ = owner
        assert workspace["name"] == "Eng"
        assert workspace["owner_id"] == user["id"]

        members = supabase.rows("workspace_members", workspace_id=workspace["id"])
        assert len(members) == 1
        assert members[0]["user_id"] == user["id"]
        assert members[0]["role"] == "owner"
        assert supabase.rpc_calls == ["create_workspace"]

    def test_blank_name_rejected(self, client, owner):
        _, headers = owner
        response = client.post("/api/v1/workspaces", json={"name": "  "}, headers=headers)
        assert response.status_code == 422

    def test_storage_failure_leaves_nothing_behind(self, client, supabase, owner):
        _, headers = owner
        supabase.fail("rpc:create_workspace")
        response = client.post("/api/v1/workspaces", json={"name": "Eng"}, headers=headers)
        assert response.status_code == 502
        assert supabase.rows("workspaces") == []
        assert supabase.rows("workspace_members") == []


class TestVisibility:
    def test_list_contains_only_member_workspaces(self, client, owner, member, workspace):
        _, owner_headers = owner
        _, member_headers = member
        client.post("/api/v1/workspaces", json={"name": "Design"}, headers=member_headers)

        owner_list = client.get("/api/v1/workspaces", headers=owner_headers).json()
        member_list = client.get("/api/v1/workspaces", headers=member_headers).json()
        assert [w["name"] for w in owner_list] == ["Eng"]
        assert [w["name"] for w in member_list] == ["Design"]

    def test_list_is_newest_first_with_role(self, client, owner, member, workspace, joined):
        _, member_headers = member
        client.post("/api/v1/workspaces", json={"name": "Design"}, headers=member_headers)

        listed = client.get("/api/v1/workspaces", headers=member_headers).json()
        assert [(w["name"], w["role"]) for w in listed] == [("Design", "owner"), ("Eng", "member")]

    def test_details_for_member(self, client, owner, member, workspace, joined, board):
        _, member_headers = member
        response = client.get(f"/api/v1/workspaces/{workspace['id']}", headers=member_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["workspace"]["id"] == workspace["id"]
        assert body["role"] == "member"
        assert {m["user"]["email"] for m in body["members"]} == {"owner@example.com", "member@example.com"}
        # no grant on the board yet
        assert body["boards"] == []

    def test_details_for_owner_list_all_boards(self, client, owner, workspace, board):
        _, headers = owner
        body = client.get(f"/api/v1/workspaces/{workspace['id']}", headers=headers).json()
        assert body["role"] == "owner"
        assert [b["id"] for b in body["boards"]] == [board["id"]]

    def test_non_member_is_forbidden(self, client, outsider, workspace):
        _, headers = outsider
        response = client.get(f"/api/v1/workspaces/{workspace['id']}", headers=headers)
        assert response.status_code == 403

    def test_missing_workspace_is_not_found(self, client, owner):
        _, headers = owner
        response = client.get("/api/v1/workspaces/does-not-exist", headers=headers)
        assert response.status_code == 404

    def test_malformed_ids_are_not_found(self, client, owner, workspace):
        _, headers = owner
        assert client.get("/api/v1/workspaces/abc", headers=headers).status_code == 404
        assert client.get("/api/v1/workspaces/abc/boards", headers=headers).status_code == 404
        assert client.get("/api/v1/boards/abc", headers=headers).status_code == 404
        assert client.post("/api/v1/invitations/abc/accept", headers=headers).status_code == 404
        response = client.delete(f"/api/v1/workspaces/{workspace['id']}/members/abc", headers=headers)
        assert response.status_code == 404

    def test_removed_member_loses_workspace(self, client, owner, member, workspace, joined):
        _, owner_headers = owner
        _, member_headers = member
        assert len(client.get("/api/v1/workspaces", headers=member_headers).json()) == 1

        response = client.delete(
            f"/api/v1/workspaces/{workspace['id']}/members/{joined['id']}", headers=owner_headers
        )
        assert response.status_code == 204
        assert client.get("/api/v1/workspaces", headers=member_headers).json() == []
        assert client.get(
            f"/api/v1/workspaces/{workspace['id']}", headers=member_headers
        ).status_code == 403


class TestUpdateAndDelete:
    def test_owner_renames(self, client, owner, workspace):
        _, headers = owner
        response = client.put(
            f"/api/v1/workspaces/{workspace['id']}", json={"name": "Engineering"}, headers=headers
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Engineering"

    def test_member_cannot_rename(self, client, member, workspace, joined):
        _, headers = member
        response = client.put(
            f"/api/v1/workspaces/{workspace['id']}", json={"name": "Mine"}, headers=headers
        )
        assert response.status_code == 403

    def test_delete_cascades(self, client, supabase, owner, member, workspace, joined, board):
        _, headers = owner
        client.post(
            f"/api/v1/workspaces/{workspace['id']}/invitations",
            json={"email": "later@example.com"},
            headers=headers,
        )

        response = client.delete(f"/api/v1/workspaces/{workspace['id']}", headers=headers)
        assert response.status_code == 204
        assert supabase.rows("workspaces") == []
        assert supabase.rows("workspace_members") == []
        assert supabase.rows("boards") == []
        assert supabase.rows("board_members") == []
        assert supabase.rows("workspace_invitations") == []

    def test_member_cannot_delete(self, client, supabase, member, workspace, joined):
        _, headers = member
        response = client.delete(f"/api/v1/workspaces/{workspace['id']}", headers=headers)
        assert response.status_code == 403
        assert len(supabase.rows("workspaces")) == 1
