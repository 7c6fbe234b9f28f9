"""Tests for registration, login and session resolution."""


def _register(client, email="new@example.com", name="New Person", password="secret-password"):
    return client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": password, "name": name},
    )


class TestRegister:
    def test_register_creates_profile_row(self, client, supabase):
        response = _register(client, email="New@Example.com")
        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "new@example.com"

        rows = supabase.rows("users", id=body["user_id"])
        assert len(rows) == 1
        assert rows[0]["name"] == "New Person"
        assert rows[0]["email"] == "new@example.com"

    def test_register_existing_email_conflicts(self, client, supabase, owner):
        response = _register(client, email="owner@example.com")
        assert response.status_code == 409
        assert len(supabase.rows("users", email="owner@example.com")) == 1

    def test_register_requires_name(self, client):
        response = _register(client, name="   ")
        assert response.status_code == 422

    def test_profile_insert_failure_is_reported(self, client, supabase):
        supabase.fail("table:users:insert")
        response = _register(client)
        assert response.status_code == 502
        assert supabase.rows("users", email="new@example.com") == []


class TestLogin:
    def test_login_returns_token(self, client):
        _register(client)
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "new@example.com", "password": "secret-password"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["email"] == "new@example.com"
        assert body["access_token"]

    def test_login_with_wrong_password(self, client):
        _register(client)
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "new@example.com", "password": "not-the-password"},
        )
        assert response.status_code == 401


class TestSession:
    def test_me_lists_profile_and_workspaces(self, client, owner, workspace):
        user, headers = owner
        response = client.get("/api/v1/auth/me", headers=headers)
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == user["id"]
        assert body["name"] == "Olivia Owner"
        assert [w["id"] for w in body["workspaces"]] == [workspace["id"]]
        assert body["workspaces"][0]["role"] == "owner"

    def test_missing_token_is_unauthorized(self, client):
        response = client.get("/api/v1/workspaces")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token_is_unauthorized(self, client):
        response = client.get("/api/v1/workspaces", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_logout_revokes_only_the_callers_session(self, client, supabase, owner, member):
        _, owner_headers = owner
        _, member_headers = member
        token = owner_headers["Authorization"].split(" ", 1)[1]

        response = client.post("/api/v1/auth/logout", headers=owner_headers)
        assert response.status_code == 200
        assert supabase.auth.admin.signed_out == [(token, "local")]

        assert client.get("/api/v1/workspaces", headers=owner_headers).status_code == 401
        assert client.get("/api/v1/workspaces", headers=member_headers).status_code == 200

    def test_logout_requires_token(self, client, supabase):
        assert client.post("/api/v1/auth/logout").status_code == 401
        assert supabase.auth.admin.signed_out == []
