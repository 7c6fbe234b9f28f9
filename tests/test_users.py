"""Tests for user profile endpoints."""


def test_get_self(client, owner):
    user, headers = owner
    response = client.get(f"/api/v1/users/{user['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json()["email"] == "owner@example.com"
    assert response.json()["name"] == "Olivia Owner"


def test_shared_workspace_makes_user_visible(client, owner, member, joined):
    user, _ = owner
    _, headers = member
    response = client.get(f"/api/v1/users/{user['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json()["id"] == user["id"]


def test_unrelated_user_is_forbidden(client, owner, outsider, workspace):
    user, _ = owner
    _, headers = outsider
    assert client.get(f"/api/v1/users/{user['id']}", headers=headers).status_code == 403


def test_update_own_name(client, supabase, member):
    user, headers = member
    response = client.put(f"/api/v1/users/{user['id']}", json={"name": "  Marcus  "}, headers=headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Marcus"
    assert supabase.rows("users", id=user["id"])[0]["name"] == "Marcus"


def test_cannot_update_someone_else(client, owner, member, joined):
    user, _ = owner
    _, headers = member
    response = client.put(f"/api/v1/users/{user['id']}", json={"name": "Nope"}, headers=headers)
    assert response.status_code == 403


def test_requires_authentication(client, owner):
    user, _ = owner
    assert client.get(f"/api/v1/users/{user['id']}").status_code == 401
