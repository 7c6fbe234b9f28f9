"""Shared pytest fixtures: the app wired to an in-memory Supabase fake."""

import pytest
from fastapi.testclient import TestClient

from app.database.supabase_client import get_auth_supabase, get_supabase
from app.main import app, limiter
from tests.fake_supabase import FakeSupabase


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def client(supabase):
    limiter.reset()
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_auth_supabase] = lambda: supabase
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def owner(supabase):
    """(user_row, auth headers) for the workspace owner in the tests"""
    user, token = supabase.create_user("owner@example.com", "Olivia Owner")
    return user, bearer(token)


@pytest.fixture
def member(supabase):
    user, token = supabase.create_user("member@example.com", "Mark Member")
    return user, bearer(token)


@pytest.fixture
def outsider(supabase):
    user, token = supabase.create_user("outsider@example.com", "Oscar Outsider")
    return user, bearer(token)


@pytest.fixture
def workspace(client, owner):
    _, headers = owner
    response = client.post("/api/v1/workspaces", json={"name": "Eng"}, headers=headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def joined(client, supabase, owner, member, workspace):
    """member added to workspace with role member; returns the membership row"""
    _, headers = owner
    response = client.post(
        f"/api/v1/workspaces/{workspace['id']}/members",
        json={"user_id": member[0]["id"]},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def board(client, owner, workspace):
    _, headers = owner
    response = client.post(
        f"/api/v1/workspaces/{workspace['id']}/boards", json={"name": "Roadmap"}, headers=headers
    )
    assert response.status_code == 201
    return response.json()
