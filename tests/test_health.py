"""Tests for the health endpoints, response headers and rate limiting."""

from app.config import settings


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_ready(client):
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


def test_security_headers(client):
    response = client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-XSS-Protection"] == "1; mode=block"


def test_default_rate_limit_is_enforced(client):
    allowed = int(settings.rate_limit.split("/")[0])
    for _ in range(allowed):
        assert client.get("/").status_code == 200
    response = client.get("/")
    assert response.status_code == 429
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_health_endpoints_are_exempt_from_the_limit(client):
    allowed = int(settings.rate_limit.split("/")[0])
    for _ in range(allowed):
        client.get("/")
    assert client.get("/health").status_code == 200
    assert client.get("/ready").status_code == 200
