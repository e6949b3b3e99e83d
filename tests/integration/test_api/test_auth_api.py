"""Integration tests for authentication endpoints."""
import pytest


@pytest.mark.integration
class TestAuthAPI:
    """Test registration, login and session cookies."""

    def test_register_sets_session_cookie(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "Sam@Example.com", "password": "secret1"},
        )
        assert response.status_code == 201
        assert response.json()["email"] == "sam@example.com"
        assert "access_token" in response.cookies

        me = client.get("/api/v1/auth/me")
        assert me.status_code == 200
        assert me.json()["user_id"] == response.json()["user_id"]

    def test_register_duplicate_email(self, client, signup):
        signup("sam@example.com")
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "sam@example.com", "password": "secret1"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "An account with this email already exists"

    def test_register_short_password(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "sam@example.com", "password": "123"},
        )
        assert response.status_code == 400
        assert "at least 6" in response.json()["detail"]

    def test_login_and_logout(self, client, signup):
        signup("sam@example.com", password="secret1")

        response = client.post(
            "/api/v1/auth/login",
            json={"email": "sam@example.com", "password": "secret1"},
        )
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get("/api/v1/auth/me").status_code == 200

        response = client.post("/api/v1/auth/logout")
        assert response.status_code == 200
        client.cookies.clear()
        assert client.get("/api/v1/auth/me").status_code == 401

    def test_login_wrong_password(self, client, signup):
        signup("sam@example.com", password="secret1")

        response = client.post(
            "/api/v1/auth/login",
            json={"email": "sam@example.com", "password": "nope-nope"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_me_requires_session(self, client):
        response = client.get("/api/v1/auth/me")
        assert response.status_code == 401
        assert response.json()["detail"] == "Please sign in to access polls"

    def test_garbage_token_rejected(self, client):
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
        assert response.status_code == 401
        assert "Invalid session" in response.json()["detail"]

    def test_suggest_emails(self, client, signup, owner):
        signup("guest@example.com")
        signup("guestbook@example.com")
        _, headers = owner

        response = client.get("/api/v1/users/suggest", params={"q": "gue"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["emails"] == ["guest@example.com", "guestbook@example.com"]

        response = client.get("/api/v1/users/suggest", params={"q": "gu"}, headers=headers)
        assert response.json()["emails"] == []

    def test_suggest_requires_session(self, client):
        response = client.get("/api/v1/users/suggest", params={"q": "gue"})
        assert response.status_code == 401


@pytest.mark.integration
class TestHealth:
    """Test the health endpoint and common headers."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"]["status"] == "connected"
        assert response.headers["X-API-Version"] == body["version"]
        assert "X-Request-ID" in response.headers


@pytest.mark.integration
@pytest.mark.rate_limit
class TestRateLimiting:
    """Test rate limiting on credential endpoints."""

    def test_register_rate_limit(self, client):
        """Registration allows 5 requests per minute per client."""
        for i in range(5):
            response = client.post(
                "/api/v1/auth/register",
                json={"email": f"user{i}@example.com", "password": "secret1"},
            )
            assert response.status_code == 201, f"Request {i+1} should succeed under 5/min limit"

        response = client.post(
            "/api/v1/auth/register",
            json={"email": "user5@example.com", "password": "secret1"},
        )
        assert response.status_code == 429
