"""
Tests for registration, login and session endpoints
"""


def register_payload(**overrides):
    payload = {
        "name": "Maya",
        "email": "maya@example.com",
        "password": "secret123",
        "confirm_password": "secret123",
        "role": "user",
        "location": "Lisbon",
    }
    payload.update(overrides)
    return payload


class TestRegister:
    """Test account registration"""

    def test_register_creates_profile(self, client, db):
        """Registering signs up with auth and writes a users row with zero karma"""
        response = client.post("/api/v1/auth/register", json=register_payload())
        assert response.status_code == 201
        body = response.json()
        assert body["role"] == "user"
        assert body["access_token"]
        profile = db.rows("users")[0]
        assert profile["id"] == body["user_id"]
        assert profile["karma_points"] == 0
        assert profile["location"] == "Lisbon"

    def test_register_ngo(self, client):
        """NGO accounts keep their role"""
        response = client.post("/api/v1/auth/register", json=register_payload(role="ngo"))
        assert response.status_code == 201
        assert response.json()["role"] == "ngo"

    def test_mismatched_passwords_fail_before_backend(self, client, db):
        """Mismatched confirmation is rejected without calling Supabase"""
        response = client.post(
            "/api/v1/auth/register",
            json=register_payload(confirm_password="different1")
        )
        assert response.status_code == 422
        assert db.auth.sign_up_calls == 0
        assert db.rows("users") == []

    def test_short_name_rejected(self, client, db):
        response = client.post("/api/v1/auth/register", json=register_payload(name="M"))
        assert response.status_code == 422
        assert db.auth.sign_up_calls == 0

    def test_duplicate_email(self, client):
        """Registering the same email twice returns 400"""
        client.post("/api/v1/auth/register", json=register_payload())
        response = client.post("/api/v1/auth/register", json=register_payload())
        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists"


class TestLogin:
    """Test login"""

    def test_login_returns_token_and_profile(self, client):
        client.post("/api/v1/auth/register", json=register_payload())
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "maya@example.com", "password": "secret123"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["profile"]["name"] == "Maya"

    def test_unregistered_email(self, client):
        """Unknown email is an authentication failure"""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "secret123"}
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_wrong_password(self, client):
        client.post("/api/v1/auth/register", json=register_payload())
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "maya@example.com", "password": "wrongpass"}
        )
        assert response.status_code == 401

    def test_missing_profile(self, client, db):
        """Auth account without a users row"""
        db.auth.sign_up({"email": "ghost@example.com", "password": "secret123"})
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "ghost@example.com", "password": "secret123"}
        )
        assert response.status_code == 404


class TestSession:
    """Test session and me endpoints"""

    def test_anonymous_session(self, client):
        response = client.get("/api/v1/auth/session")
        assert response.status_code == 200
        assert response.json() == {"user": None, "is_authenticated": False}

    def test_authenticated_session(self, client, alice):
        response = client.get("/api/v1/auth/session", headers=alice["headers"])
        body = response.json()
        assert body["is_authenticated"] is True
        assert body["user"]["id"] == alice["id"]

    def test_invalid_token_session(self, client):
        response = client.get("/api/v1/auth/session", headers={"Authorization": "Bearer bogus"})
        assert response.json()["is_authenticated"] is False

    def test_me_lists_role_capabilities(self, client, ngo):
        response = client.get("/api/v1/auth/me", headers=ngo["headers"])
        assert response.status_code == 200
        capabilities = response.json()["capabilities"]
        assert "claims:create" in capabilities
        assert "drives:create" in capabilities

    def test_me_requires_token(self, client):
        response = client.get("/api/v1/auth/me")
        assert response.status_code in (401, 403)

    def test_logout(self, client, alice):
        response = client.post("/api/v1/auth/logout", headers=alice["headers"])
        assert response.status_code == 200
