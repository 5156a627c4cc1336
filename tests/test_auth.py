"""
Tests for registration, login, logout and the session gate.
"""
from datetime import timedelta

from models.base_model import utcnow
from models.session import AuthSession

from conftest import register


class TestRegister:
    def test_register_returns_token_in_header(self, client):
        response = client.post(
            "/auth/register",
            json={"email": "Alice@X.com ", "password": "pw1", "firstName": "Alice", "lastName": "L"},
        )

        assert response.status_code == 200
        body = response.get_json()
        assert body["message"] == "Registered user: Alice L"
        assert response.headers["Authorization"].startswith("Bearer ")
        assert "token" not in body and "access_token" not in body

    def test_register_creates_profile(self, client):
        alice = register(client, "alice@x.com", "pw1", "Alice")

        response = client.get("/profiles/me", headers=alice.headers)

        assert response.status_code == 200
        assert response.get_json()["data"]["name"] == "Alice"
        assert response.get_json()["data"]["user_id"] == alice.id

    def test_duplicate_email_is_conflict(self, client):
        register(client, "alice@x.com")

        response = client.post("/auth/register", json={"email": "ALICE@x.com", "password": "other"})

        assert response.status_code == 409
        assert response.get_json()["error"] == "CONFLICT"

    def test_missing_fields(self, client):
        response = client.post("/auth/register", json={"email": "alice@x.com"})

        assert response.status_code == 400
        assert "password" in response.get_json()["details"]

    def test_blank_password_rejected(self, client):
        response = client.post("/auth/register", json={"email": "alice@x.com", "password": "   "})

        assert response.status_code == 400


class TestLogin:
    def test_login_success(self, client):
        register(client, "alice@x.com", "pw1", "Alice")

        response = client.post("/auth/login", json={"email": "alice@x.com", "password": "pw1"})

        assert response.status_code == 200
        assert response.get_json()["message"] == "Welcome back Alice!"
        token = response.headers["Authorization"].split(" ", 1)[1]
        assert client.get("/matches", headers={"Authorization": f"Bearer {token}"}).status_code == 200

    def test_bad_password(self, client):
        register(client, "alice@x.com", "pw1")

        response = client.post("/auth/login", json={"email": "alice@x.com", "password": "nope"})

        assert response.status_code == 401
        assert "Authorization" not in response.headers

    def test_unknown_email(self, client):
        response = client.post("/auth/login", json={"email": "ghost@x.com", "password": "pw"})

        assert response.status_code == 401

    def test_missing_fields(self, client):
        response = client.post("/auth/login", json={"email": "alice@x.com"})

        assert response.status_code == 400

    def test_each_login_is_a_separate_session(self, client, storage):
        register(client, "alice@x.com", "pw1")
        client.post("/auth/login", json={"email": "alice@x.com", "password": "pw1"})

        assert storage.count(AuthSession) == 2


class TestSessionGate:
    def test_public_routes_need_no_token(self, client):
        assert client.get("/health").status_code == 200
        assert client.get("/").status_code == 200

    def test_missing_header(self, client):
        response = client.get("/matches")

        assert response.status_code == 401
        assert response.get_json()["details"]["reason"] == "missing"

    def test_wrong_scheme(self, client, alice):
        response = client.get("/matches", headers={"Authorization": f"Token {alice.token}"})

        assert response.status_code == 401

    def test_garbage_token(self, client):
        response = client.get("/matches", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.get_json()["details"]["reason"] == "invalid"

    def test_gate_runs_before_validation(self, client):
        response = client.post("/swipes", json={})

        assert response.status_code == 401


class TestLogout:
    def test_logout_revokes_token(self, client, alice):
        response = client.get("/auth/logout", headers=alice.headers)
        assert response.status_code == 200

        again = client.get("/matches", headers=alice.headers)
        assert again.status_code == 401
        assert again.get_json()["details"]["reason"] == "revoked"

        # repeating logout with the same token never reaches the view
        assert client.get("/auth/logout", headers=alice.headers).status_code == 401

    def test_logout_leaves_other_sessions_alone(self, client, alice):
        login = client.post("/auth/login", json={"email": "alice@x.com", "password": "pw1"})
        other = {"Authorization": login.headers["Authorization"]}

        client.get("/auth/logout", headers=alice.headers)

        assert client.get("/matches", headers=other).status_code == 200

    def test_expired_session_rejected(self, client, storage, alice):
        db = storage.get_session()
        record = db.query(AuthSession).filter(AuthSession.user_id == alice.id).one()
        record.expires_at = utcnow() - timedelta(minutes=1)
        storage.save()

        response = client.get("/matches", headers=alice.headers)

        assert response.status_code == 401
        assert response.get_json()["details"]["reason"] == "expired"
