"""
Unit tests for authentication endpoints.

Tests:
- Token issue for valid credentials
- Registration
- Request validation
"""

from jobly.core.security import decode_token


class TestToken:
    """Test POST /auth/token"""

    def test_token_success(self, client, job_ids):
        response = client.post("/auth/token", json={"username": "u1", "password": "password1"})

        assert response.status_code == 200
        payload = decode_token(response.json()["token"])
        assert payload["sub"] == "u1"
        assert payload["is_admin"] is False

    def test_admin_token_carries_flag(self, client, job_ids):
        response = client.post("/auth/token", json={"username": "admin", "password": "password1"})

        assert decode_token(response.json()["token"])["is_admin"] is True

    def test_unknown_user(self, client, job_ids):
        response = client.post("/auth/token", json={"username": "no-such-user", "password": "password1"})

        assert response.status_code == 401

    def test_wrong_password(self, client, job_ids):
        response = client.post("/auth/token", json={"username": "u1", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid username/password"

    def test_missing_data(self, client):
        response = client.post("/auth/token", json={"username": "u1"})

        assert response.status_code == 422

    def test_invalid_data(self, client):
        response = client.post("/auth/token", json={"username": 42, "password": "above-is-a-number"})

        assert response.status_code == 422


class TestRegister:
    """Test POST /auth/register"""

    NEW_USER = {
        "username": "new",
        "firstName": "first",
        "lastName": "last",
        "password": "password",
        "email": "new@email.com",
    }

    def test_register_success(self, client, db_session):
        response = client.post("/auth/register", json=self.NEW_USER)

        assert response.status_code == 201
        payload = decode_token(response.json()["token"])
        assert payload["sub"] == "new"
        assert payload["is_admin"] is False

    def test_register_cannot_make_admin(self, client, db_session):
        response = client.post("/auth/register", json={**self.NEW_USER, "isAdmin": True})

        assert response.status_code == 422

    def test_register_duplicate(self, client, job_ids):
        response = client.post("/auth/register", json={**self.NEW_USER, "username": "u1"})

        assert response.status_code == 400

    def test_register_missing_fields(self, client):
        response = client.post("/auth/register", json={"username": "new"})

        assert response.status_code == 422

    def test_register_invalid_email(self, client):
        response = client.post("/auth/register", json={**self.NEW_USER, "email": "not-an-email"})

        assert response.status_code == 422
