"""Tests for registration, login and the current-user endpoint."""

import pytest
from argon2 import PasswordHasher
from fastapi.testclient import TestClient

from src.auth.models import User
from src.auth.schemas import RegisterRequest
from src.auth.service import AuthService, InvalidCredentialsError, UserExistsError


def _register(client: TestClient, **overrides: str):
    body = {
        "name": "Ana Souza",
        "email": "ana@example.com",
        "password": "password123",
        "role": "student",
    }
    body.update(overrides)
    return client.post("/v1/auth/register", json=body)


class TestRegister:
    """POST /v1/auth/register."""

    def test_register_returns_user_and_token(self, client: TestClient) -> None:
        response = _register(client, role="instructor")

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["email"] == "ana@example.com"
        assert data["user"]["role"] == "instructor"
        assert "password_hash" not in data["user"]
        assert data["access_token"]
        assert data["token_type"] == "bearer"

    def test_duplicate_email_conflicts(self, client: TestClient) -> None:
        assert _register(client).status_code == 201

        response = _register(client, email="ANA@example.com", name="Other Ana")

        assert response.status_code == 409
        assert response.json()["message"] == "User already exists"

    def test_unknown_role_rejected(self, client: TestClient) -> None:
        response = _register(client, role="admin")
        assert response.status_code == 422


class TestLogin:
    """POST /v1/auth/login."""

    def test_login_with_valid_credentials(self, client: TestClient) -> None:
        _register(client)

        response = client.post(
            "/v1/auth/login",
            json={"email": "Ana@Example.com", "password": "password123"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "ana@example.com"

    def test_wrong_password_and_unknown_email_look_alike(
        self, client: TestClient
    ) -> None:
        _register(client)

        wrong_password = client.post(
            "/v1/auth/login",
            json={"email": "ana@example.com", "password": "password999"},
        )
        unknown_email = client.post(
            "/v1/auth/login",
            json={"email": "nobody@example.com", "password": "password123"},
        )

        assert wrong_password.status_code == 401
        assert unknown_email.status_code == 401
        assert wrong_password.json()["message"] == unknown_email.json()["message"]


class TestMe:
    """GET /v1/auth/me."""

    def test_returns_stored_profile(self, client: TestClient) -> None:
        token = _register(client).json()["access_token"]

        response = client.get(
            "/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Ana Souza"

    def test_missing_token(self, client: TestClient) -> None:
        response = client.get("/v1/auth/me")
        assert response.status_code == 401
        assert response.json()["message"] == "Missing access token"

    def test_malformed_token(self, client: TestClient) -> None:
        response = client.get(
            "/v1/auth/me", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"

    def test_token_of_deleted_user(
        self, client: TestClient, student_headers: dict[str, str]
    ) -> None:
        """A valid token whose user is not stored yields 404."""
        response = client.get("/v1/auth/me", headers=student_headers)
        assert response.status_code == 404


class TestAuthService:
    """AuthService against the in-memory user repository."""

    @pytest.mark.asyncio
    async def test_register_normalizes_email(self, repositories) -> None:
        service = AuthService(repositories.users)
        user = await service.register(
            RegisterRequest(
                name="Bob",
                email="Bob@Example.com",
                password="password123",
                role="student",
            )
        )
        assert user.email == "bob@example.com"
        assert user.password_hash.startswith("$argon2id$")

    @pytest.mark.asyncio
    async def test_register_race_lost(self, repositories) -> None:
        """A concurrent insert of the same email surfaces as a conflict."""
        service = AuthService(repositories.users)
        data = RegisterRequest(
            name="Bob", email="bob@example.com", password="password123", role="student"
        )

        async def never_found(email: str) -> None:
            return None

        repositories.users.get_by_email = never_found
        await service.register(data)

        with pytest.raises(UserExistsError):
            await service.register(data)

    @pytest.mark.asyncio
    async def test_unknown_email(self, repositories) -> None:
        service = AuthService(repositories.users)
        with pytest.raises(InvalidCredentialsError):
            await service.authenticate("ghost@example.com", "password123")

    @pytest.mark.asyncio
    async def test_outdated_hash_is_replaced(self, repositories) -> None:
        weak_hash = PasswordHasher(time_cost=1, memory_cost=8192).hash("password123")
        user = User(email="old@example.com", name="Old", password_hash=weak_hash)
        await repositories.users.create(user)

        service = AuthService(repositories.users)
        await service.authenticate("old@example.com", "password123")

        stored = await repositories.users.get_by_id(user.id)
        assert stored.password_hash != weak_hash
        assert stored.password_hash.startswith("$argon2id$")
