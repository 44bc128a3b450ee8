"""Tests for auth security functions."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from jose import JWTError, jwt

from src.auth.permissions import UserRole
from src.auth.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from src.config.settings import get_settings


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password_creates_hash(self) -> None:
        """Hash should be different from plain password."""
        password = "SecurePassword123"
        hashed = hash_password(password)
        assert hashed != password
        assert len(hashed) > 0

    def test_hash_password_unique_hashes(self) -> None:
        """Same password should produce different hashes (due to salt)."""
        password = "SecurePassword123"
        assert hash_password(password) != hash_password(password)

    def test_verify_password_correct(self) -> None:
        password = "SecurePassword123"
        hashed = hash_password(password)
        is_valid, new_hash = verify_password(password, hashed)
        assert is_valid is True
        assert new_hash is None  # No rehash needed for fresh hash

    def test_verify_password_incorrect(self) -> None:
        hashed = hash_password("SecurePassword123")
        is_valid, new_hash = verify_password("WrongPassword456", hashed)
        assert is_valid is False
        assert new_hash is None

    def test_verify_password_empty(self) -> None:
        hashed = hash_password("SecurePassword123")
        is_valid, _new_hash = verify_password("", hashed)
        assert is_valid is False

    def test_hash_is_argon2id(self) -> None:
        assert hash_password("SecurePassword123").startswith("$argon2id$")


class TestAccessToken:
    """Tests for access token creation and decoding."""

    def test_decode_access_token(self) -> None:
        """Should decode token and return payload."""
        user_id = uuid4()
        token = create_access_token(user_id, "test@example.com", UserRole.STUDENT)
        payload = decode_access_token(token)

        assert payload["sub"] == str(user_id)
        assert payload["email"] == "test@example.com"
        assert payload["role"] == "student"
        assert payload["type"] == "access"
        assert "exp" in payload
        assert "iat" in payload

    def test_role_may_be_given_as_string(self) -> None:
        token = create_access_token(uuid4(), "t@example.com", "instructor")
        assert decode_access_token(token)["role"] == "instructor"

    def test_decode_access_token_expired(self) -> None:
        token = create_access_token(
            uuid4(),
            "test@example.com",
            UserRole.STUDENT,
            expires_delta=timedelta(seconds=-1),
        )

        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_decode_access_token_invalid(self) -> None:
        with pytest.raises(JWTError):
            decode_access_token("invalid.token.here")

    def test_decode_access_token_wrong_signature(self) -> None:
        payload = {
            "sub": str(uuid4()),
            "email": "test@example.com",
            "role": "student",
            "type": "access",
            "exp": datetime.now(UTC) + timedelta(minutes=5),
        }
        forged = jwt.encode(payload, "another-secret-key-of-enough-length!", "HS256")

        with pytest.raises(JWTError):
            decode_access_token(forged)

    def test_decode_access_token_wrong_type(self) -> None:
        """Should raise JWTError if token type is not 'access'."""
        settings = get_settings()
        payload = {
            "sub": str(uuid4()),
            "email": "test@example.com",
            "role": "student",
            "type": "refresh",
            "exp": datetime.now(UTC) + timedelta(minutes=5),
        }
        token = jwt.encode(
            payload, settings.auth_secret_key, algorithm=settings.auth_algorithm
        )

        with pytest.raises(JWTError, match="expected 'access'"):
            decode_access_token(token)

    def test_access_tokens_unique_different_users(self) -> None:
        token1 = create_access_token(uuid4(), "user1@example.com", UserRole.STUDENT)
        token2 = create_access_token(uuid4(), "user2@example.com", UserRole.STUDENT)
        assert token1 != token2
