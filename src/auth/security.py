"""Security utilities for authentication.

Provides:
- Password hashing with Argon2id
- JWT access token creation and validation
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError
from jose import JWTError, jwt

from src.auth.permissions import UserRole
from src.config.settings import get_settings


# OWASP recommended Argon2id parameters
_password_hasher = PasswordHasher(
    time_cost=2,
    memory_cost=19456,  # 19 MiB
    parallelism=1,
    hash_len=32,
    salt_len=16,
)


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    The returned hash embeds the algorithm parameters and salt.

    Example:
        >>> hash_password("my-secure-password").startswith("$argon2id$")
        True
    """
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> tuple[bool, str | None]:
    """Verify a password against its hash.

    Returns:
        Tuple of (is_valid, new_hash). ``new_hash`` is set when the stored
        hash was produced with outdated parameters and should be replaced.
    """
    try:
        _password_hasher.verify(password_hash, password)
    except VerifyMismatchError:
        return False, None

    if _password_hasher.check_needs_rehash(password_hash):
        return True, hash_password(password)
    return True, None


def create_access_token(
    user_id: UUID | str,
    email: str,
    role: UserRole | str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT access token.

    Payload: ``sub`` (user id), ``email``, ``role``, ``exp``, ``iat`` and
    ``type="access"``.
    """
    settings = get_settings()
    now = datetime.now(UTC)
    expire = now + (
        expires_delta or timedelta(minutes=settings.auth_access_token_expire_minutes)
    )

    payload: dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "role": role.value if isinstance(role, UserRole) else role,
        "exp": expire,
        "iat": now,
        "type": "access",
    }

    return jwt.encode(
        payload,
        settings.auth_secret_key,
        algorithm=settings.auth_algorithm,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and validate an access token.

    Validates signature, expiration and ``type == "access"``.

    Raises:
        JWTError: If token is invalid, expired, or of the wrong type
    """
    settings = get_settings()

    payload = jwt.decode(
        token,
        settings.auth_secret_key,
        algorithms=[settings.auth_algorithm],
    )

    if payload.get("type") != "access":
        msg = "Invalid token type: expected 'access'"
        raise JWTError(msg)

    return payload
