"""Authentication service layer.

Business logic for:
- User registration and login
- Access token issuing
- User queries
"""

from uuid import UUID

import structlog

from src.auth.models import User, normalize_email
from src.auth.repository import UserRepository
from src.auth.schemas import RegisterRequest, UserResponse
from src.auth.security import create_access_token, hash_password, verify_password


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class AuthError(Exception):
    """Base authentication error."""

    def __init__(self, message: str, code: str = "auth_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Invalid email or password."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, "invalid_credentials")


class UserExistsError(AuthError):
    """Email already registered."""

    def __init__(self, message: str = "User already exists"):
        super().__init__(message, "user_exists")


class UserNotFoundError(AuthError):
    """User not found."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, "user_not_found")


# ==============================================================================
# Auth Service
# ==============================================================================


class AuthService:
    """Authentication service for registration, login and token operations."""

    def __init__(self, users: UserRepository):
        self.users = users

    async def register(self, data: RegisterRequest) -> User:
        """Create a new account.

        Raises:
            UserExistsError: If the email is already registered
        """
        email = normalize_email(str(data.email))
        if await self.users.get_by_email(email):
            raise UserExistsError

        user = User(
            email=email,
            name=data.name,
            password_hash=hash_password(data.password),
            role=data.role.value,
        )
        if not await self.users.create(user):
            # Lost a concurrent registration race for the same email
            raise UserExistsError

        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Check credentials and return the user.

        Unknown email and wrong password produce the same error.
        """
        user = await self.users.get_by_email(email)
        if not user:
            logger.info("login_failed", reason="unknown_email")
            raise InvalidCredentialsError

        valid, new_hash = verify_password(password, user.password_hash)
        if not valid:
            logger.info("login_failed", reason="bad_password", user_id=str(user.id))
            raise InvalidCredentialsError

        if new_hash:
            await self.users.update_password_hash(user.id, new_hash)
            user.password_hash = new_hash

        logger.info("user_logged_in", user_id=str(user.id))
        return user

    async def get_user(self, user_id: UUID) -> User:
        user = await self.users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError
        return user

    def issue_token(self, user: User) -> str:
        return create_access_token(user.id, user.email, user.role)

    def to_response(self, user: User) -> UserResponse:
        return UserResponse.from_user(user)
