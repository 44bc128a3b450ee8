"""Pydantic schemas for authentication.

Request and response models for:
- User registration and login
- Token responses
- User profile
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.auth.models import User
from src.auth.permissions import UserRole
from src.auth.validators import normalize_name, validate_name, validate_password


# ==============================================================================
# Request Schemas
# ==============================================================================


class RegisterRequest(BaseModel):
    """User registration request."""

    name: str = Field(..., max_length=100, description="Display name")
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., description="Password")
    role: UserRole = Field(..., description="student or instructor")

    @field_validator("name")
    @classmethod
    def validate_name_format(cls, v: str) -> str:
        result = validate_name(v)
        if not result.valid:
            raise ValueError(result.message or "Invalid name")
        return normalize_name(v)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        result = validate_password(v)
        if not result.valid:
            raise ValueError(result.message or "Invalid password")
        return v


class LoginRequest(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")


# ==============================================================================
# Response Schemas
# ==============================================================================


class UserResponse(BaseModel):
    """Public user data (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: UserRole
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        """Create response from entity."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=UserRole(user.role),
            created_at=user.created_at,
        )


class AuthResponse(BaseModel):
    """Registration/login response: the user plus a bearer token."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"
