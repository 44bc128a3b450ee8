"""Authentication API endpoints.

Provides routes for:
- User registration and login
- Current user profile
"""

from uuid import UUID

from fastapi import APIRouter, status

from src.auth.dependencies import AuthServiceDep, CurrentUser, handle_auth_error
from src.auth.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from src.auth.service import (
    InvalidCredentialsError,
    UserExistsError,
    UserNotFoundError,
)


router = APIRouter(prefix="/v1/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    responses={
        409: {"description": "Email already exists"},
        422: {"description": "Validation error"},
    },
)
async def register(
    data: RegisterRequest,
    auth_service: AuthServiceDep,
) -> AuthResponse:
    """Register a student or instructor account and sign it in."""
    try:
        user = await auth_service.register(data)
    except UserExistsError as e:
        raise handle_auth_error(e) from e

    return AuthResponse(
        user=auth_service.to_response(user),
        access_token=auth_service.issue_token(user),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="User login",
    responses={401: {"description": "Invalid credentials"}},
)
async def login(
    data: LoginRequest,
    auth_service: AuthServiceDep,
) -> AuthResponse:
    try:
        user = await auth_service.authenticate(str(data.email), data.password)
    except InvalidCredentialsError as e:
        raise handle_auth_error(e) from e

    return AuthResponse(
        user=auth_service.to_response(user),
        access_token=auth_service.issue_token(user),
    )


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
)
async def get_me(
    user: CurrentUser,
    auth_service: AuthServiceDep,
) -> UserResponse:
    """Get current authenticated user profile.

    Returns full user data from storage (not just token claims).
    """
    try:
        db_user = await auth_service.get_user(UUID(str(user.id)))
    except UserNotFoundError as e:
        raise handle_auth_error(e) from e

    return auth_service.to_response(db_user)
