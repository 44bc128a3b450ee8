"""FastAPI dependencies for authentication.

Provides dependency injection for:
- Auth service lookup on app state
- Current user extraction from JWT
- Role-based access control
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError

from src.auth.permissions import UserRole, parse_role
from src.auth.schemas import UserResponse
from src.auth.security import decode_access_token
from src.auth.service import AuthError, AuthService
from src.core.context import set_user_id


async def get_auth_service(request: Request) -> AuthService:
    """Get auth service from app state."""
    app_state = request.app.state
    if not getattr(app_state, "auth_service", None):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Auth service not available",
        )
    return app_state.auth_service


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def handle_auth_error(error: AuthError) -> HTTPException:
    """Convert AuthError to HTTPException."""
    status_map = {
        "invalid_credentials": status.HTTP_401_UNAUTHORIZED,
        "user_not_found": status.HTTP_404_NOT_FOUND,
        "user_exists": status.HTTP_409_CONFLICT,
    }

    return HTTPException(
        status_code=status_map.get(error.code, status.HTTP_400_BAD_REQUEST),
        detail=error.message,
    )


def get_token_from_header(request: Request) -> str | None:
    """Extract Bearer token from Authorization header.

    Returns:
        Token string or None if not present
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    expected_parts = 2
    parts = auth_header.split()
    if len(parts) != expected_parts or parts[0].lower() != "bearer":
        return None

    return parts[1]


async def get_current_user(
    token: Annotated[str | None, Depends(get_token_from_header)],
) -> UserResponse:
    """Get current authenticated user from JWT token.

    The user is rebuilt from token claims only; ``name`` is not carried in
    the token and is left empty.

    Raises:
        HTTPException(401): If token is missing, invalid, or expired
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing access token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(token)
        role = parse_role(payload["role"])
    except (JWTError, KeyError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    user_id = payload["sub"]
    set_user_id(user_id)

    return UserResponse(
        id=user_id,
        name="",
        email=payload["email"],
        role=role,
    )


def require_role(*allowed_roles: UserRole):
    """Create dependency requiring specific role(s).

    Example:
        @router.post("/courses")
        async def create_course(
            user: Annotated[UserResponse, Depends(require_role(UserRole.INSTRUCTOR))]
        ):
            ...
    """

    async def role_checker(
        user: Annotated[UserResponse, Depends(get_current_user)],
    ) -> UserResponse:
        if user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )

        return user

    return role_checker


# ==============================================================================
# Type Aliases for Cleaner Code
# ==============================================================================

CurrentUser = Annotated[UserResponse, Depends(get_current_user)]
StudentUser = Annotated[UserResponse, Depends(require_role(UserRole.STUDENT))]
InstructorUser = Annotated[UserResponse, Depends(require_role(UserRole.INSTRUCTOR))]
