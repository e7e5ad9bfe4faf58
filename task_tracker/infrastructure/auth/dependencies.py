"""
Authentication dependencies for FastAPI.
"""

from typing import Annotated, Any, Dict
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from task_tracker.infrastructure.auth.jwt_handler import JWTHandler
from task_tracker.domain.models.base import ValidationError


# Security scheme
security = HTTPBearer(auto_error=False)

# Global instance
jwt_handler = JWTHandler()


def get_jwt_handler() -> JWTHandler:
    """Dependency to get JWT handler."""
    return jwt_handler


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_payload(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)]
) -> Dict[str, Any]:
    """
    FastAPI dependency to get current user's full token payload.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    if credentials is None:
        raise _unauthorized("Authentication required")

    try:
        return jwt_handler.verify_token(credentials.credentials)
    except ValidationError as e:
        raise _unauthorized(str(e))


async def get_current_user_id(
    payload: Annotated[Dict[str, Any], Depends(get_current_user_payload)]
) -> str:
    """
    FastAPI dependency to get current authenticated user ID.

    Returns:
        User ID string from the sub claim
    """
    return str(payload["sub"])
