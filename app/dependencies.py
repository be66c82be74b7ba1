"""Authentication dependencies for FastAPI routes."""

from dataclasses import dataclass

from fastapi import Header, HTTPException

from app.services.jwt import get_jwt_service


@dataclass
class CurrentUser:
    """Authenticated user context."""

    user_id: int


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def get_current_user(authorization: str | None = Header(default=None)) -> CurrentUser:
    """Resolve the caller from an ``Authorization: Bearer <token>`` header. Raises 401 otherwise.

    Missing header, malformed header and bad token each produce a different message.
    """
    if not authorization:
        raise _unauthorized("Authorization header is required")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise _unauthorized("Invalid authorization header format")

    # TokenInvalid / TokenExpired propagate to the AppError handler as 401s
    user_id = get_jwt_service().verify_token(parts[1])
    return CurrentUser(user_id=user_id)
