"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.rate_limit import limiter
from app.schemas.auth import (
    LoginRequest,
    MessageResponse,
    PasswordResetConfirmRequest,
    PasswordResetRequest,
    RegisterRequest,
    TokenResponse,
)
from app.schemas.user import UserResponse
from app.services.auth import get_auth_service

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])

RESET_REQUESTED_MESSAGE = "If the email exists, a password reset link has been sent"


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")
def register(request: Request, body: RegisterRequest, db: Session = Depends(get_db)) -> UserResponse:
    """Register a new user account."""
    user = get_auth_service().register(db, body.name, body.email, body.password)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
@limiter.limit("10/minute")
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    """Authenticate and receive a session token."""
    token = get_auth_service().login(db, body.email, body.password)
    return TokenResponse(token=token)


@router.post("/password-reset", response_model=MessageResponse)
@limiter.limit("3/minute")
def request_password_reset(
    request: Request, body: PasswordResetRequest, db: Session = Depends(get_db)
) -> MessageResponse:
    """Request a password reset. Responds identically whether or not the email is registered."""
    get_auth_service().request_password_reset(db, body.email)
    return MessageResponse(message=RESET_REQUESTED_MESSAGE)


@router.post("/password-reset/confirm", response_model=MessageResponse)
@limiter.limit("5/minute")
def confirm_password_reset(
    request: Request, body: PasswordResetConfirmRequest, db: Session = Depends(get_db)
) -> MessageResponse:
    """Set a new password using a reset token."""
    get_auth_service().confirm_password_reset(db, body.token, body.new_password)
    return MessageResponse(message="Password has been reset successfully")
