"""User profile API endpoints. All routes require a bearer token."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_current_user
from app.schemas.user import UpdateUserRequest, UserResponse
from app.services.auth import get_auth_service

router = APIRouter(
    prefix="/api/v1/users",
    tags=["Users"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Get the authenticated user's profile."""
    return UserResponse.model_validate(get_auth_service().get_user(db, user.user_id))


@router.put("/me", response_model=UserResponse)
def update_current_user_profile(
    body: UpdateUserRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Update the authenticated user's name and email."""
    updated = get_auth_service().update_profile(db, user.user_id, body.name, body.email)
    return UserResponse.model_validate(updated)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_current_user(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Response:
    """Delete the authenticated user's account."""
    get_auth_service().delete_account(db, user.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)) -> UserResponse:
    """Get a user by ID."""
    return UserResponse.model_validate(get_auth_service().get_user(db, user_id))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, body: UpdateUserRequest, db: Session = Depends(get_db)) -> UserResponse:
    """Update a user's name and email by ID."""
    updated = get_auth_service().update_profile(db, user_id, body.name, body.email)
    return UserResponse.model_validate(updated)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)) -> Response:
    """Delete a user by ID."""
    get_auth_service().delete_account(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
