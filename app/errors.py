"""Application error taxonomy.

Every error the core raises is an ``AppError`` carrying the HTTP status the
boundary layer should answer with. ``main.py`` installs a single handler that
renders them as ``{"error": message}``.
"""

from fastapi import status

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class AppError(Exception):
    """Base class for all application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed client input."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class EmailAlreadyExists(AppError):
    status_code = status.HTTP_409_CONFLICT
    message = "Email already exists"


class InvalidCredentials(AppError):
    """Raised for both unknown email and wrong password.

    Takes no message so both login failure paths are indistinguishable.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    message = INVALID_CREDENTIALS_MESSAGE

    def __init__(self) -> None:
        super().__init__()


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


class TokenInvalid(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid token"


class TokenExpired(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Token has expired"


class ResetTokenInvalid(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid or expired reset token"


class ResetTokenExpired(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Reset token has expired"


class HashingError(AppError):
    """Password hashing backend failure. Internal; never shown to clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Password hashing failed"
