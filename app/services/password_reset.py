"""Password reset token lifecycle.

A user is either idle (no token) or has one pending reset: a 256-bit random
hex token plus its expiry, stored on the user row. Requesting a reset replaces
any pending token. Confirming consumes the token in the same commit that
stores the new password hash. An expired token is cleared as soon as it is
presented.
"""

import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.errors import ResetTokenExpired, ResetTokenInvalid
from app.repositories.user import UserRepository
from app.services.notifier import ResetNotifier
from app.services.password import PasswordHasher

logger = logging.getLogger("voice_link")

RESET_TOKEN_BYTES = 32


def generate_reset_token() -> str:
    """Return a fresh 256-bit token, hex-encoded."""
    return secrets.token_hex(RESET_TOKEN_BYTES)


class PasswordResetService:
    """Issues and redeems password reset tokens."""

    def __init__(
        self,
        hasher: PasswordHasher,
        notifier: ResetNotifier,
        expire_minutes: int = 60,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        self.hasher = hasher
        self.notifier = notifier
        self.expire_minutes = expire_minutes
        self.clock = clock

    def request_reset(self, db: Session, email: str) -> None:
        """Issue a reset token for the account with this email, if there is one.

        Returns the same way whether or not the account exists. Notifier
        failures are logged, not raised, for the same reason.
        """
        repo = UserRepository(db)
        user = repo.find_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return

        token = generate_reset_token()
        user.password_reset_token = token
        user.password_reset_expires_at = self.clock() + timedelta(minutes=self.expire_minutes)
        repo.update(user)

        try:
            self.notifier.send_reset(user, token)
        except Exception:
            logger.exception("Failed to deliver password reset for user %s", user.id)

    def confirm_reset(self, db: Session, token: str, new_password: str) -> None:
        """Set a new password using a pending reset token."""
        repo = UserRepository(db)
        user = repo.find_by_reset_token(token)
        if user is None:
            raise ResetTokenInvalid()

        expires_at = user.password_reset_expires_at
        if expires_at is None or self.clock() > expires_at:
            user.clear_password_reset()
            repo.update(user)
            logger.info("Expired password reset token presented for user %s", user.id)
            raise ResetTokenExpired()

        user.password_hash = self.hasher.hash(new_password)
        user.clear_password_reset()
        repo.update(user)
        logger.info("Password reset completed for user %s", user.id)
