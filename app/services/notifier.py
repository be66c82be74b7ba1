"""Password reset notification delivery."""

import logging
from typing import Protocol
from urllib.parse import urlencode

from app.config import get_settings
from app.models.user import User

logger = logging.getLogger("voice_link")


class ResetNotifier(Protocol):
    """Delivers a freshly issued reset token to the account owner."""

    def send_reset(self, user: User, token: str) -> None: ...


class LoggingResetNotifier:
    """Writes the reset link to the server log instead of sending email."""

    def __init__(self, reset_url: str) -> None:
        self.reset_url = reset_url

    def build_link(self, token: str) -> str:
        return f"{self.reset_url}?{urlencode({'token': token})}"

    def send_reset(self, user: User, token: str) -> None:
        logger.info("PASSWORD RESET for user %s: %s", user.id, self.build_link(token))


_notifier: ResetNotifier | None = None


def get_reset_notifier() -> ResetNotifier:
    """Get singleton reset notifier instance."""
    global _notifier
    if _notifier is None:
        _notifier = LoggingResetNotifier(get_settings().PASSWORD_RESET_URL)
    return _notifier
