"""Session token issuance and verification."""

from calendar import timegm
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from app.config import get_settings
from app.errors import TokenExpired, TokenInvalid


class JWTService:
    """Issues and verifies signed, time-limited bearer tokens carrying a user id.

    The verifier accepts exactly one algorithm, the one tokens are signed with,
    so tokens carrying ``alg: none`` or any other substituted algorithm fail.
    Expiry is measured with the injected ``clock`` both when issuing and
    when verifying.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 1440,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        if algorithm.lower() == "none":
            raise ValueError("JWT algorithm 'none' is not allowed")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.clock = clock

    def create_token(self, user_id: int) -> str:
        """Create a session token for the given user."""
        issued_at = self.clock()
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and validate a token. Raises TokenExpired or TokenInvalid."""
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") != self.algorithm:
                raise TokenInvalid()
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "require_exp": True},
            )
        except JWTError:
            raise TokenInvalid() from None

        expires_at = payload.get("exp")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            raise TokenInvalid()
        if timegm(self.clock().utctimetuple()) > expires_at:
            raise TokenExpired()
        return payload

    def verify_token(self, token: str) -> int:
        """Return the user id embedded in a valid token."""
        payload = self.decode_token(token)
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise TokenInvalid() from None


_jwt_service: JWTService | None = None


def get_jwt_service() -> JWTService:
    """Get singleton JWT service instance."""
    global _jwt_service
    if _jwt_service is None:
        settings = get_settings()
        _jwt_service = JWTService(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )
    return _jwt_service
