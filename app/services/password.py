"""Password hashing."""

import bcrypt

from app.config import get_settings
from app.errors import HashingError, ValidationError

# bcrypt only consumes the first 72 bytes of input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted bcrypt hashing with a fixed cost factor."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password. Raises HashingError if bcrypt rejects the cost."""
        encoded = self._encode(password)
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(encoded, salt).decode("utf-8")
        except ValueError as e:
            raise HashingError(f"Password hashing failed: {e}") from e

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash."""
        encoded = self._encode(password)
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except ValueError as e:
            raise HashingError(f"Stored password hash is unusable: {e}") from e

    @staticmethod
    def _encode(password: str) -> bytes:
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return encoded


_password_hasher: PasswordHasher | None = None


def get_password_hasher() -> PasswordHasher:
    """Get singleton password hasher instance."""
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)
    return _password_hasher
