"""Authentication and account service."""

import logging
import secrets

from sqlalchemy.orm import Session

from app.config import get_settings
from app.errors import EmailAlreadyExists, InvalidCredentials, NotFound
from app.models.user import User
from app.repositories.user import UserRepository
from app.services.jwt import JWTService, get_jwt_service
from app.services.notifier import get_reset_notifier
from app.services.password import PasswordHasher, get_password_hasher
from app.services.password_reset import PasswordResetService

logger = logging.getLogger("voice_link")


class AuthService:
    """Handles registration, login, profile management and password resets."""

    def __init__(
        self,
        hasher: PasswordHasher,
        jwt_service: JWTService,
        reset_service: PasswordResetService,
    ) -> None:
        self.hasher = hasher
        self.jwt_service = jwt_service
        self.reset_service = reset_service
        self._dummy_hash: str | None = None

    def register(self, db: Session, name: str, email: str, password: str) -> User:
        """Create a new account. Raises EmailAlreadyExists if the email is taken."""
        repo = UserRepository(db)
        if repo.find_by_email(email) is not None:
            raise EmailAlreadyExists()

        user = User(
            name=name,
            email=email,
            password_hash=self.hasher.hash(password),
        )
        user = repo.create(user)
        logger.info("Registered user %s", user.id)
        return user

    def login(self, db: Session, email: str, password: str) -> str:
        """Verify credentials and return a session token."""
        user = UserRepository(db).find_by_email(email)
        if user is None:
            # Pay the same bcrypt cost as a real check
            self.hasher.verify(password, self._get_dummy_hash())
            raise InvalidCredentials()

        if not self.hasher.verify(password, user.password_hash):
            logger.info("Failed login for user %s", user.id)
            raise InvalidCredentials()

        return self.jwt_service.create_token(user.id)

    def get_user(self, db: Session, user_id: int) -> User:
        user = UserRepository(db).find_by_id(user_id)
        if user is None:
            raise NotFound()
        return user

    def update_profile(self, db: Session, user_id: int, name: str, email: str) -> User:
        """Overwrite a user's name and email."""
        repo = UserRepository(db)
        user = repo.find_by_id(user_id)
        if user is None:
            raise NotFound()

        if email != user.email:
            holder = repo.find_by_email(email)
            if holder is not None and holder.id != user.id:
                raise EmailAlreadyExists()

        user.name = name
        user.email = email
        return repo.update(user)

    def delete_account(self, db: Session, user_id: int) -> None:
        repo = UserRepository(db)
        user = repo.find_by_id(user_id)
        if user is None:
            raise NotFound()
        repo.delete(user)
        logger.info("Deleted user %s", user_id)

    def request_password_reset(self, db: Session, email: str) -> None:
        self.reset_service.request_reset(db, email)

    def confirm_password_reset(self, db: Session, token: str, new_password: str) -> None:
        self.reset_service.confirm_reset(db, token, new_password)

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self.hasher.hash(secrets.token_hex(16))
        return self._dummy_hash


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        settings = get_settings()
        hasher = get_password_hasher()
        _auth_service = AuthService(
            hasher=hasher,
            jwt_service=get_jwt_service(),
            reset_service=PasswordResetService(
                hasher=hasher,
                notifier=get_reset_notifier(),
                expire_minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES,
            ),
        )
    return _auth_service
