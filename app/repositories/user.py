"""User persistence."""

import logging

from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Session

from app.errors import EmailAlreadyExists
from app.models.user import User

logger = logging.getLogger("voice_link")


class UserRepository:
    """Record-level CRUD for users over a SQLAlchemy session.

    Unique-constraint violations on write are rolled back and reported as
    ``EmailAlreadyExists``: email is the only user-controlled unique column.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, user: User) -> User:
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        return user

    def find_by_id(self, user_id: int) -> User | None:
        # Ids outside the column range cannot exist; drivers reject them on bind
        try:
            return self.db.get(User, user_id)
        except OverflowError:
            return None
        except DataError:
            self.db.rollback()
            return None

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def find_by_reset_token(self, token: str) -> User | None:
        if not token:
            return None
        return self.db.query(User).filter(User.password_reset_token == token).first()

    def update(self, user: User) -> User:
        self._commit()
        self.db.refresh(user)
        return user

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Unique constraint violation on user write: %s", e.orig)
            raise EmailAlreadyExists() from None
