"""Tests for user persistence."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy.orm import Session

from app.errors import EmailAlreadyExists
from app.models.user import User
from app.repositories.user import UserRepository


def _user(email: str = "repo@example.com") -> User:
    return User(name="Repo User", email=email, password_hash="$2b$04$notarealhash")


class TestUserRepository:
    def test_create_and_find(self, db_session: Session):
        repo = UserRepository(db_session)
        user = repo.create(_user())

        assert repo.find_by_id(user.id) is user
        assert repo.find_by_email("repo@example.com").id == user.id

    def test_find_missing(self, db_session: Session):
        repo = UserRepository(db_session)
        assert repo.find_by_id(123) is None
        assert repo.find_by_email("missing@example.com") is None
        assert repo.find_by_reset_token("missing") is None

    def test_create_duplicate_email_conflict(self, db_session: Session):
        """A unique violation that slips past the pre-check surfaces as EmailAlreadyExists."""
        repo = UserRepository(db_session)
        repo.create(_user())

        with pytest.raises(EmailAlreadyExists):
            repo.create(_user())

        # Session is usable after the rollback
        assert db_session.query(User).count() == 1

    def test_update_to_duplicate_email_conflict(self, db_session: Session):
        repo = UserRepository(db_session)
        repo.create(_user("first@example.com"))
        second = repo.create(_user("second@example.com"))

        second.email = "first@example.com"
        with pytest.raises(EmailAlreadyExists):
            repo.update(second)

        assert repo.find_by_email("second@example.com") is not None

    def test_find_by_reset_token(self, db_session: Session):
        repo = UserRepository(db_session)
        user = repo.create(_user())
        user.password_reset_token = "abc123"
        user.password_reset_expires_at = datetime.utcnow() + timedelta(hours=1)
        repo.update(user)

        assert repo.find_by_reset_token("abc123").id == user.id
        assert repo.find_by_reset_token("") is None

    def test_update_bumps_updated_at(self, db_session: Session):
        repo = UserRepository(db_session)
        user = repo.create(_user())
        first = user.updated_at

        user.name = "Renamed"
        repo.update(user)

        assert user.updated_at >= first
        assert repo.find_by_id(user.id).name == "Renamed"

    def test_delete(self, db_session: Session):
        repo = UserRepository(db_session)
        user = repo.create(_user())
        user_id = user.id
        repo.delete(user)
        assert repo.find_by_id(user_id) is None

    def test_find_by_id_beyond_integer_range(self, db_session: Session):
        repo = UserRepository(db_session)
        repo.create(_user())
        assert repo.find_by_id(10**30) is None
        # Session still usable
        assert repo.find_by_email("repo@example.com") is not None
