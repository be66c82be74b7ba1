"""Pytest configuration and fixtures."""

import os

# Settings are read at import time; pin them before anything imports app.config
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.models.user import User  # noqa: E402
from app.services.auth import AuthService, get_auth_service  # noqa: E402
from app.services.jwt import JWTService, get_jwt_service  # noqa: E402
from app.services.password import PasswordHasher  # noqa: E402
from app.services.password_reset import PasswordResetService  # noqa: E402

TEST_SECRET = "test-secret-key"


class RecordingNotifier:
    """Reset notifier that keeps what it was asked to send."""

    def __init__(self) -> None:
        self.sent: list[tuple[int, str]] = []

    def send_reset(self, user: User, token: str) -> None:
        self.sent.append((user.id, token))


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="client")
def client_fixture(db_session: Session):
    """Create a test client with overridden DB dependency and disabled rate limiting."""
    from app.rate_limit import limiter
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture(name="hasher")
def hasher_fixture() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture(name="jwt_service")
def jwt_service_fixture() -> JWTService:
    return JWTService(secret_key=TEST_SECRET)


@pytest.fixture(name="notifier")
def notifier_fixture() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture(name="reset_service")
def reset_service_fixture(hasher: PasswordHasher, notifier: RecordingNotifier) -> PasswordResetService:
    return PasswordResetService(hasher=hasher, notifier=notifier, expire_minutes=60)


@pytest.fixture(name="auth_service")
def auth_service_fixture(
    hasher: PasswordHasher, jwt_service: JWTService, reset_service: PasswordResetService
) -> AuthService:
    return AuthService(hasher=hasher, jwt_service=jwt_service, reset_service=reset_service)


@pytest.fixture(name="test_user")
def test_user_fixture(db_session: Session):
    """Create a test user through the application service and return its data and token."""
    user = get_auth_service().register(db_session, "Test User", "test@example.com", "password123")
    token = get_jwt_service().create_token(user.id)

    return {
        "user_id": user.id,
        "name": user.name,
        "email": user.email,
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }
