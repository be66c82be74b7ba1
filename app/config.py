"""Configuration settings for Voice Link."""

import os
import secrets
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./voice_link.db")

    # JWT
    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", "1440"))

    # Passwords
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))
    PASSWORD_RESET_EXPIRE_MINUTES: int = int(os.getenv("PASSWORD_RESET_EXPIRE_MINUTES", "60"))
    PASSWORD_RESET_URL: str = os.getenv("PASSWORD_RESET_URL", "http://localhost:8080/reset-password")

    # HTTP
    CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"

    # Application
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def __init__(self) -> None:
        self.secret_is_ephemeral = not self.JWT_SECRET_KEY
        if self.secret_is_ephemeral:
            self.JWT_SECRET_KEY = secrets.token_urlsafe(32)

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings."""
        errors = []
        if self.secret_is_ephemeral:
            errors.append("JWT_SECRET_KEY is not set - using auto-generated key (not persistent across restarts)")
        if self.JWT_ALGORITHM.lower() == "none":
            errors.append("JWT_ALGORITHM 'none' is not allowed - tokens will not verify")
        if self.BCRYPT_ROUNDS < 10 and self.APP_ENV == "production":
            errors.append(f"BCRYPT_ROUNDS={self.BCRYPT_ROUNDS} is too low for production")
        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
