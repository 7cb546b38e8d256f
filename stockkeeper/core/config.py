"""Application configuration.

Environment variables override all defaults.
JWT_SECRET must be set in production - startup fails fast without it.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load .env for local development; real environment variables win
_PROJECT_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=_PROJECT_DIR / ".env", override=False)


_DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000,"
    "https://inventory123321.netlify.app,"
    "http://localhost:3001,"
    "http://127.0.0.1:3000"
)


def _normalize_database_url(url: str) -> str:
    # Hosted Postgres providers hand out postgres:// which SQLAlchemy rejects
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


class Settings:
    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "5000"))
    SHUTDOWN_TIMEOUT: int = int(os.getenv("SHUTDOWN_TIMEOUT", "10"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Database Configuration
    DATABASE_URL: str = _normalize_database_url(
        os.getenv("DATABASE_URL") or os.getenv("URL") or "sqlite:///./stockkeeper.db"
    )
    DATABASE_SSLMODE: str = os.getenv("DATABASE_SSLMODE", "")
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "5"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "10"))
    DB_POOL_TIMEOUT: int = int(os.getenv("DB_POOL_TIMEOUT", "30"))
    DB_POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "3600"))

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # JWT Security - CRITICAL
    SECRET_KEY: str = os.getenv("JWT_SECRET") or os.getenv("SECRET_KEY")
    if not SECRET_KEY:
        # Generate with: python -c "import secrets; print(secrets.token_urlsafe(32))"
        if ENVIRONMENT == "production":
            raise ValueError(
                "JWT_SECRET must be set in production environment. "
                "Generate with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )
        import warnings
        warnings.warn(
            "JWT_SECRET not set in environment. Using development default. "
            "Set JWT_SECRET in .env to a strong random value.",
            RuntimeWarning
        )
        SECRET_KEY = "development-only-weak-default-change-in-production"

    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", "24"))

    # Password hashing
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "10"))
    MIN_PASSWORD_LENGTH: int = 6

    # CORS (specific origins only, no wildcards)
    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", _DEFAULT_CORS_ORIGINS).split(",")
        if origin.strip()
    ]

    DEBUG: bool = ENVIRONMENT == "development"


settings = Settings()
