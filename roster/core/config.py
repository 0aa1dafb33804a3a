# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, read once at import.
Pass keyword overrides to build an isolated instance (tests, seed script).
"""

import os

MIB = 1024 * 1024


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "member-api")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("PORT", "5000"))
    APP_ENV: str = os.getenv("APP_ENV", os.getenv("NODE_ENV", "production")).lower()

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./roster.db")
    POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "300"))

    UPLOADS_DIR: str = os.getenv("UPLOADS_DIR", "uploads")
    MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_UPLOAD_BYTES", str(2 * MIB)))

    CORS_ORIGINS: list[str] = os.getenv(
        "VITE_CLIENT_URL", "http://localhost:5173"
    ).split(",")
    CORS_MAX_AGE: int = int(os.getenv("CORS_MAX_AGE", "86400"))

    # Client application
    API_BASE_URL: str = os.getenv("VITE_API_URL", "http://localhost:5000/api")
    CLIENT_TIMEOUT: float = float(os.getenv("CLIENT_TIMEOUT", "10.0"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def __init__(self, **overrides):
        for key, value in overrides.items():
            if not hasattr(type(self), key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"


settings = Settings()
