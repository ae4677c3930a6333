"""BuildHub Backend — Configuration via pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database (leave empty to run on the in-memory fallback store)
    DATABASE_URL: str = ""

    # Security
    SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = 10
    RESET_TOKEN_TTL_MINUTES: int = 60

    # Seeded admin account
    DEFAULT_ADMIN_EMAIL: str = "admin@example.com"
    DEFAULT_ADMIN_PASSWORD: str = "password"
    DEFAULT_ADMIN_NAME: str = "Admin User"

    # Frontend
    FRONTEND_URL: str = "http://localhost:5173"
    CORS_ORIGINS: list[str] = ["http://localhost:8080", "http://localhost:5173"]

    # Uploads
    UPLOAD_DIR: str = "./data/uploads"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # Rate limits (per client IP)
    RATE_LIMIT_ENABLED: bool = True
    API_RATE_LIMIT: str = "100/15 minutes"
    AUTH_RATE_LIMIT: str = "5/15 minutes"
    UPLOAD_RATE_LIMIT: str = "10/minute"

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def use_database(self) -> bool:
        return bool(self.DATABASE_URL.strip())


@lru_cache
def get_settings() -> Settings:
    return Settings()
