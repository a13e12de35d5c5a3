"""
Configuration — Pydantic v2 Settings (env / .env)
=================================================

Purpose
-------
Centralized, strongly-typed application configuration using
`pydantic-settings` v2 (`BaseSettings` + `.env` loading).

Load Order & Behavior
---------------------
- Values are read from the environment; if not present, `.env` is used.
- Missing required fields raise a validation error at import time.
- `extra="ignore"`: unknown env vars are ignored.
- `SKIP_AUTH=true` together with `ENVIRONMENT=production` is rejected at load
  time, so the development identity bypass can never be active in production.

Usage
-----
from techmatch.database.config.config import settings

secret = settings.SECRET_KEY
"""

from pathlib import Path
from uuid import UUID

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables
    or a `.env` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ENVIRONMENT: str = Field("development", description="Deployment environment (`development`, `production`, `test`).")
    LOG_LEVEL: str = Field("INFO", description="Root log level.")

    SECRET_KEY: str = Field(..., description="Secret key used to sign session tokens.")
    ALGORITHM: str = Field("HS256", description="JWT signing algorithm.")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(7 * 24 * 60, description="Session token and cookie lifetime in minutes.")

    SKIP_AUTH: bool = Field(False, description="Inject a fixed development identity instead of verifying tokens.")
    DEV_USER_ID: UUID = Field(UUID("00000000-0000-0000-0000-000000000001"), description="Id of the injected development identity.")
    DEV_USER_EMAIL: str = Field("dev@local", description="Email of the injected development identity.")
    DEV_USER_NAME: str = Field("Dev", description="Display name of the injected development identity.")
    DEV_USER_ROLE: str = Field("admin", description="Role of the injected development identity.")

    ADMIN_ROLE_REQUIRED: bool = Field(False, description="Require role == 'admin' on admin-scoped endpoints instead of any authenticated caller.")
    ADMIN_EMAIL: str = Field("", description="Administrator account seeded at startup; empty disables seeding.")
    ADMIN_PASSWORD: str = Field("", description="Password of the seeded administrator account.")
    ADMIN_NAME: str = Field("Administrator", description="Display name of the seeded administrator account.")
    ALLOW_SELF_INTEREST: bool = Field(True, description="Allow a patent owner to express interest in their own listing.")

    DB_DRIVER_NAME: str = Field("postgresql+psycopg2", description="SQLAlchemy driver name (e.g., `postgresql+psycopg2`, `sqlite`).")
    DB_USERNAME: str | None = Field(None, description="Database username credential.")
    DB_PASSWORD: str | None = Field(None, description="Database password credential.")
    DB_HOST: str | None = Field(None, description="Hostname or IP address of the database server.")
    DB_PORT: int | None = Field(None, description="Database server port.")
    DB_DATABASE_NAME: str | None = Field(None, description="Name of the database (or file path / `:memory:` for SQLite).")

    FRONTEND_URL: str = Field("http://localhost:3000", description="Allowed CORS origin.")
    PUBLIC_DIR: Path = Field(Path("public"), description="Directory of the static pages served at `/`.")
    UPLOAD_DIR: Path = Field(Path("public/uploads"), description="Directory where uploaded patent images are stored.")
    ALLOWED_IMAGE_EXTENSIONS: str = Field("png,jpg,jpeg,gif,webp", description="Comma separated list of accepted image suffixes.")

    WP_BASE_URL: str = Field("", description="Base URL of the WordPress content source; empty disables it.")
    WP_COLUMN_CATEGORY: str = Field("技術コラム", description="WordPress category holding technical columns.")
    WP_INTERVIEW_CATEGORY: str = Field("研究者インタビュー", description="WordPress category holding researcher interviews.")
    WP_TIMEOUT_SECONDS: float = Field(10.0, description="Timeout for remote content requests.")
    CONTENT_CACHE_TTL_SECONDS: float = Field(600.0, description="Lifetime of the category / endpoint-shape cache.")

    @model_validator(mode="after")
    def _bypass_never_in_production(self):
        if self.SKIP_AUTH and self.is_production:
            raise ValueError("SKIP_AUTH cannot be enabled when ENVIRONMENT=production")
        return self

    @property
    def is_production(self) -> bool:
        """True when cookies must be `Secure` and the auth bypass is forbidden."""
        return self.ENVIRONMENT.lower() == "production"

    @property
    def allowed_image_extensions(self) -> set[str]:
        return {ext.strip().lower().lstrip(".") for ext in self.ALLOWED_IMAGE_EXTENSIONS.split(",") if ext.strip()}


# Singleton instance of Settings, ready to be imported across the app
settings = Settings()
"""Defines a Settings object that contains the contents of the environment / .env file"""
