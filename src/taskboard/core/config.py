from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Taskboard API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    log_user_emails: bool = False
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_days: int = 7
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1
    allow_admin_registration: bool = False
    enable_password_reset: bool = True  # demonstration-only reset route

    # Storage
    database_url: str | None = None  # unset = volatile backing only
    storage_mode: Literal["auto", "volatile"] = "auto"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_connect_timeout: float = 5.0
    storage_probe_interval: float = 15.0

    # Uploads
    upload_dir: str = "uploads"
    avatar_max_bytes: int = 5 * 1024 * 1024
    attachment_max_bytes: int = 10 * 1024 * 1024

    # Realtime
    realtime_require_auth: bool = False

    # CORS
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcards, credentials are allowed on every origin."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @model_validator(mode="after")
    def require_database_in_production(self) -> "Settings":
        if self.app_env == "production" and not self.database_url:
            raise ValueError("DATABASE_URL is required when APP_ENV=production")
        if self.app_env == "production" and self.storage_mode == "volatile":
            raise ValueError("STORAGE_MODE=volatile is not allowed when APP_ENV=production")
        return self

    @property
    def persistent_enabled(self) -> bool:
        return self.storage_mode == "auto" and bool(self.database_url)


@lru_cache
def get_settings() -> Settings:
    return Settings()
