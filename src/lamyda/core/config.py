from functools import lru_cache
from urllib.parse import urlparse

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Lamyda Process Documentation"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Logging
    log_level: str = "INFO"  # ignored when debug is set
    log_user_ids: bool = True  # Bind acting user/company ids into log context

    # Database
    database_url: str
    database_migrations_url: str | None = None
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_pool_recycle: int = 1800  # seconds
    database_application_name: str = "lamyda"

    # Health / shutdown
    health_check_timeout: float = 2.0
    shutdown_grace_period: int = 30

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Hosted backend (object storage)
    supabase_url: str
    supabase_service_role_key: str
    storage_bucket: str = "process-files"
    storage_timeout_seconds: float = 30.0

    # Asset promotion
    inline_image_folder: str = "process-images"
    inline_image_max_bytes: int = 5 * 1024 * 1024
    default_document_extension: str = "file"
    default_video_extension: str = "mp4"

    @field_validator("supabase_url")
    @classmethod
    def validate_supabase_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError(f"SUPABASE_URL must be an http(s) URL, got '{v}'")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"LOG_LEVEL must be a standard level name, got '{v}'")
        return level

    @field_validator("inline_image_max_bytes")
    @classmethod
    def validate_inline_image_max_bytes(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("INLINE_IMAGE_MAX_BYTES must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
