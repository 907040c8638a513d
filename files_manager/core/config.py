# files_manager/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    folder_path: str = "/tmp/files_manager"
    database_url: str = "sqlite:///./files_manager.db"
    redis_url: str = "redis://localhost:6379/0"

    session_ttl_seconds: int = 24 * 60 * 60
    thumbnail_queue: str = "fileQueue"
    log_level: str = "INFO"

    # "local" writes under folder_path, "s3" uses folder_path as the key prefix
    blob_backend: str = "local"
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_region: str | None = None
    aws_s3_bucket_name: str | None = None

    # Tell pydantic-settings to load from .env at project root
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignore any extra stuff in .env
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
