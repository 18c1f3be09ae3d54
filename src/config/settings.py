"""
Application Settings.

Everything configurable comes from .env / environment variables.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # --- App ---
    env: str = "development"
    debug: bool = True
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "info"

    # --- Database ---
    database_url: str = "sqlite:///driver_docs.db"

    # --- Storage ---
    storage_backend: str = "local"          # "local" | "minio"
    upload_dir: str = "uploads"
    public_base_url: str = "http://localhost:8000"
    max_upload_bytes: int = 10 * 1024 * 1024

    minio_endpoint: str = "http://localhost:9000"
    minio_access_key: str = ""
    minio_secret_key: str = ""
    minio_bucket: str = "driver-documents"
    minio_region: str = "us-east-1"
    presign_expires_seconds: int = 3600

    # --- Admin ---
    admin_api_key: str = "driver-docs-admin"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    """Settings singleton."""
    return Settings()
