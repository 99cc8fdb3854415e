"""
Unified configuration for disk-uploads.

This module provides a single Settings class holding every environment
variable the package reads: engine defaults, the local disk, and the MinIO
disk. Settings are only defaults; an explicit UploadsConfig always wins.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for .env file loading (allows running from any CWD)
PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    Unified settings for disk-uploads.

    Environment variables are loaded from .env file and can be overridden
    by actual environment variables.
    """

    LOG_LEVEL: str = "INFO"

    # Engine defaults
    UPLOADS_DEFAULT_DISK: str = "default"
    UPLOADS_PATH_PREFIX: str = ""
    UPLOADS_TEMP_DIR: str | None = None

    # Which configured disk the "default" alias points at (local, memory, minio)
    UPLOADS_DISK_DRIVER: str = "local"

    # Local filesystem disk
    LOCAL_STORAGE_ROOT: str = "/tmp/disk-uploads"
    LOCAL_STORAGE_URL: str | None = None

    # MinIO Configuration
    MINIO_ENDPOINT: str = "localhost:9000"
    MINIO_ACCESS_KEY: str = "minioadmin"
    MINIO_SECRET_KEY: str = "minioadmin"
    MINIO_BUCKET: str = "uploads"
    MINIO_SECURE: bool = False
    MINIO_PUBLIC_URL: str | None = None

    model_config = SettingsConfigDict(
        env_file=PROJECT_ROOT / ".env",
        extra="ignore"
    )

    def disk_config(self) -> dict[str, Any]:
        """Render the disk settings into a DiskManager configuration mapping."""
        return {
            "default": self.UPLOADS_DISK_DRIVER,
            "memory": {"driver": "memory"},
            "local": {
                "driver": "local",
                "config": {
                    "root": self.LOCAL_STORAGE_ROOT,
                    "url": self.LOCAL_STORAGE_URL,
                },
            },
            "minio": {
                "driver": "minio",
                "config": {
                    "bucket": self.MINIO_BUCKET,
                    "url": self.MINIO_PUBLIC_URL,
                },
            },
        }


# Global settings instance
settings = Settings()  # type: ignore
