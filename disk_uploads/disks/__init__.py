"""
Storage disks for uploaded files.

This package provides:
- MemoryDisk: in-process storage for tests and prototyping
- LocalDisk: local filesystem storage
- MinioDisk: MinIO / S3-compatible object storage
- DiskManager: named disks and aliases, built from a config mapping
- get_disk_manager: process-wide manager built from settings
"""

from __future__ import annotations

from loguru import logger

from disk_uploads.config import settings

from .base import BaseDisk, DiskConfig
from .local import LocalDisk
from .manager import DiskDriver, DiskManager, DiskSpec
from .memory import MemoryDisk
from .minio import MinioDisk

_disk_manager: DiskManager | None = None


def get_disk_manager() -> DiskManager:
    """Factory function for the DiskManager singleton configured from settings."""
    global _disk_manager
    if _disk_manager is None:
        logger.info(f"Using '{settings.UPLOADS_DISK_DRIVER}' as the default disk")
        _disk_manager = DiskManager(settings.disk_config())
    return _disk_manager


__all__ = [
    "BaseDisk",
    "DiskConfig",
    "DiskDriver",
    "DiskManager",
    "DiskSpec",
    "LocalDisk",
    "MemoryDisk",
    "MinioDisk",
    "get_disk_manager",
]
