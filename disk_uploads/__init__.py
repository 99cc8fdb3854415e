"""
disk-uploads: accept uploaded files, store them on interchangeable disks,
and reference them through your own repository.
"""

from disk_uploads.disks import DiskManager, get_disk_manager
from disk_uploads.domain import (
    DiskNotFoundError,
    InvalidConfigError,
    PathCollisionError,
    StorageDisk,
    TransferStatus,
    UploadedFile,
    UploadMeta,
    UploadNotFoundError,
    UploadRepository,
)
from disk_uploads.support import MemoryRepository
from disk_uploads.uploads import Uploads, UploadsConfig

__all__ = [
    "DiskManager",
    "DiskNotFoundError",
    "InvalidConfigError",
    "MemoryRepository",
    "PathCollisionError",
    "StorageDisk",
    "TransferStatus",
    "UploadedFile",
    "UploadMeta",
    "UploadNotFoundError",
    "UploadRepository",
    "Uploads",
    "UploadsConfig",
    "get_disk_manager",
]
