"""Domain layer: models, protocols and exceptions shared across disk-uploads."""

from disk_uploads.domain.exceptions import (
    DiskNotFoundError,
    InvalidConfigError,
    PathCollisionError,
    UploadNotFoundError,
)
from disk_uploads.domain.interfaces import StorageDisk, UploadRepository
from disk_uploads.domain.models import FileData, TransferStatus, UploadedFile, UploadMeta

__all__ = [
    "DiskNotFoundError",
    "FileData",
    "InvalidConfigError",
    "PathCollisionError",
    "StorageDisk",
    "TransferStatus",
    "UploadedFile",
    "UploadMeta",
    "UploadNotFoundError",
    "UploadRepository",
]
