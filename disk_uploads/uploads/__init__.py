"""
Upload orchestration.

Exports:
    - Uploads: the service placing, copying, moving and deleting uploaded files
    - UploadsConfig: its read-only configuration
    - sanitize_filename / generate_path: the default naming policy
"""

from disk_uploads.uploads.naming import (
    generate_path,
    generate_path_for_instant,
    join_storage_path,
    sanitize_filename,
    trim_path,
)
from disk_uploads.uploads.service import Uploads, UploadsConfig

__all__ = [
    "Uploads",
    "UploadsConfig",
    "generate_path",
    "generate_path_for_instant",
    "join_storage_path",
    "sanitize_filename",
    "trim_path",
]
