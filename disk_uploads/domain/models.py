"""
Domain models for uploaded files.

These models describe where an uploaded file lives. They are handed to the
caller's repository for persistence and never stored by the engine itself.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, AsyncIterable, Union

from pydantic import BaseModel, ConfigDict, Field

# Free-form metadata persisted alongside an upload, e.g. {"context": "user_profile"}.
UploadMeta = dict[str, Any]

# Raw file content accepted by disks: a whole buffer or a stream of chunks.
FileData = Union[bytes, AsyncIterable[bytes]]


class UploadedFile(BaseModel):
    """
    A file stored on a disk that the uploads service knows about.

    Immutable: moving or renaming a file produces a new UploadedFile.
    """

    model_config = ConfigDict(frozen=True)

    disk: str = Field(..., description="Canonical name of the disk the file lives on")
    path: str = Field(..., description="Absolute storage path on the disk")
    uploaded_as: str = Field(..., description="Sanitized filename the file was uploaded with")


class TransferStatus(str, Enum):
    """Non-error outcomes of a transfer."""

    UNCHANGED = "unchanged"  # Same disk and path, nothing to move
