"""
Service interfaces (Protocols) for disk-uploads.

This module defines the contracts the uploads engine consumes:
- StorageDisk: a place to keep bytes (memory, local filesystem, object storage)
- UploadRepository: the caller's persistence adapter for upload records

These protocols enable dependency injection and easy mocking for testing.
"""

from __future__ import annotations

from typing import AsyncIterator, Awaitable, Protocol, TypeVar, Union, runtime_checkable

from disk_uploads.domain.models import FileData, UploadedFile, UploadMeta

UploadT = TypeVar("UploadT")

# Repository methods may be plain functions or coroutines.
MaybeAwaitable = Union[UploadT, Awaitable[UploadT]]


@runtime_checkable
class StorageDisk(Protocol):
    """
    Abstract storage interface for uploaded file bytes.

    All disks must implement these methods to be usable by the uploads engine.
    """

    def get_name(self) -> str:
        """Canonical name of the disk (may differ from the alias used to look it up)."""
        ...

    async def write(self, path: str, data: FileData) -> None:
        """
        Write content to a path, replacing anything already there.

        Args:
            path: Storage path on the disk.
            data: Bytes or an async iterable of byte chunks.
        """
        ...

    async def read(self, path: str) -> bytes:
        """Read the full content stored at a path."""
        ...

    async def create_read_stream(self, path: str) -> AsyncIterator[bytes]:
        """Open the content stored at a path as an async stream of chunks."""
        ...

    async def delete(self, path: str) -> None:
        """Delete the content stored at a path."""
        ...

    def get_url(self, path: str) -> str | None:
        """Public URL for a path, or None if the disk doesn't serve URLs."""
        ...

    async def get_temporary_url(
        self,
        path: str,
        expires_in: int = 3600,
        fallback: bool | None = None,
    ) -> str | None:
        """Expiring URL for a path, or None if the disk can't produce one."""
        ...


@runtime_checkable
class UploadRepository(Protocol[UploadT]):
    """
    Persistence adapter that reads, creates, updates and deletes uploads.

    Implementations typically persist to a database. Any method may return
    its result directly or as an awaitable.
    """

    def create(
        self, uploaded_file: UploadedFile, meta: UploadMeta | None = None
    ) -> MaybeAwaitable[UploadT]:
        """Create an upload from file info and optional meta."""
        ...

    def update(
        self,
        upload: UploadT,
        new_uploaded_file: UploadedFile,
        new_meta: UploadMeta | None = None,
    ) -> MaybeAwaitable[UploadT]:
        """Point an existing upload at a new file, optionally replacing its meta."""
        ...

    def delete(self, upload: UploadT) -> MaybeAwaitable[None]:
        """Delete an upload. Fails if it is unknown or already deleted."""
        ...

    def get_uploaded_file_info(self, upload: UploadT) -> MaybeAwaitable[UploadedFile]:
        """Where and how the upload's file is stored. Fails if unknown."""
        ...

    def get_meta(self, upload: UploadT) -> MaybeAwaitable[UploadMeta]:
        """Meta stored with the upload. Fails if unknown."""
        ...

