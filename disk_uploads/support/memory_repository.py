"""
MemoryRepository: an UploadRepository keeping records in a dict.

Mimics an auto-increment table. Intended for tests, prototyping, and as a
reference for writing database-backed repositories.
"""

from __future__ import annotations

from loguru import logger
from pydantic import BaseModel, Field

from disk_uploads.domain.exceptions import UploadNotFoundError
from disk_uploads.domain.models import UploadedFile, UploadMeta


class MemoryRepositoryRecord(BaseModel):
    """A stored upload."""

    id: int = Field(..., description="Auto-increment identifier starting at 1")
    file: UploadedFile = Field(..., description="Where the upload's file lives")
    meta: UploadMeta = Field(default_factory=dict, description="Meta stored with the upload")


class MemoryRepository:
    """
    In-memory repository using integer identifiers.

    Usage:
        repository = MemoryRepository()
        uploads = Uploads(UploadsConfig(disks=disks, repository=repository))
    """

    def __init__(self):
        self._database: dict[int, MemoryRepositoryRecord] = {}
        self._counter = 0

    def _next_id(self) -> int:
        self._counter += 1
        return self._counter

    def _resolve(self, upload: int) -> MemoryRepositoryRecord:
        """Resolve an identifier to its current record."""
        if not upload:
            raise UploadNotFoundError(upload, message_debug="Bad identifier")
        record = self._database.get(upload)
        if record is None:
            raise UploadNotFoundError(upload)
        return record

    async def create(self, uploaded_file: UploadedFile, meta: UploadMeta | None = None) -> int:
        record = MemoryRepositoryRecord(id=self._next_id(), file=uploaded_file, meta=meta or {})
        self._database[record.id] = record
        return record.id

    async def update(
        self,
        upload: int,
        new_uploaded_file: UploadedFile,
        new_meta: UploadMeta | None = None,
    ) -> int:
        """Point an upload at a new file. Keeps the existing meta when new_meta is None."""
        existing = self._resolve(upload)
        updated = existing.model_copy(
            update={
                "file": new_uploaded_file,
                "meta": new_meta if new_meta is not None else existing.meta,
            }
        )
        self._database[existing.id] = updated
        return updated.id

    async def delete(self, upload: int) -> None:
        record = self._resolve(upload)
        del self._database[record.id]

    async def get_uploaded_file_info(self, upload: int) -> UploadedFile:
        return self._resolve(upload).file

    async def get_meta(self, upload: int) -> UploadMeta:
        return self._resolve(upload).meta

    async def find(self, upload: int) -> MemoryRepositoryRecord:
        """Get the full record for an upload."""
        return self._resolve(upload)

    def __len__(self) -> int:
        return len(self._database)

    def log(self, upload: int | None = None) -> None:
        """Log the repository contents as a table, optionally for a single upload."""
        if upload is not None:
            records = [r for r in [self._database.get(upload)] if r is not None]
        else:
            records = list(self._database.values())

        logger.info(f"{'id':>4} | {'disk':<16} | {'uploaded_as':<32} | path | meta")
        for record in records:
            logger.info(
                f"{record.id:>4} | {record.file.disk:<16} | {record.file.uploaded_as:<32} | "
                f"{record.file.path} | {record.meta}"
            )
