"""
In-memory disk.

Keeps file contents in a dict. Useful for tests and for processes that
don't need files to outlive them.
"""

from __future__ import annotations

from typing import AsyncIterator

from loguru import logger

from disk_uploads.disks.base import BaseDisk
from disk_uploads.disks.streams import as_bytes, iter_chunks
from disk_uploads.domain.models import FileData


class MemoryDisk(BaseDisk):
    """
    Dict-backed disk.

    Usage:
        disk = MemoryDisk("memory")
        await disk.write("/a/b.txt", b"hello")
        content = await disk.read("/a/b.txt")
    """

    def __init__(self, name: str, config=None):
        super().__init__(name, config)
        self._files: dict[str, bytes] = {}

    def _get(self, path: str) -> bytes:
        try:
            return self._files[path]
        except KeyError:
            raise FileNotFoundError(f"File not found on disk '{self.get_name()}': {path}") from None

    async def write(self, path: str, data: FileData) -> None:
        self._files[path] = await as_bytes(data)
        logger.debug(f"Wrote {len(self._files[path])} bytes to {self.get_name()}:{path}")

    async def read(self, path: str) -> bytes:
        return self._get(path)

    async def create_read_stream(self, path: str) -> AsyncIterator[bytes]:
        return iter_chunks(self._get(path))

    async def delete(self, path: str) -> None:
        self._get(path)
        del self._files[path]
        logger.debug(f"Deleted {self.get_name()}:{path}")

    def exists(self, path: str) -> bool:
        return path in self._files
