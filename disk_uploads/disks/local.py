"""
Local filesystem disk.

This implementation stores files under a root directory on the local
filesystem, useful for development, single-host deployments and NAS mounts.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import AsyncIterator

import aiofiles
import aiofiles.os
from loguru import logger

from disk_uploads.disks.base import BaseDisk, DiskConfig
from disk_uploads.disks.streams import CHUNK_SIZE, as_stream
from disk_uploads.domain.models import FileData


class LocalDisk(BaseDisk):
    """
    File-system based disk.

    Storage paths are resolved relative to the root directory; a path that
    would escape the root is rejected.

    Usage:
        disk = LocalDisk("local", {"root": "/tmp/disk-uploads"})
        await disk.write("/2024/01/01/file.pdf", content)
        content = await disk.read("/2024/01/01/file.pdf")
    """

    def __init__(self, name: str, config: DiskConfig | dict | None = None):
        super().__init__(name, config)
        root = getattr(self.config, "root", None) or "/tmp/disk-uploads"
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        logger.info(f"LocalDisk '{name}' initialized at {self.root}")

    def _resolve(self, path: str) -> Path:
        target = Path(os.path.normpath(self.root / path.lstrip("/")))
        if target != self.root and self.root not in target.parents:
            raise ValueError(f"Path escapes the disk root: {path}")
        return target

    async def _existing(self, path: str) -> Path:
        target = self._resolve(path)
        if not await aiofiles.os.path.isfile(target):
            raise FileNotFoundError(f"File not found on disk '{self.get_name()}': {path}")
        return target

    async def write(self, path: str, data: FileData) -> None:
        target = self._resolve(path)
        await aiofiles.os.makedirs(target.parent, exist_ok=True)

        written = 0
        async with aiofiles.open(target, "wb") as f:
            async for chunk in as_stream(data):
                await f.write(chunk)
                written += len(chunk)

        logger.debug(f"Wrote {written} bytes to {self.get_name()}:{path}")

    async def read(self, path: str) -> bytes:
        target = await self._existing(path)
        async with aiofiles.open(target, "rb") as f:
            return await f.read()

    async def create_read_stream(self, path: str) -> AsyncIterator[bytes]:
        return self._stream(await self._existing(path))

    async def _stream(self, target: Path) -> AsyncIterator[bytes]:
        async with aiofiles.open(target, "rb") as f:
            while True:
                chunk = await f.read(CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk

    async def delete(self, path: str) -> None:
        target = await self._existing(path)
        await aiofiles.os.remove(target)
        logger.debug(f"Deleted {self.get_name()}:{path}")
