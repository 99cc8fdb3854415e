"""
Local temporary files for uploads that need random access on disk.
"""

from __future__ import annotations

import os
import tempfile
from contextlib import asynccontextmanager
from typing import AsyncIterable, AsyncIterator

import aiofiles
import aiofiles.os


@asynccontextmanager
async def temporary_path(
    suffix: str = "",
    directory: str | None = None,
    cleanup: bool = True,
) -> AsyncIterator[str]:
    """
    Create an empty temp file and yield its path.

    Args:
        suffix: Appended to the generated file name.
        directory: Where to create the file (system temp dir by default).
        cleanup: Remove the file when the block exits, normally or not.
            When False the caller owns the file.
    """
    fd, path = tempfile.mkstemp(suffix=suffix, dir=directory)
    os.close(fd)
    try:
        yield path
    finally:
        if cleanup and await aiofiles.os.path.exists(path):
            await aiofiles.os.remove(path)


async def write_stream_to_path(stream: AsyncIterable[bytes], path: str) -> int:
    """
    Write a chunk stream to a local file, returning the number of bytes written.
    """
    written = 0
    async with aiofiles.open(path, "wb") as f:
        async for chunk in stream:
            await f.write(chunk)
            written += len(chunk)
    return written
