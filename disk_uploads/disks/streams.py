"""
Helpers for moving bytes between buffers and async chunk streams.
"""

from __future__ import annotations

from typing import AsyncIterable, AsyncIterator

from disk_uploads.domain.models import FileData

CHUNK_SIZE = 64 * 1024


async def iter_chunks(content: bytes, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield a buffer as a stream of chunks."""
    for offset in range(0, len(content), chunk_size):
        yield content[offset : offset + chunk_size]


async def collect(stream: AsyncIterable[bytes]) -> bytes:
    """Read an entire stream into memory."""
    chunks = [chunk async for chunk in stream]
    return b"".join(chunks)


async def as_stream(data: FileData) -> AsyncIterator[bytes]:
    """Normalize bytes or a chunk stream into a chunk stream."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        async for chunk in iter_chunks(bytes(data)):
            yield chunk
    else:
        async for chunk in data:
            yield chunk


async def as_bytes(data: FileData) -> bytes:
    """Normalize bytes or a chunk stream into a single buffer."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    return await collect(data)
