"""
MinIO / S3-compatible object storage disk.

Stores each file as an object in a single bucket, keyed by its storage path
without the leading slash. The MinIO client is blocking, so every call is
pushed to a worker thread.
"""

from __future__ import annotations

import asyncio
import io
import tempfile
from datetime import timedelta
from typing import Any, AsyncIterator, Mapping

from loguru import logger
from minio import Minio
from minio.error import S3Error

from disk_uploads.disks.base import BaseDisk, DiskConfig
from disk_uploads.disks.streams import CHUNK_SIZE
from disk_uploads.domain.models import FileData
from disk_uploads.infrastructure.minio import create_minio_client, get_minio_client

# Streams larger than this are spooled to a real temp file before upload.
SPOOL_MAX_SIZE = 8 * 1024 * 1024

_MISSING_OBJECT_CODES = {"NoSuchKey", "NoSuchObject"}


class MinioDisk(BaseDisk):
    """
    Object storage disk backed by a MinIO bucket.

    Config keys (besides url / temporary_url_fallback):
        bucket: Bucket holding the uploads (default "uploads").
        endpoint, access_key, secret_key, secure: Dedicated connection.
            Without an endpoint the shared client from settings is used.

    Usage:
        disk = MinioDisk("s3", {"bucket": "uploads"})
        await disk.write("/2024/01/01/file.pdf", content)
    """

    def __init__(
        self,
        name: str,
        config: DiskConfig | Mapping[str, Any] | None = None,
        client: Minio | None = None,
    ):
        super().__init__(name, config)
        self.bucket = getattr(self.config, "bucket", None) or "uploads"
        self._client = client or self._build_client()
        self._bucket_checked = False

    def _build_client(self) -> Minio:
        endpoint = getattr(self.config, "endpoint", None)
        if not endpoint:
            return get_minio_client()
        return create_minio_client(
            endpoint=endpoint,
            access_key=getattr(self.config, "access_key", ""),
            secret_key=getattr(self.config, "secret_key", ""),
            secure=bool(getattr(self.config, "secure", False)),
        )

    async def ensure_bucket_exists(self) -> None:
        """Create the bucket if it doesn't exist. Checked once, before the first write."""
        if self._bucket_checked:
            return
        self._bucket_checked = True
        try:
            if not await asyncio.to_thread(self._client.bucket_exists, self.bucket):
                await asyncio.to_thread(self._client.make_bucket, self.bucket)
                logger.info(f"Created MinIO bucket '{self.bucket}'")
        except Exception as e:
            logger.warning(f"Could not ensure bucket '{self.bucket}' exists: {e}")

    @staticmethod
    def _object_name(path: str) -> str:
        return path.lstrip("/")

    def _not_found(self, path: str, error: S3Error) -> FileNotFoundError:
        return FileNotFoundError(f"File not found on disk '{self.get_name()}': {path} ({error.code})")

    async def write(self, path: str, data: FileData) -> None:
        await self.ensure_bucket_exists()
        object_name = self._object_name(path)

        if isinstance(data, (bytes, bytearray, memoryview)):
            content = bytes(data)
            await asyncio.to_thread(
                self._client.put_object,
                bucket_name=self.bucket,
                object_name=object_name,
                data=io.BytesIO(content),
                length=len(content),
            )
            logger.debug(f"Uploaded {len(content)} bytes to {self.bucket}/{object_name}")
            return

        # put_object needs a readable object with a known length
        with tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_SIZE) as spool:
            async for chunk in data:
                spool.write(chunk)
            length = spool.tell()
            spool.seek(0)
            await asyncio.to_thread(
                self._client.put_object,
                bucket_name=self.bucket,
                object_name=object_name,
                data=spool,
                length=length,
            )
        logger.debug(f"Uploaded {length} bytes to {self.bucket}/{object_name}")

    async def _get_object(self, path: str):
        try:
            return await asyncio.to_thread(
                self._client.get_object, self.bucket, self._object_name(path)
            )
        except S3Error as e:
            if e.code in _MISSING_OBJECT_CODES:
                raise self._not_found(path, e) from e
            raise

    async def read(self, path: str) -> bytes:
        response = await self._get_object(path)
        try:
            return await asyncio.to_thread(response.read)
        finally:
            response.close()
            response.release_conn()

    async def create_read_stream(self, path: str) -> AsyncIterator[bytes]:
        response = await self._get_object(path)
        return self._stream(response)

    async def _stream(self, response) -> AsyncIterator[bytes]:
        try:
            while True:
                chunk = await asyncio.to_thread(response.read, CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk
        finally:
            response.close()
            response.release_conn()

    async def delete(self, path: str) -> None:
        object_name = self._object_name(path)
        # remove_object succeeds silently for missing keys
        try:
            await asyncio.to_thread(self._client.stat_object, self.bucket, object_name)
        except S3Error as e:
            if e.code in _MISSING_OBJECT_CODES:
                raise self._not_found(path, e) from e
            raise

        await asyncio.to_thread(self._client.remove_object, self.bucket, object_name)
        logger.debug(f"Deleted {self.bucket}/{object_name}")

    async def get_temporary_url(
        self,
        path: str,
        expires_in: int = 3600,
        fallback: bool | None = None,
    ) -> str | None:
        """Presigned GET URL valid for expires_in seconds."""
        return await asyncio.to_thread(
            self._client.presigned_get_object,
            self.bucket,
            self._object_name(path),
            expires=timedelta(seconds=expires_in),
        )
