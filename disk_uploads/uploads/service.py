"""
Uploads: the orchestration service for uploaded files.

Places uploaded content on a disk and records where it lives through the
caller's repository. Disks and repositories can't be updated atomically
together, so every operation orders its steps to keep the repository's
pointer valid: new bytes are written before old bytes are deleted, and
records are deleted before their files. Failures in between leave orphaned
bytes on a disk, never a record pointing at missing bytes.
"""

from __future__ import annotations

import inspect
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Generic, Mapping, Optional, Union

import aiofiles.os
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from disk_uploads.config import Settings
from disk_uploads.config import settings as default_settings
from disk_uploads.disks import DiskManager, get_disk_manager
from disk_uploads.domain.exceptions import InvalidConfigError, PathCollisionError
from disk_uploads.domain.interfaces import StorageDisk, UploadRepository, UploadT
from disk_uploads.domain.models import FileData, TransferStatus, UploadedFile, UploadMeta
from disk_uploads.uploads import naming
from disk_uploads.uploads.tempfiles import temporary_path, write_stream_to_path

TempFileCallback = Callable[[str], Union[None, Awaitable[None]]]

# Longest temp file suffix derived from the upload's filename.
TEMP_SUFFIX_MAX_LENGTH = 50


async def _resolve(value: Any) -> Any:
    """Await repository/callback results that are awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value


class UploadsConfig(BaseModel):
    """
    Configuration for the uploads service. Read-only once created.

    Attributes:
        disks: A DiskManager, or a config mapping to build one from.
        repository: The UploadRepository used to persist uploads.
        default_disk: Disk used when an operation doesn't name one.
        sanitize_filename: Override for the default filename sanitizer.
        generate_path: Override for the default path generator. Must never
            return the same path twice for the same name.
        path_prefix: Root segment prepended to every generated path. Stored
            in the repository with the path, so changing it only affects new
            uploads.
        temp_dir: Directory for local temp files (system default if None).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    disks: Any = None
    repository: Any = None
    default_disk: str = "default"
    sanitize_filename: Optional[Callable[[str], str]] = None
    generate_path: Optional[Callable[[str], str]] = None
    path_prefix: str = ""
    temp_dir: Optional[str] = None

    @classmethod
    def from_settings(
        cls,
        repository: Any,
        disks: Any = None,
        settings: Settings | None = None,
        **overrides: Any,
    ) -> "UploadsConfig":
        """
        Build a config from environment settings.

        Without explicit disks, the process-wide disk manager is used (or the
        disks described by `settings`, when given).
        """
        source = settings or default_settings
        if disks is None:
            disks = get_disk_manager() if settings is None else source.disk_config()

        values = {
            "disks": disks,
            "repository": repository,
            "default_disk": source.UPLOADS_DEFAULT_DISK,
            "path_prefix": source.UPLOADS_PATH_PREFIX,
            "temp_dir": source.UPLOADS_TEMP_DIR,
        }
        values.update(overrides)
        return cls(**values)


class Uploads(Generic[UploadT]):
    """
    A service for handling uploaded files.

    The upload identifier type (UploadT) is whatever the repository returns
    from `create`; the service only passes it back to the repository.

    Usage:
        uploads = Uploads(UploadsConfig(disks=disk_manager, repository=repo))
        upload = await uploads.upload(content, "avatar.png", {"context": "user_profile"})
        content = await uploads.read(upload)
    """

    def __init__(self, config: UploadsConfig | Mapping[str, Any]):
        if isinstance(config, Mapping):
            try:
                config = UploadsConfig(**config)
            except ValidationError as e:
                invalid = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
                raise InvalidConfigError(invalid, message_debug=str(e), cause=e) from e
        if not isinstance(config, UploadsConfig):
            raise InvalidConfigError(message_debug=f"Unsupported config type {type(config).__name__}")

        missing = []
        if not isinstance(config.disks, (DiskManager, Mapping)):
            missing.append("disks")
        if config.repository is None or not isinstance(config.repository, UploadRepository):
            missing.append("repository")
        if missing:
            raise InvalidConfigError(missing)

        self.config = config
        self.repository: UploadRepository[UploadT] = config.repository
        self.disks = (
            config.disks if isinstance(config.disks, DiskManager) else DiskManager(config.disks)
        )

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    def sanitize_filename(self, uploaded_as: str) -> str:
        """Sanitize a client provided filename before storing it on a disk."""
        if self.config.sanitize_filename:
            return self.config.sanitize_filename(uploaded_as)
        return naming.sanitize_filename(uploaded_as)

    def generate_path(self, sanitized_uploaded_as: str) -> str:
        """Generate a timestamped unique path based on the sanitized filename."""
        if self.config.generate_path:
            return self.config.generate_path(sanitized_uploaded_as)
        return naming.generate_path(sanitized_uploaded_as)

    def generate_storage_path(self, sanitized_uploaded_as: str) -> str:
        """Full storage path for a new upload: the configured prefix plus a generated path."""
        return naming.join_storage_path(
            self.config.path_prefix, self.generate_path(sanitized_uploaded_as)
        )

    def _disk_name(self, disk_name: str | None) -> str:
        return disk_name or self.config.default_disk

    def _get_disk(self, disk_name: str | None) -> StorageDisk:
        return self.disks.get_disk(self._disk_name(disk_name))

    async def _get_uploaded_file(self, upload: UploadT) -> UploadedFile:
        return await _resolve(self.repository.get_uploaded_file_info(upload))

    # ------------------------------------------------------------------
    # Disk-only operations
    # ------------------------------------------------------------------

    async def place(
        self,
        file_data: FileData,
        uploaded_as: str,
        disk_name: str | None = None,
    ) -> UploadedFile:
        """
        Put file data on a disk at a freshly generated path.

        Doesn't touch the repository; use `upload` for real uploads.

        Args:
            file_data: Bytes or an async stream of chunks.
            uploaded_as: Raw client-provided filename.
            disk_name: Target disk (default disk if None).

        Returns:
            Where the file now lives.
        """
        sanitized_uploaded_as = self.sanitize_filename(uploaded_as)
        path = self.generate_storage_path(sanitized_uploaded_as)

        disk = self._get_disk(disk_name)
        await disk.write(path, file_data)

        return UploadedFile(
            disk=disk.get_name() or self._disk_name(disk_name),
            path=path,
            uploaded_as=sanitized_uploaded_as,
        )

    async def copy(
        self,
        original_file: UploadedFile,
        new_disk_name: str | None = None,
        regenerate_path: bool = True,
    ) -> UploadedFile:
        """
        Copy a stored file to the default disk (or `new_disk_name`).

        Without path regeneration the original path is kept as-is, including
        whatever path prefix was configured when it was first stored.

        Raises:
            PathCollisionError: If the copy would land on its own source.
        """
        new_disk = self._get_disk(new_disk_name)
        original_disk = self.disks.get_disk(original_file.disk)

        new_file = original_file.model_copy(
            update={
                "disk": new_disk.get_name() or self._disk_name(new_disk_name),
                "path": (
                    self.generate_storage_path(original_file.uploaded_as)
                    if regenerate_path
                    else original_file.path
                ),
            }
        )

        if original_file.disk == new_file.disk and original_file.path == new_file.path:
            raise PathCollisionError(
                original_file.disk, original_file.path, new_file.path, "copy"
            )

        await new_disk.write(
            new_file.path, await original_disk.create_read_stream(original_file.path)
        )
        logger.debug(
            f"Copied {original_file.disk}:{original_file.path} -> {new_file.disk}:{new_file.path}"
        )
        return new_file

    # ------------------------------------------------------------------
    # Lifecycle operations
    # ------------------------------------------------------------------

    async def upload(
        self,
        file_data: FileData,
        uploaded_as: str,
        meta: UploadMeta | None = None,
        disk_name: str | None = None,
    ) -> UploadT:
        """
        Place an uploaded file on a disk and create it in the repository.

        If the repository create fails, the placed bytes stay on the disk
        unreferenced; they are not rolled back.
        """
        uploaded_file = await self.place(file_data, uploaded_as, disk_name)
        upload = await _resolve(self.repository.create(uploaded_file, meta))
        logger.info(f"Uploaded '{uploaded_file.uploaded_as}' to {uploaded_file.disk}:{uploaded_file.path}")
        return upload

    async def update(
        self,
        upload: UploadT,
        file_data: FileData,
        uploaded_as: str,
        meta: UploadMeta | None = None,
        disk_name: str | None = None,
    ) -> UploadT:
        """
        Replace an upload's file, delete the old file, and update the repository.

        The new file is placed before the old one is deleted, so a failed
        write leaves the upload untouched. A failed delete of the old file is
        logged and the repository is still pointed at the new file.

        Args:
            meta: New meta; None keeps whatever the repository has.
            disk_name: Disk for the new file (default disk if None).
        """
        old_file = await self._get_uploaded_file(upload)
        old_disk = self.disks.get_disk(old_file.disk)

        new_file = await self.place(file_data, uploaded_as, disk_name)

        try:
            await old_disk.delete(old_file.path)
        except Exception as e:
            logger.warning(
                f"Failed to delete replaced file {old_file.disk}:{old_file.path}, leaving it orphaned: {e}"
            )

        updated = await _resolve(self.repository.update(upload, new_file, meta))
        logger.info(f"Updated upload: {old_file.disk}:{old_file.path} -> {new_file.disk}:{new_file.path}")
        return updated

    async def duplicate(
        self,
        original: UploadT,
        meta: UploadMeta | None = None,
        new_disk_name: str | None = None,
        regenerate_path: bool = True,
    ) -> UploadT:
        """
        Copy an upload's file and create a new upload for the copy.

        The original upload is not touched. Without `meta`, the original's
        stored meta is reused.
        """
        original_file = await self._get_uploaded_file(original)
        new_file = await self.copy(original_file, new_disk_name, regenerate_path)

        if meta is None:
            meta = await _resolve(self.repository.get_meta(original))

        duplicate = await _resolve(self.repository.create(new_file, meta))
        logger.info(f"Duplicated {original_file.disk}:{original_file.path} to {new_file.disk}:{new_file.path}")
        return duplicate

    async def transfer(
        self,
        upload: UploadT,
        new_disk_name: str | None = None,
        new_meta: UploadMeta | None = None,
        regenerate_path: bool = False,
    ) -> UploadT | TransferStatus:
        """
        Move an upload's file to another disk (the default disk if None).

        The path is kept unless `regenerate_path` is set. The file on the
        source disk is left in place.

        Returns:
            The updated upload, or TransferStatus.UNCHANGED when the file
            already lives at the destination disk and path.
        """
        old_file = await self._get_uploaded_file(upload)

        try:
            new_file = await self.copy(old_file, new_disk_name, regenerate_path)
        except PathCollisionError:
            logger.debug(f"Transfer of {old_file.disk}:{old_file.path} is a no-op")
            return TransferStatus.UNCHANGED

        transferred = await _resolve(self.repository.update(upload, new_file, new_meta))
        logger.info(f"Transferred {old_file.disk}:{old_file.path} to {new_file.disk}:{new_file.path}")
        return transferred

    async def delete(self, upload: UploadT, only_file: bool = False) -> None:
        """
        Delete an upload and its file.

        The repository record goes first: if the file delete then fails, an
        unreferenced file is left behind rather than a record pointing at
        nothing.

        Args:
            only_file: Delete only the file and keep the repository record.
        """
        uploaded_file = await self._get_uploaded_file(upload)
        disk = self.disks.get_disk(uploaded_file.disk)

        if not only_file:
            await _resolve(self.repository.delete(upload))

        await disk.delete(uploaded_file.path)
        logger.info(
            f"Deleted {'file' if only_file else 'upload'} at {uploaded_file.disk}:{uploaded_file.path}"
        )

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    async def read(self, upload: UploadT) -> bytes:
        """Read an upload's file into memory."""
        uploaded_file = await self._get_uploaded_file(upload)
        return await self.disks.get_disk(uploaded_file.disk).read(uploaded_file.path)

    async def create_read_stream(self, upload: UploadT) -> AsyncIterator[bytes]:
        """Open an upload's file as an async stream of chunks."""
        uploaded_file = await self._get_uploaded_file(upload)
        return await self.disks.get_disk(uploaded_file.disk).create_read_stream(uploaded_file.path)

    async def get_url(self, upload: UploadT) -> str | None:
        """Public URL of an upload's file, or None if its disk doesn't serve URLs."""
        uploaded_file = await self._get_uploaded_file(upload)
        return self.disks.get_disk(uploaded_file.disk).get_url(uploaded_file.path)

    async def get_temporary_url(
        self,
        upload: UploadT,
        expires_in: int = 3600,
        fallback: bool | None = None,
    ) -> str | None:
        """Expiring URL of an upload's file, or None if its disk can't produce one."""
        uploaded_file = await self._get_uploaded_file(upload)
        return await self.disks.get_disk(uploaded_file.disk).get_temporary_url(
            uploaded_file.path, expires_in, fallback
        )

    # ------------------------------------------------------------------
    # Local temp files
    # ------------------------------------------------------------------

    async def _download(self, uploaded_file: UploadedFile, path: str) -> None:
        disk = self.disks.get_disk(uploaded_file.disk)
        stream = await disk.create_read_stream(uploaded_file.path)
        written = await write_stream_to_path(stream, path)
        logger.debug(f"Copied {written} bytes from {uploaded_file.disk}:{uploaded_file.path} to {path}")

    def _temp_suffix(self, uploaded_file: UploadedFile) -> str:
        return f"-{uploaded_file.uploaded_as}"[-TEMP_SUFFIX_MAX_LENGTH:]

    @asynccontextmanager
    async def temporary_file(self, upload: UploadT) -> AsyncIterator[str]:
        """
        Download an upload to a local temp file for the duration of a block.

        The file is removed when the block exits, whether or not it raised.

        Usage:
            async with uploads.temporary_file(upload) as path:
                process(path)
        """
        uploaded_file = await self._get_uploaded_file(upload)
        async with temporary_path(
            suffix=self._temp_suffix(uploaded_file), directory=self.config.temp_dir
        ) as path:
            await self._download(uploaded_file, path)
            yield path

    async def materialize_temporary(
        self,
        upload: UploadT,
        execute: TempFileCallback | None = None,
    ) -> str:
        """
        Download an upload to a local temp file.

        For operations that need the data on the local filesystem rather than
        in memory, e.g. large files processed in chunks. Data is streamed, so
        large files don't need to fit in memory.

        With `execute`, it is called with the temp path (sync or async) and the
        file is removed afterwards, even if `execute` raises. Without it, a
        successfully downloaded file is left in place and the caller is
        responsible for deleting it.

        Returns:
            The temp file path (already removed if `execute` was given).
        """
        if execute is not None:
            async with self.temporary_file(upload) as path:
                await _resolve(execute(path))
            return path

        uploaded_file = await self._get_uploaded_file(upload)
        async with temporary_path(
            suffix=self._temp_suffix(uploaded_file),
            directory=self.config.temp_dir,
            cleanup=False,
        ) as path:
            try:
                await self._download(uploaded_file, path)
            except Exception:
                await aiofiles.os.remove(path)
                raise
        return path
