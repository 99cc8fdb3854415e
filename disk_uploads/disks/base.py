"""
Base class for disks.

Provides the behavior every disk shares (naming and URL generation) so that
concrete disks only implement byte storage.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Mapping

from pydantic import BaseModel, ConfigDict

from disk_uploads.domain.models import FileData


class DiskConfig(BaseModel):
    """
    Options shared by every disk driver.

    Attributes:
        url: Base URL files on the disk are publicly served from.
        temporary_url_fallback: Answer temporary URL requests with the plain URL
            when the disk cannot sign expiring URLs.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    url: str | None = None
    temporary_url_fallback: bool = False


class BaseDisk(ABC):
    """
    Abstract storage disk.

    Concrete disks implement write/read/create_read_stream/delete; URL
    generation is shared and driven by DiskConfig.
    """

    def __init__(self, name: str, config: DiskConfig | Mapping[str, Any] | None = None):
        self._name = name
        if config is None or isinstance(config, DiskConfig):
            self.config = config or DiskConfig()
        else:
            self.config = DiskConfig(**config)

    def get_name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"

    @abstractmethod
    async def write(self, path: str, data: FileData) -> None:
        """Write bytes or a chunk stream to a path."""

    @abstractmethod
    async def read(self, path: str) -> bytes:
        """Read the content at a path. Raises FileNotFoundError if missing."""

    @abstractmethod
    async def create_read_stream(self, path: str) -> AsyncIterator[bytes]:
        """Open the content at a path as a chunk stream. Raises FileNotFoundError if missing."""

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Delete the content at a path. Raises FileNotFoundError if missing."""

    def get_url(self, path: str) -> str | None:
        """
        Get the public URL for a path.

        Returns:
            `<url>/<path>` when the disk has a base URL configured, else None.
        """
        if not self.config.url:
            return None
        return f"{self.config.url.rstrip('/')}/{path.lstrip('/')}"

    async def get_temporary_url(
        self,
        path: str,
        expires_in: int = 3600,
        fallback: bool | None = None,
    ) -> str | None:
        """
        Get an expiring URL for a path.

        Disks that can't sign URLs return None, or the plain URL when the
        fallback is enabled (either per call or via temporary_url_fallback).
        """
        use_fallback = self.config.temporary_url_fallback if fallback is None else fallback
        return self.get_url(path) if use_fallback else None
