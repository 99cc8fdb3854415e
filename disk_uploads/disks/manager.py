"""
Disk manager: resolves logical disk names to disk instances.

The configuration maps names to either another name (an alias) or a disk
spec naming a driver:

    {
        "default": "local",
        "local": {"driver": "local", "config": {"root": "/srv/uploads"}},
        "scratch": {"driver": "memory"},
    }

The whole mapping is validated up front; disks themselves are created on
first use and cached for the manager's lifetime.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Union

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from disk_uploads.disks.base import BaseDisk
from disk_uploads.disks.local import LocalDisk
from disk_uploads.disks.memory import MemoryDisk
from disk_uploads.disks.minio import MinioDisk
from disk_uploads.domain.exceptions import DiskNotFoundError, InvalidConfigError


class DiskDriver(str, Enum):
    """Available disk drivers."""

    MEMORY = "memory"
    LOCAL = "local"
    MINIO = "minio"


_DRIVERS: dict[DiskDriver, type[BaseDisk]] = {
    DiskDriver.MEMORY: MemoryDisk,
    DiskDriver.LOCAL: LocalDisk,
    DiskDriver.MINIO: MinioDisk,
}


class DiskSpec(BaseModel):
    """A concrete disk entry in the manager configuration."""

    driver: DiskDriver
    config: dict[str, Any] = Field(default_factory=dict)


DiskManagerConfig = Mapping[str, Union[str, Mapping[str, Any], DiskSpec]]


class DiskManager:
    """
    Registry of named disks.

    Usage:
        disks = DiskManager({"default": "memory", "memory": {"driver": "memory"}})
        disk = disks.get_disk("default")
        disk.get_name()  # "memory"
    """

    def __init__(self, config: DiskManagerConfig):
        if not isinstance(config, Mapping):
            raise InvalidConfigError(
                ["disks"], message_debug=f"Expected a mapping, got {type(config).__name__}"
            )

        self._aliases: dict[str, str] = {}
        self._specs: dict[str, DiskSpec] = {}
        self._disks: dict[str, BaseDisk] = {}

        for name, entry in config.items():
            if isinstance(entry, str):
                self._aliases[name] = entry
            elif isinstance(entry, DiskSpec):
                self._specs[name] = entry
            elif isinstance(entry, Mapping):
                try:
                    self._specs[name] = DiskSpec.model_validate(dict(entry))
                except ValidationError as e:
                    raise InvalidConfigError(
                        [f"disks.{name}"], message_debug=str(e), cause=e
                    ) from e
            else:
                raise InvalidConfigError(
                    [f"disks.{name}"],
                    message_debug=f"Expected a disk name or spec, got {type(entry).__name__}",
                )

        for name in self._aliases:
            self._canonical_name(name)

    def names(self) -> list[str]:
        """All configured names, aliases included."""
        return [*self._aliases, *self._specs]

    def _canonical_name(self, name: str) -> str:
        seen = [name]
        while name in self._aliases:
            name = self._aliases[name]
            if name in seen:
                raise InvalidConfigError(
                    [f"disks.{seen[0]}"],
                    message_debug=f"Disk alias cycle: {' -> '.join([*seen, name])}",
                )
            seen.append(name)

        if name not in self._specs:
            if len(seen) > 1:
                raise InvalidConfigError(
                    [f"disks.{seen[0]}"],
                    message_debug=f"Alias '{seen[0]}' points at unknown disk '{name}'",
                )
            raise DiskNotFoundError(name, self.names())
        return name

    def get_disk(self, name: str) -> BaseDisk:
        """
        Get the disk configured under a name, following aliases.

        Raises:
            DiskNotFoundError: If no disk or alias has that name.
        """
        canonical = self._canonical_name(name)
        disk = self._disks.get(canonical)
        if disk is None:
            spec = self._specs[canonical]
            disk = _DRIVERS[spec.driver](canonical, spec.config)
            self._disks[canonical] = disk
            logger.debug(f"Created {spec.driver.value} disk '{canonical}'")
        return disk
