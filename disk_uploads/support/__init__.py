"""Support implementations for tests and prototyping."""

from disk_uploads.support.memory_repository import MemoryRepository, MemoryRepositoryRecord

__all__ = ["MemoryRepository", "MemoryRepositoryRecord"]
