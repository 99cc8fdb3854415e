"""Unit tests for the in-memory upload repository."""

import pytest

from disk_uploads.domain.exceptions import UploadNotFoundError
from disk_uploads.domain.interfaces import UploadRepository
from disk_uploads.domain.models import UploadedFile
from disk_uploads.support.memory_repository import MemoryRepository


class TestMemoryRepository:
    """Tests for MemoryRepository."""

    def test_satisfies_repository_protocol(self, repository):
        assert isinstance(repository, UploadRepository)

    @pytest.mark.asyncio
    async def test_create_assigns_incrementing_ids(self, repository, uploaded_file):
        first = await repository.create(uploaded_file, {"context": "test"})
        second = await repository.create(uploaded_file)

        assert (first, second) == (1, 2)
        assert len(repository) == 2
        assert await repository.get_meta(first) == {"context": "test"}
        assert await repository.get_meta(second) == {}

    @pytest.mark.asyncio
    async def test_get_uploaded_file_info(self, repository, uploaded_file):
        upload = await repository.create(uploaded_file)

        assert await repository.get_uploaded_file_info(upload) == uploaded_file

    @pytest.mark.asyncio
    async def test_update_replaces_file_and_meta(self, repository, uploaded_file):
        upload = await repository.create(uploaded_file, {"a": 1})
        moved = UploadedFile(disk="other", path="/new.txt", uploaded_as="foo.txt")

        result = await repository.update(upload, moved, {"b": 2})

        assert result == upload
        assert await repository.get_uploaded_file_info(upload) == moved
        assert await repository.get_meta(upload) == {"b": 2}

    @pytest.mark.asyncio
    async def test_update_keeps_meta_when_none(self, repository, uploaded_file):
        upload = await repository.create(uploaded_file, {"a": 1})
        moved = UploadedFile(disk="other", path="/new.txt", uploaded_as="foo.txt")

        await repository.update(upload, moved)

        assert await repository.get_meta(upload) == {"a": 1}

    @pytest.mark.asyncio
    async def test_delete(self, repository, uploaded_file):
        upload = await repository.create(uploaded_file)

        await repository.delete(upload)

        assert len(repository) == 0
        with pytest.raises(UploadNotFoundError):
            await repository.find(upload)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("upload", [0, None, 99])
    async def test_unknown_ids_raise(self, repository, upload):
        with pytest.raises(UploadNotFoundError):
            await repository.get_meta(upload)

    @pytest.mark.asyncio
    async def test_log_writes_table(self, repository, uploaded_file):
        from loguru import logger

        await repository.create(uploaded_file, {"context": "test"})
        messages = []
        sink_id = logger.add(messages.append, format="{message}")
        try:
            repository.log()
        finally:
            logger.remove(sink_id)

        assert len(messages) == 2
        assert "/foo.txt" in str(messages[1])


# --- Fixtures ---


@pytest.fixture
def repository():
    return MemoryRepository()


@pytest.fixture
def uploaded_file():
    return UploadedFile(disk="memory", path="/foo.txt", uploaded_as="foo.txt")
