"""Tests for the redirect service."""

from unittest.mock import AsyncMock

import pytest

from redirector.repositories import BaseRedirectRepository, RepositoryError
from redirector.services import RedirectService
from redirector.services.exceptions import (
    ErrorKind,
    InvalidSlugFormatError,
    InvalidURLError,
    SlugAlreadyExistsError,
    SlugNotFoundError,
    StorageError,
)


@pytest.mark.service
class TestRedirectService:
    """Test suite for the redirect service."""

    @pytest.mark.asyncio
    async def test_round_trip(self, redirect_service):
        await redirect_service.create("svc", "https://example.com/one")
        assert await redirect_service.resolve("svc") == "https://example.com/one"

        await redirect_service.update("svc", "https://example.com/two")
        assert await redirect_service.resolve("svc") == "https://example.com/two"

        await redirect_service.delete("svc")
        with pytest.raises(SlugNotFoundError):
            await redirect_service.resolve("svc")

    @pytest.mark.asyncio
    async def test_invalid_target_never_reaches_store(self, redirect_service, repository):
        with pytest.raises(InvalidURLError):
            await redirect_service.create("bad", "example.com")

        assert await repository.exists("bad") is False

    @pytest.mark.asyncio
    async def test_invalid_update_keeps_target(self, redirect_service):
        await redirect_service.create("keep", "https://example.com")

        with pytest.raises(InvalidURLError):
            await redirect_service.update("keep", "http://")

        assert await redirect_service.resolve("keep") == "https://example.com"

    @pytest.mark.asyncio
    async def test_error_kinds(self, redirect_service):
        await redirect_service.create("taken", "https://example.com")

        with pytest.raises(SlugAlreadyExistsError) as excinfo:
            await redirect_service.create("taken", "https://other.example.com")
        assert excinfo.value.kind is ErrorKind.ALREADY_EXISTS

        with pytest.raises(SlugNotFoundError) as excinfo:
            await redirect_service.update("missing", "https://example.com")
        assert excinfo.value.kind is ErrorKind.NOT_FOUND

        with pytest.raises(SlugNotFoundError):
            await redirect_service.delete("missing")

        with pytest.raises(InvalidSlugFormatError) as excinfo:
            await redirect_service.resolve("../etc/passwd")
        assert excinfo.value.kind is ErrorKind.INVALID_FORMAT

    @pytest.mark.asyncio
    async def test_storage_failure_is_reported(self):
        repository = AsyncMock(spec=BaseRedirectRepository)
        repository.get.side_effect = RepositoryError("disk on fire")
        repository.create.side_effect = RepositoryError("read-only file system")
        service = RedirectService(repository=repository)

        with pytest.raises(StorageError) as excinfo:
            await service.resolve("anything")
        assert excinfo.value.kind is ErrorKind.FAILURE
        assert isinstance(excinfo.value.__cause__, RepositoryError)

        with pytest.raises(StorageError):
            await service.create("anything", "https://example.com")
        repository.create.assert_awaited_once_with("anything", "https://example.com")
