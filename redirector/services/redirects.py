"""Redirect service for the redirect application.

This module contains the RedirectService class which gates writes with URL
validation and translates repository outcomes into service exceptions.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from redirector.repositories.base import (
    BaseRedirectRepository,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidSlugError,
    RepositoryError,
)
from redirector.services.exceptions import (
    InvalidSlugFormatError,
    SlugAlreadyExistsError,
    SlugNotFoundError,
    StorageError,
)
from redirector.services.validators import validate_url

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(slug: str) -> Iterator[None]:
    try:
        yield
    except EntityNotFoundError as e:
        raise SlugNotFoundError(f"Redirect '{slug}' does not exist") from e
    except DuplicateEntityError as e:
        raise SlugAlreadyExistsError(f"Redirect '{slug}' already exists") from e
    except InvalidSlugError as e:
        raise InvalidSlugFormatError(f"Invalid slug '{slug}'") from e
    except RepositoryError as e:
        logger.error(f"Storage failure for redirect {slug}: {e}")
        raise StorageError(str(e)) from e


class RedirectService:
    """
    Service for redirect business logic.

    Every write is validated before it reaches the repository; the
    repository is trusted to make each operation atomic per slug.
    """

    def __init__(self, repository: BaseRedirectRepository):
        """
        Initialize the redirect service.

        Args:
            repository: Storage for redirects
        """
        self.repository = repository

    async def resolve(self, slug: str) -> str:
        """
        Return the target URL for a slug.

        Raises:
            SlugNotFoundError: If no redirect exists for the slug
            InvalidSlugFormatError: If the slug is malformed
            StorageError: On storage failures
        """
        with _translate_errors(slug):
            return await self.repository.get(slug)

    async def create(self, slug: str, target: str) -> None:
        """
        Create a redirect from ``slug`` to ``target``.

        Raises:
            InvalidURLError: If the target is not an absolute URL
            SlugAlreadyExistsError: If the slug is already taken
            InvalidSlugFormatError: If the slug is malformed
            StorageError: On storage failures
        """
        validate_url(target)
        with _translate_errors(slug):
            await self.repository.create(slug, target)

    async def update(self, slug: str, target: str) -> None:
        """
        Point an existing slug at a new target.

        Raises:
            InvalidURLError: If the target is not an absolute URL
            SlugNotFoundError: If no redirect exists for the slug
            InvalidSlugFormatError: If the slug is malformed
            StorageError: On storage failures
        """
        validate_url(target)
        with _translate_errors(slug):
            await self.repository.update(slug, target)

    async def delete(self, slug: str) -> None:
        """
        Remove a redirect.

        Raises:
            SlugNotFoundError: If no redirect exists for the slug
            InvalidSlugFormatError: If the slug is malformed
            StorageError: On storage failures
        """
        with _translate_errors(slug):
            await self.repository.delete(slug)
