"""Base repository definitions for the redirect service.

This module provides the repository exceptions and the abstract
``BaseRedirectRepository`` contract that storage backends implement.
"""

import re
from abc import ABC, abstractmethod

SLUG_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


class RepositoryError(Exception):
    """Base exception for repository errors.

    Raised directly when the underlying storage cannot complete an operation.
    """
    pass


class EntityNotFoundError(RepositoryError):
    """Exception raised when no redirect exists for a slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Redirect with slug {slug} not found")


class DuplicateEntityError(RepositoryError):
    """Exception raised when a redirect already exists for a slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Redirect with slug={slug} already exists")


class InvalidSlugError(RepositoryError):
    """Exception raised when a slug is not made of [A-Za-z0-9_-]."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Invalid slug {slug!r}")


def is_valid_slug(slug: str) -> bool:
    return isinstance(slug, str) and SLUG_PATTERN.fullmatch(slug) is not None


class BaseRedirectRepository(ABC):
    """
    Contract for slug-to-target storage.

    Every mutating method checks existence and mutates as one atomic unit
    per slug, and readers never observe a partially written target.

    Errors:
        EntityNotFoundError: the slug has no entry (get, update, delete)
        DuplicateEntityError: the slug already has an entry (create)
        InvalidSlugError: the slug is syntactically invalid
        RepositoryError: the storage could not complete the operation
    """

    @abstractmethod
    async def get(self, slug: str) -> str:
        """Return the target stored for ``slug``."""

    @abstractmethod
    async def create(self, slug: str, target: str) -> None:
        """Store a new entry; fails if one exists."""

    @abstractmethod
    async def update(self, slug: str, target: str) -> None:
        """Replace the target of an existing entry."""

    @abstractmethod
    async def delete(self, slug: str) -> None:
        """Remove an existing entry."""

    @abstractmethod
    async def exists(self, slug: str) -> bool:
        """Return whether an entry exists for ``slug``."""

    @abstractmethod
    async def is_ready(self) -> bool:
        """Return whether the storage can currently serve reads and writes."""
