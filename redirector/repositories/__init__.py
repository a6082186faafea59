"""Repository layer for the redirect service.

This module provides the storage abstraction for redirects and its
filesystem implementation.
"""

from redirector.repositories.base import (
    BaseRedirectRepository,
    RepositoryError,
    EntityNotFoundError,
    DuplicateEntityError,
    InvalidSlugError,
    is_valid_slug,
)
from redirector.repositories.file_repository import FileRedirectRepository

__all__ = [
    # Base classes and exceptions
    "BaseRedirectRepository",
    "RepositoryError",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "InvalidSlugError",
    "is_valid_slug",

    # Concrete repositories
    "FileRedirectRepository",
]
