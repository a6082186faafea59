"""Exceptions for the redirect service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying storage details.
Each exception carries an ``ErrorKind`` so callers can branch on the outcome
without inspecting messages.
"""

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    INVALID_FORMAT = "invalid_format"
    FAILURE = "failure"


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    kind: ErrorKind = ErrorKind.FAILURE


class InvalidURLError(ServiceError):
    """The target URL lacks a scheme or a host, or does not parse."""
    kind = ErrorKind.INVALID_FORMAT


class InvalidSlugFormatError(ServiceError):
    """The slug contains characters outside [A-Za-z0-9_-]."""
    kind = ErrorKind.INVALID_FORMAT


class SlugNotFoundError(ServiceError):
    """No redirect exists for the slug."""
    kind = ErrorKind.NOT_FOUND


class SlugAlreadyExistsError(ServiceError):
    """A redirect already exists for the slug."""
    kind = ErrorKind.ALREADY_EXISTS


class StorageError(ServiceError):
    """The storage could not complete the operation."""
    kind = ErrorKind.FAILURE
