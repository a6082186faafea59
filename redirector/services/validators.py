"""Target URL validation."""

import re
from urllib.parse import urlsplit

from redirector.services.exceptions import InvalidURLError

# urlsplit quietly drops tab, CR and LF, so these are rejected up front
FORBIDDEN_CHARACTERS = re.compile(r"[\x00-\x1f\x7f\s]")
INVALID_HOST_CHARACTERS = re.compile(r"[\"<>\\^`{|}]")


def validate_url(candidate: str) -> None:
    """
    Check that ``candidate`` is an absolute URL.

    A URL is accepted when it has both a scheme and a host, contains no
    control characters or whitespace, and its host uses only characters
    allowed in a host name. No network access is performed.

    Raises:
        InvalidURLError: If the URL does not parse or lacks scheme or host
    """
    if not isinstance(candidate, str) or not candidate:
        raise InvalidURLError("invalid URL format")

    if FORBIDDEN_CHARACTERS.search(candidate):
        raise InvalidURLError("invalid URL format: control character or whitespace")

    try:
        parsed = urlsplit(candidate)
        hostname = parsed.hostname
    except ValueError as e:
        raise InvalidURLError(f"invalid URL format: {e}") from e

    if not parsed.scheme or not hostname:
        raise InvalidURLError("invalid URL format")

    if INVALID_HOST_CHARACTERS.search(hostname):
        raise InvalidURLError(f"invalid URL format: invalid character in host {hostname!r}")


def is_valid_url(candidate: str) -> bool:
    try:
        validate_url(candidate)
    except InvalidURLError:
        return False
    return True
