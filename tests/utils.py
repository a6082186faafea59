"""Test utilities for redirect service tests."""

import random
import string

SLUG_CHARS = string.ascii_letters + string.digits + "-_"


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_slug(length: int = 8) -> str:
    """Generate a random slug from [A-Za-z0-9_-]."""
    return ''.join(random.choice(SLUG_CHARS) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


def leftover_temp_files(directory) -> list:
    """Temporary publish files still present in a storage root."""
    return [p.name for p in directory.iterdir() if p.name.startswith(".") and p.name.endswith(".tmp")]
