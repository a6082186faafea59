"""Service layer for the redirect application.

This package contains the redirect service, target URL validation and the
service exception hierarchy.
"""

from redirector.services.redirects import RedirectService
from redirector.services.validators import is_valid_url, validate_url

__all__ = ["RedirectService", "is_valid_url", "validate_url"]
