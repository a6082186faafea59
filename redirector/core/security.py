"""Authorization predicate for mutating requests.

Mutating routes only ask one question: "is this request authorized?".
Anything that can answer it can be plugged in as an ``Authorizer``; the
default answers it with a time-based one-time password carried in the
``Authorization`` header.
"""

from typing import Callable, Optional

import pyotp
from fastapi import Request
from loguru import logger

from redirector.core.config import Settings

Authorizer = Callable[[Request], bool]

BEARER_SCHEME = "bearer"


def extract_token(header_value: Optional[str]) -> Optional[str]:
    """Return the token from an Authorization header, bare or ``Bearer``-prefixed."""
    if not header_value:
        return None
    parts = header_value.split()
    if parts and parts[0].lower() == BEARER_SCHEME:
        parts = parts[1:]
    if len(parts) != 1:
        return None
    return parts[0]


class TOTPAuthorizer:
    """
    Authorize requests carrying a current TOTP code.

    Codes are 6 digits over a 30 second period; one step of clock skew
    on either side is accepted.
    """

    def __init__(self, secret: str, valid_window: int = 1):
        self.secret = secret
        self.valid_window = valid_window
        self._totp = pyotp.TOTP(secret)

    def verify(self, token: Optional[str]) -> bool:
        if not token or not token.isdigit():
            return False
        return self._totp.verify(token, valid_window=self.valid_window)

    def __call__(self, request: Request) -> bool:
        return self.verify(extract_token(request.headers.get("authorization")))


def build_authorizer(settings: Settings) -> TOTPAuthorizer:
    """
    Create the TOTP authorizer from settings.

    Without a configured secret a random one is generated. It lives only as
    long as the process, so it is logged once for the operator to save.
    """
    secret = settings.TOTP_SECRET
    if not secret:
        secret = pyotp.random_base32()
        provisioning_uri = pyotp.TOTP(secret).provisioning_uri(
            name=settings.TOTP_ACCOUNT_NAME,
            issuer_name=settings.TOTP_ISSUER,
        )
        logger.warning("No TOTP_SECRET provided, generated one")
        logger.warning(f"TOTP_SECRET: {secret}")
        logger.warning(f"Provisioning URI: {provisioning_uri}")
        logger.warning("TOTP_SECRET won't persist, securely save it and define TOTP_SECRET")
    return TOTPAuthorizer(secret)
