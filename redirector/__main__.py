"""Run the redirect service with uvicorn.

Usage:
    python -m redirector

Environment variables:
    PORT - Port to listen on (default 3000)
    HOST - Interface to bind (default 0.0.0.0)
    STORAGE_DIR - Directory holding redirects (default ~/.GRY)
    TOTP_SECRET - Base32 secret for authorizing writes
    LOG_LEVEL - Logging level
"""

import uvicorn

from redirector.core.config import settings


def main() -> None:
    uvicorn.run(
        "redirector.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
        timeout_keep_alive=60,
    )


if __name__ == "__main__":
    main()
