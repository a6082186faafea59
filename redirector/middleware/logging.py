"""
Request logging middleware for FastAPI using Loguru.

Every request gets an ``X-Request-ID`` and a single log line at the
REQUEST level with method, path, status, latency and client address.
"""

import time
import uuid
from contextvars import ContextVar

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable to store request ID across async context
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_client_ip(request: Request) -> str:
    client_ip = request.client.host if request.client else "unknown"
    if "X-Forwarded-For" in request.headers:
        forwarded_ips = request.headers["X-Forwarded-For"].split(",")
        if forwarded_ips and forwarded_ips[0].strip():
            client_ip = forwarded_ips[0].strip()
    return client_ip


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request and tag responses with a request ID."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_var.set(request_id)

        start_time = time.time()
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = request_id
        process_time_ms = round((time.time() - start_time) * 1000, 2)

        logger.log(
            "REQUEST",
            "{method} {path} {status_code} {process_time_ms}ms {client_ip} {request_id}",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_ms=process_time_ms,
            client_ip=get_client_ip(request),
            request_id=request_id,
            user_agent=request.headers.get("user-agent", ""),
        )

        return response


def add_logging_middleware(app) -> None:
    """Add the request logging middleware to the FastAPI application."""
    app.add_middleware(LoggingMiddleware)
