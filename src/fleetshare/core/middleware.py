"""Request logging middleware."""

import logging
import time
import uuid
from collections.abc import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every ledger request with its outcome and timing.

    Each request gets an ``X-Request-ID`` (taken from the request when the
    client supplies one) that prefixes its log lines, so the lines of a
    rejected trade can be matched with the domain-event and rollback lines
    logged while it ran. Responses carry ``X-Request-ID`` and
    ``X-Process-Time``.

    Health checks and API documentation are passed through without logging.
    """

    def __init__(self, app: ASGIApp) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application instance
        """
        super().__init__(app)
        self._quiet_paths = {"/health", "/health/db", "/docs", "/openapi.json", "/redoc"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process the request and log it.

        Args:
            request: The incoming HTTP request
            call_next: The next middleware/route handler in the chain

        Returns:
            The HTTP response with request id and timing headers added
        """
        if request.url.path in self._quiet_paths:
            return await call_next(request)

        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        client_host = request.client.host if request.client else "unknown"
        logger.info(f"[{request_id}] → {request.method} {request.url.path} from {client_host}")

        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        # Rejected operations are WARNING, failed transfers and crashes ERROR
        if response.status_code >= 500:
            log_level = logging.ERROR
        elif response.status_code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO
        logger.log(
            log_level,
            f"[{request_id}] ← {request.method} {request.url.path} - "
            f"{response.status_code} ({duration:.3f}s)",
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{duration:.3f}"
        return response
