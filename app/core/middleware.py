"""Custom middleware for the application."""

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.config import settings

logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 1.0


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each portal request with an id and log how it ended.

    Denials (401/403) and server errors are logged at WARNING/ERROR so they
    stand out from ordinary traffic; everything else is DEBUG unless slow.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed:.3f}s"

        line = f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} ({elapsed:.3f}s)"
        if response.status_code >= 500:
            logger.error(line)
        elif response.status_code in (401, 403):
            logger.warning(line)
        elif elapsed > SLOW_REQUEST_SECONDS:
            logger.warning(f"Slow request: {line}")
        else:
            logger.debug(line)

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to responses."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Session snapshots and booking data must not be cached by proxies
        if request.url.path.startswith(settings.api_prefix):
            response.headers["Cache-Control"] = "no-store"

        if not settings.debug:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
