"""
HTTP middleware: per-request audit log and response hardening.

Each request gets an id, taken from the caller's X-Request-ID header
or generated, which is echoed back and prefixed to its log line so a
chat or survey call can be traced from the client to the log.
"""
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from civic_chat.core.logging_config import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Polled by load balancers; logged at DEBUG only
QUIET_PATHS = ("/api/health",)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class AuditMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and latency of every request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(
                f"[{request_id}] {request.method} {request.url.path} "
                f"failed after {elapsed_ms:.0f}ms: {e}"
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms:.0f}ms"

        message = (
            f"[{request_id}] {request.method} {request.url.path} "
            f"-> {response.status_code} in {elapsed_ms:.0f}ms"
        )
        if request.url.path in QUIET_PATHS:
            logger.debug(message)
        elif response.status_code >= 500:
            logger.error(message)
        elif response.status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds SECURITY_HEADERS to every response.

    API responses also get `Cache-Control: no-store`: chat replies and
    survey listings must not be kept by browsers or proxies.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        if request.url.path.startswith("/api/"):
            response.headers.setdefault("Cache-Control", "no-store")

        return response
