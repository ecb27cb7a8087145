"""API key authentication middleware."""

import logging
import secrets
from collections.abc import Awaitable, Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from notelytic.core import config

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"

# Reachable without a key
PUBLIC_PATHS = frozenset({"/api/v1/health", "/api/v1/health/live", "/openapi.json"})
PUBLIC_PREFIXES = ("/docs", "/redoc")


def _is_public(path: str) -> bool:
    return path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES)


def _reject(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


async def api_key_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    Require the configured API key on every non-public route.

    Settings are read per request so tests can patch them. Without a
    configured key the API refuses all requests unless
    NOTELYTIC_ALLOW_NO_AUTH is set.
    """
    if _is_public(request.url.path):
        return await call_next(request)

    expected = config.NOTELYTIC_API_KEY
    if not expected:
        if config.NOTELYTIC_ALLOW_NO_AUTH:
            return await call_next(request)
        logger.error("NOTELYTIC_API_KEY not set - refusing %s", request.url.path)
        return _reject(status.HTTP_503_SERVICE_UNAVAILABLE, "API key not configured")

    provided = request.headers.get(API_KEY_HEADER)
    if not provided:
        return _reject(status.HTTP_401_UNAUTHORIZED, f"Missing {API_KEY_HEADER} header")
    if not secrets.compare_digest(provided, expected):
        logger.warning("Invalid API key for %s", request.url.path)
        return _reject(status.HTTP_401_UNAUTHORIZED, "Invalid API key")

    return await call_next(request)
