"""
Rate limiting with slowapi, keyed by client IP.

Routes opt in with `@limiter.limit(auth_rate_limit)` and friends. The limit
strings are read from the settings of the running app, and every other
route falls under `API_RATE_LIMIT`.
"""

from typing import Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from buildhub.config import Settings, get_settings

logger = structlog.get_logger(__name__)

DEFAULT_MESSAGE = "Too many requests, please try again later."
AUTH_MESSAGE = "Too many authentication attempts, please try again later."
UPLOAD_MESSAGE = "Too many file uploads, please try again later."

_settings: Optional[Settings] = None


def _active_settings() -> Settings:
    return _settings or get_settings()


def api_rate_limit() -> str:
    return _active_settings().API_RATE_LIMIT


def auth_rate_limit() -> str:
    return _active_settings().AUTH_RATE_LIMIT


def upload_rate_limit() -> str:
    return _active_settings().UPLOAD_RATE_LIMIT


limiter = Limiter(key_func=get_remote_address, default_limits=[api_rate_limit])


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # SlowAPIMiddleware calls this without awaiting it
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        client=get_remote_address(request),
        limit=str(exc.limit.limit),
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"message": exc.limit.error_message or DEFAULT_MESSAGE},
    )


def setup_rate_limiting(app: FastAPI, settings: Settings) -> None:
    """Bind the limiter to app with a clean counter store."""
    global _settings
    _settings = settings

    limiter.enabled = settings.RATE_LIMIT_ENABLED
    limiter.reset()
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
