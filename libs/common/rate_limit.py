"""Rate limiting for the storefront API.

Uses slowapi. Storage defaults to in-process memory; point
``RATE_LIMIT_STORAGE_URI`` at Redis to share limits across instances.
"""

from functools import lru_cache
from typing import Callable

from fastapi import FastAPI, Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from libs.common.config import get_settings
from libs.common.error_handler import error_response
from libs.common.logging import get_logger

logger = get_logger(__name__)


def _get_client_ip(request: Request) -> str:
    """
    Get client IP from request, handling proxies.

    Checks X-Forwarded-For header first (for proxied requests),
    then falls back to direct connection IP.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain (original client)
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


@lru_cache
def get_limiter() -> Limiter:
    """
    Create and return a cached Limiter instance.
    """
    settings = get_settings()
    return Limiter(
        key_func=_get_client_ip,
        default_limits=[settings.RATE_LIMIT_DEFAULT],
        storage_uri=settings.RATE_LIMIT_STORAGE_URI,
        strategy="fixed-window",
        enabled=settings.RATE_LIMIT_ENABLED,
    )


limiter = get_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Render a 429 in the standard error envelope."""
    logger.warning("Rate limit exceeded for %s on %s", _get_client_ip(request), request.url.path)
    response = error_response(
        429, "Too many requests from this IP, please try again later."
    )
    response.headers["Retry-After"] = str(getattr(exc, "retry_after", 60))
    return response


def auth_limit(func: Callable) -> Callable:
    """Apply the stricter limit used for login and registration."""
    return limiter.limit(get_settings().RATE_LIMIT_AUTH)(func)


def add_rate_limiting(app: FastAPI) -> None:
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
