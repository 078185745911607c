"""
Rate Limiting Service

Protects the API from abuse using slowapi.

Rate Limit Tiers:
=================
- Default (reads): settings.rate_limit_default, 100 requests/minute
- Writes (insert, update, delete): settings.rate_limit_write, 30 requests/minute
- Auth (register, login, password change): settings.rate_limit_auth, 10 requests/minute

Counters live in settings.rate_limit_storage_uri: in-process memory by
default, or a shared store such as redis:// when several API instances
must see the same counts.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from catalog.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def get_client_ip(request: Request) -> str:
    """
    Get client IP address for rate limiting.

    Honours X-Forwarded-For and X-Real-IP set by proxies, falling back to
    the direct connection address.
    """
    # X-Forwarded-For can contain multiple IPs; first is the client
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    # nginx
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


def create_limiter() -> Limiter:
    """Create the limiter from settings."""
    limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[settings.rate_limit_default],
        storage_uri=settings.rate_limit_storage_uri,
        strategy="fixed-window",
        enabled=settings.rate_limit_enabled,
    )

    logger.info(
        f"Rate limiter initialized - enabled: {settings.rate_limit_enabled}, "
        f"default: {settings.rate_limit_default}"
    )

    return limiter


limiter = create_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Answer 429 with the catalog's usual ``{"message": ...}`` body.

    A Retry-After header tells well-behaved clients when to come back.
    """
    limit_detail = str(exc.detail)

    response = JSONResponse(
        status_code=429,
        content={"message": f"Too many requests - limit is {limit_detail}"},
    )
    response.headers["Retry-After"] = str(60)
    response.headers["X-RateLimit-Limit"] = limit_detail

    logger.warning(f"Rate limit exceeded for {get_client_ip(request)}: {limit_detail}")

    return response
