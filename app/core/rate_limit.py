"""
Rate limiting configuration using slowapi.

Uses Redis as the backend so limits are shared across workers.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from app.core.config import settings


def _get_user_or_ip(request: Request) -> str:
    """
    Rate-limit key: authenticated username if available, otherwise client IP.
    """
    user = getattr(request.state, "current_user", None)
    if user is not None and getattr(user, "username", None):
        return f"user:{user.username}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=_get_user_or_ip,
    storage_uri=settings.redis_url,
    strategy="fixed-window",
    enabled=settings.rate_limit_enabled,
)

# Pre-defined rate limit strings for use in route decorators:
#   @limiter.limit(RATE_AUTH)
RATE_AUTH = "5/minute"           # signin, register
RATE_UPLOAD = "10/hour"          # edit-profile
