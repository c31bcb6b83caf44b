"""
Request rate limiting with slowapi.

Every route gets the API default through SlowAPIMiddleware. Credential
routes share one "auth" bucket and the SMS senders share an "sms" bucket,
both keyed by client address.
"""
import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

import config

logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[config.API_RATE_LIMIT],
    storage_uri=config.RATE_LIMIT_STORAGE_URI,
    enabled=config.RATE_LIMIT_ENABLED,
    strategy="fixed-window",
)

# Decorators for the routes with their own budget
auth_rate_limit = limiter.shared_limit(config.AUTH_RATE_LIMIT, scope="auth")
sms_rate_limit = limiter.shared_limit(config.SMS_RATE_LIMIT, scope="sms")


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 in the API's usual {"detail": ...} shape."""
    logger.warning("Rate limit exceeded for %s on %s: %s", get_remote_address(request), request.url.path, exc.detail)
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests, please try again later."},
        headers={"Retry-After": "60"},
    )
