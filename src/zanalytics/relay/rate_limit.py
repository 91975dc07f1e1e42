"""Per-client rate limiting for the relay using slowapi.

Counters live in process memory with a fixed window, which is adequate for a
single relay instance.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

logger = logging.getLogger(__name__)


def build_limiter(rate_limit: str) -> Limiter:
    return Limiter(
        key_func=get_remote_address,
        default_limits=[rate_limit],
        strategy="fixed-window",
    )


def rate_limit_exceeded_handler(request: Request, _exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(
        "Rate limit exceeded for %s on %s", get_remote_address(request), request.url.path
    )
    return JSONResponse(
        status_code=429,
        content={"error": "Too many requests, please try again later."},
    )
