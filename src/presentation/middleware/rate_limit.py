"""Fixed-window rate limiting middleware"""

import logging
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.domain.exceptions import RateLimitExceededException
from src.infrastructure.rate_limit import FixedWindowRateLimiter
from src.presentation.api.exception_handlers import admin_exception_response
from src.shared.context import get_current_actor_id

logger = logging.getLogger(__name__)

EXEMPT_PATHS = frozenset({"/", "/health", "/docs", "/redoc", "/openapi.json"})


def rate_limit_key(request: Request) -> str:
    """actor-or-ip:METHOD:path"""
    caller = get_current_actor_id()
    if not caller:
        caller = request.client.host if request.client else "unknown"
    return f"{caller}:{request.method}:{request.url.path}"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject requests over the per-window budget with 429.

    The limiter is read from app.state.rate_limiter, which the lifespan
    installs; without one every request passes. Must sit inside
    CorrelationIDMiddleware so the actor is known.
    """

    def __init__(self, app, limiter: FixedWindowRateLimiter | None = None):
        super().__init__(app)
        self.limiter = limiter

    def _limiter_for(self, request: Request) -> FixedWindowRateLimiter | None:
        if self.limiter is not None:
            return self.limiter
        return getattr(request.app.state, "rate_limiter", None)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        limiter = self._limiter_for(request)
        if limiter is None or request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        key = rate_limit_key(request)
        decision = await limiter.hit(key)
        if not decision.allowed:
            return admin_exception_response(
                RateLimitExceededException(key, decision.limit, decision.retry_after)
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(decision.limit)
        response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
        return response
