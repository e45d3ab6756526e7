"""
HTTP middleware: correlation ids, request actor context and rate limiting.
"""

from src.presentation.middleware.correlation import CorrelationIDMiddleware
from src.presentation.middleware.rate_limit import RateLimitMiddleware

__all__ = ["CorrelationIDMiddleware", "RateLimitMiddleware"]
