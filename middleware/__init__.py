"""
Middleware package exports.
"""

from middleware.request_context import RequestContextMiddleware, get_request_id
from middleware.rate_limiter import limiter, get_user_id

__all__ = ["RequestContextMiddleware", "get_request_id", "limiter", "get_user_id"]
