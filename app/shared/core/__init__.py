"""
Core utilities package for GreenMate.
Provides the exception hierarchy and the request rate limiter.
"""

from .exceptions import (
    ErrorCode,
    GreenMateException,
    UploadValidationError,
)
from .rate_limiter import create_rate_limiter, rate_limit_exceeded_handler

__all__ = [
    "ErrorCode",
    "GreenMateException",
    "UploadValidationError",
    "create_rate_limiter",
    "rate_limit_exceeded_handler",
]
