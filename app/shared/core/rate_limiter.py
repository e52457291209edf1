"""
Rate limiting for the GreenMate API.

The limiter is built once by the application factory and handed to the
router factories that decorate rate-limited endpoints. Storage is
``memory://`` by default or a ``redis://`` URI for shared counters.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from app.shared.config.settings import Settings
from app.shared.utils.logging import get_logger

from .exceptions import RateLimitExceededError

logger = get_logger(__name__)


def create_rate_limiter(settings: Settings) -> Limiter:
    """Create the request limiter keyed by client address."""
    limiter = Limiter(
        key_func=get_remote_address,
        storage_uri=settings.RATE_LIMIT_STORAGE_URI,
        enabled=settings.RATE_LIMIT_ENABLED,
        headers_enabled=False,
    )
    logger.info(
        "Rate limiter configured",
        storage_uri=settings.RATE_LIMIT_STORAGE_URI.split("@")[-1],
        enabled=settings.RATE_LIMIT_ENABLED,
    )
    return limiter


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render slowapi's RateLimitExceeded as the standard error envelope."""
    error = RateLimitExceededError(limit=str(exc.detail))
    logger.warning(
        f"Rate limit exceeded for {get_remote_address(request)} on {request.url.path}",
        limit=str(exc.detail),
    )
    return JSONResponse(
        status_code=error.status_code,
        content={"success": False, **error.to_dict()},
    )
