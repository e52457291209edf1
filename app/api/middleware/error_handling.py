# 📄 File: app/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# Catches anything that goes wrong while answering a request and turns it into a clear,
# consistent error message instead of a crash.
# 🧪 Purpose (Technical Summary):
# Registers FastAPI exception handlers rendering every failure in the standard envelope
# {"success": false, "error": {code, message, details, status_code}}. Client faults log
# at warning level, server faults at error level. Internals only leak when DEBUG is on.
# 🔗 Dependencies:
# FastAPI, Starlette, slowapi, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# app.main (create_application)

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.shared.config.settings import Settings
from app.shared.core.exceptions import (
    ErrorCode,
    GreenMateException,
    RequestValidationFailedError,
)
from app.shared.core.rate_limiter import rate_limit_exceeded_handler
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)


def create_error_response(
    status_code: int,
    error: Dict[str, Any],
    request_id: Optional[str] = None
) -> JSONResponse:
    """Build the standard error envelope."""
    if request_id:
        error = {**error, "request_id": request_id}
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error},
    )


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Attach the GreenMate exception handlers to ``app``."""

    @app.exception_handler(GreenMateException)
    async def greenmate_exception_handler(request: Request, exc: GreenMateException) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            f"{exc.error_code.value}: {exc.message}",
            path=request.url.path,
            status_code=exc.status_code,
        )
        return create_error_response(exc.status_code, exc.to_dict()["error"], _request_id(request))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Raw inputs may be binary upload data
        errors = [
            {key: value for key, value in error.items() if key != "input"}
            for error in exc.errors()
        ]
        error = RequestValidationFailedError("Request validation failed", jsonable_encoder(errors))
        logger.warning(f"Request validation failed on {request.url.path}", errors=len(errors))
        return create_error_response(error.status_code, error.to_dict()["error"], _request_id(request))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        code = ErrorCode.NOT_FOUND if exc.status_code == status.HTTP_404_NOT_FOUND else ErrorCode.HTTP_ERROR
        response = create_error_response(
            exc.status_code,
            {
                "code": code.value,
                "message": str(exc.detail),
                "details": {"path": request.url.path},
                "status_code": exc.status_code,
            },
            _request_id(request),
        )
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            exception_type=type(exc).__name__,
        )
        details = {"type": type(exc).__name__, "message": str(exc)} if settings.DEBUG else {}
        return create_error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {
                "code": ErrorCode.INTERNAL_ERROR.value,
                "message": "An internal server error occurred",
                "details": details,
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            },
            _request_id(request),
        )
