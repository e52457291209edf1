# 📄 File: app/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a diary of every request made to GreenMate: what was asked for, how long the
# answer took, and whether something went wrong.
# 🧪 Purpose (Technical Summary):
# Request logging middleware with X-Request-ID correlation (propagated into every log line
# through the logging ContextVar), response timing and slow-request classification.
# Sensitive headers and query parameters are filtered before logging.
# 🔗 Dependencies:
# Starlette BaseHTTPMiddleware, app.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# app.main (middleware registration)

import time
import uuid
from typing import Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.utils.logging import get_logger, log_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Paths not worth a log line per hit
EXCLUDED_PATHS = ("/api/v1/health", "/favicon.ico")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware

    Features:
    - Request ID taken from X-Request-ID or generated, echoed on the response
    - Request/response timing
    - Security-aware header and query filtering
    - Slow request classification
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

        self.sensitive_headers = {
            "authorization",
            "x-api-key",
            "cookie",
            "x-auth-token",
        }
        self.sensitive_params = {
            "appid",
            "api_key",
            "token",
            "secret",
        }

        self.slow_request_threshold = 2.0
        self.very_slow_request_threshold = 5.0

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = self._get_or_create_request_id(request)

        with log_context(request_id):
            if request.url.path.startswith(EXCLUDED_PATHS):
                response = await call_next(request)
                response.headers[REQUEST_ID_HEADER] = request_id
                return response

            start_time = time.perf_counter()
            logger.info(
                f"Request started: {request.method} {request.url.path}",
                event_type="http_request",
                method=request.method,
                path=request.url.path,
                query_params=self._filter_sensitive_params(dict(request.query_params)),
                headers=self._filter_sensitive_headers(dict(request.headers)),
                client=request.client.host if request.client else None,
            )

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    f"Request failed: {request.method} {request.url.path}",
                    event_type="http_error",
                    processing_time_ms=round((time.perf_counter() - start_time) * 1000, 2),
                    exception_type=type(e).__name__,
                )
                raise

            processing_time = time.perf_counter() - start_time
            logger.info(
                f"Request completed: {request.method} {request.url.path} - {response.status_code}",
                event_type="http_response",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                processing_time_ms=round(processing_time * 1000, 2),
                performance=self._classify(processing_time),
            )

            response.headers[REQUEST_ID_HEADER] = request_id
            return response

    def _get_or_create_request_id(self, request: Request) -> str:
        request_id = request.headers.get(REQUEST_ID_HEADER.lower()) or str(uuid.uuid4())
        request.state.request_id = request_id
        return request_id

    def _classify(self, processing_time: float) -> str:
        if processing_time > self.very_slow_request_threshold:
            return "very_slow"
        if processing_time > self.slow_request_threshold:
            return "slow"
        return "normal"

    def _filter_sensitive_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        return {
            key: "[REDACTED]" if key.lower() in self.sensitive_headers else value
            for key, value in headers.items()
        }

    def _filter_sensitive_params(self, params: Dict[str, str]) -> Dict[str, str]:
        return {
            key: "[REDACTED]" if key.lower() in self.sensitive_params else value
            for key, value in params.items()
        }
