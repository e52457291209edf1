# 📄 File: app/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Helpers that wrap every request: one writes the request diary, the other turns
# errors into consistent answers.
# 🧪 Purpose (Technical Summary):
# Package exports for the request logging middleware and exception handler registration.
# 🔗 Dependencies:
# Starlette middleware, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# app.main

"""
GreenMate API Middleware Package

Stack (outermost first):
    1. CORSMiddleware
    2. RequestLoggingMiddleware (request ID, timing)
    3. Exception handlers (error envelope)
    4. Application routes
"""

from .error_handling import create_error_response, register_exception_handlers
from .logging import REQUEST_ID_HEADER, RequestLoggingMiddleware

__all__ = [
    "REQUEST_ID_HEADER",
    "RequestLoggingMiddleware",
    "create_error_response",
    "register_exception_handlers",
]
