# 📄 File: app/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types GreenMate uses to communicate
# what went wrong in a clear, organized way instead of generic error messages.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# tagged error codes, error details, and serialization for API error responses.
# 🔗 Dependencies:
# FastAPI status constants, enum, typing
# 🔄 Connected Modules / Calls From:
# Upload validator and image normalizer, weather-care service, storage backends,
# API exception handlers, route handlers

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import status


class ErrorCode(str, Enum):
    """Discriminant carried by every GreenMate exception."""
    # Upload validation (client fault)
    NO_FILE_PROVIDED = "NO_FILE_PROVIDED"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    TOO_MANY_FILES = "TOO_MANY_FILES"
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    INVALID_FILENAME = "INVALID_FILENAME"
    INVALID_IMAGE = "INVALID_IMAGE"
    DIMENSION_OUT_OF_RANGE = "DIMENSION_OUT_OF_RANGE"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"

    # Processing (server fault)
    IMAGE_PROCESSING_FAILED = "IMAGE_PROCESSING_FAILED"
    STORAGE_UPLOAD_FAILED = "STORAGE_UPLOAD_FAILED"

    # Weather care
    LOCATION_REQUIRED = "LOCATION_REQUIRED"
    WEATHER_FETCH_FAILED = "WEATHER_FETCH_FAILED"

    # Platform
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    HTTP_ERROR = "HTTP_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class GreenMateException(Exception):
    """
    Base exception class for the GreenMate application.
    All custom exceptions should inherit from this class.
    """

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[ErrorCode] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code.value,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# UPLOAD VALIDATION EXCEPTIONS
# =============================================================================

class UploadValidationError(GreenMateException):
    """
    Base class for rejected uploads.
    Always a client fault; nothing has been persisted when it is raised.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[Dict[str, Any]] = None,
        filename: Optional[str] = None
    ):
        if not details:
            details = {}
        if filename:
            details["filename"] = filename

        super().__init__(
            message=message,
            status_code=status_code,
            details=details
        )


class NoFileProvidedError(UploadValidationError):
    error_code = ErrorCode.NO_FILE_PROVIDED

    def __init__(self, message: str = "No file provided", **kwargs):
        super().__init__(message, **kwargs)


class FileTooLargeError(UploadValidationError):
    """Raised when a file exceeds the upload size limit."""

    error_code = ErrorCode.FILE_TOO_LARGE

    def __init__(
        self,
        max_size: int,
        actual_size: Optional[int] = None,
        message: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", None) or {}
        details["max_size"] = max_size
        if actual_size is not None:
            details["actual_size"] = actual_size

        super().__init__(
            message or f"File too large. Maximum size: {max_size / 1024 / 1024:g}MB",
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            details=details,
            **kwargs
        )


class TooManyFilesError(UploadValidationError):
    error_code = ErrorCode.TOO_MANY_FILES

    def __init__(self, max_files: int, received: int):
        super().__init__(
            f"Maximum {max_files} files allowed",
            details={"max_files": max_files, "received": received}
        )


class UnsupportedTypeError(UploadValidationError):
    """Raised when the declared MIME type is not on the allow-list."""

    error_code = ErrorCode.UNSUPPORTED_TYPE

    def __init__(self, declared_type: Optional[str], allowed_types, **kwargs):
        allowed = sorted(allowed_types)
        super().__init__(
            f"Invalid file type. Allowed types: {', '.join(allowed)}",
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            details={"declared_type": declared_type, "allowed_types": allowed},
            **kwargs
        )


class TypeMismatchError(UploadValidationError):
    """Raised when file content does not match its declared MIME type."""

    error_code = ErrorCode.TYPE_MISMATCH

    def __init__(
        self,
        declared_type: str,
        detected_type: Optional[str] = None,
        **kwargs
    ):
        super().__init__(
            "File type validation failed. The file content does not match the declared MIME type.",
            details={"declared_type": declared_type, "detected_type": detected_type},
            **kwargs
        )


class InvalidFilenameError(UploadValidationError):
    error_code = ErrorCode.INVALID_FILENAME

    def __init__(self, original_name: Optional[str] = None):
        super().__init__(
            "Invalid filename",
            details={"original_name": original_name}
        )


class InvalidImageError(UploadValidationError):
    error_code = ErrorCode.INVALID_IMAGE

    def __init__(self, reason: Optional[str] = None, **kwargs):
        details = {"reason": reason} if reason else {}
        super().__init__("Invalid image file", details=details, **kwargs)


class DimensionOutOfRangeError(UploadValidationError):
    """
    Raised when decoded image dimensions fall outside the accepted range.
    The ``bound`` detail tells callers which side was violated.
    """

    error_code = ErrorCode.DIMENSION_OUT_OF_RANGE
    bound = "out_of_range"

    def __init__(
        self,
        message: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
        limit: Optional[int] = None,
        **kwargs
    ):
        super().__init__(
            message,
            details={
                "bound": self.bound,
                "width": width,
                "height": height,
                "limit": limit,
            },
            **kwargs
        )


class ImageTooSmallError(DimensionOutOfRangeError):
    bound = "too_small"

    def __init__(self, width: int, height: int, minimum: int, **kwargs):
        super().__init__(
            f"Image dimensions too small. Minimum: {minimum}x{minimum}",
            width=width,
            height=height,
            limit=minimum,
            **kwargs
        )


class ImageTooLargeError(DimensionOutOfRangeError):
    bound = "too_large"

    def __init__(
        self,
        maximum: int,
        width: Optional[int] = None,
        height: Optional[int] = None,
        **kwargs
    ):
        super().__init__(
            f"Image dimensions too large. Maximum: {maximum}x{maximum}",
            width=width,
            height=height,
            limit=maximum,
            **kwargs
        )


class UnsupportedFormatError(GreenMateException):
    """Raised when an unknown output format is requested for re-encoding."""

    error_code = ErrorCode.UNSUPPORTED_FORMAT

    def __init__(self, requested_format: Any, supported_formats=None):
        super().__init__(
            message=f"Unsupported format: {requested_format}",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={
                "requested_format": str(requested_format),
                "supported_formats": list(supported_formats or []),
            }
        )


# =============================================================================
# PROCESSING & STORAGE EXCEPTIONS
# =============================================================================

class ImageProcessingFailedError(GreenMateException):
    """
    Raised when the image codec fails while decoding, resizing or encoding.
    The codec's own message is preserved for diagnostics.
    """

    error_code = ErrorCode.IMAGE_PROCESSING_FAILED

    def __init__(self, reason: str, operation: str = "Image processing"):
        super().__init__(
            message=f"{operation} failed: {reason}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"operation": operation, "reason": reason}
        )


class StorageUploadError(GreenMateException):
    error_code = ErrorCode.STORAGE_UPLOAD_FAILED

    def __init__(
        self,
        message: str = "Upload failed",
        path: Optional[str] = None,
        backend: Optional[str] = None
    ):
        details = {}
        if path:
            details["path"] = path
        if backend:
            details["backend"] = backend

        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=details
        )


# =============================================================================
# WEATHER CARE EXCEPTIONS
# =============================================================================

class LocationRequiredError(GreenMateException):
    error_code = ErrorCode.LOCATION_REQUIRED

    def __init__(
        self,
        message: str = "Location coordinates or city name is required"
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST
        )


class WeatherFetchFailedError(GreenMateException):
    """
    Raised when the weather provider cannot deliver an observation.
    Terminal for the request: no retry, no fallback data.
    """

    error_code = ErrorCode.WEATHER_FETCH_FAILED

    def __init__(
        self,
        message: str = "Failed to fetch weather data",
        provider: Optional[str] = None,
        provider_status: Optional[int] = None,
        reason: Optional[str] = None
    ):
        details = {}
        if provider:
            details["provider"] = provider
        if provider_status is not None:
            details["provider_status"] = provider_status
        if reason:
            details["reason"] = reason

        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=details
        )


# =============================================================================
# PLATFORM EXCEPTIONS
# =============================================================================

class RequestValidationFailedError(GreenMateException):
    error_code = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str = "Validation failed", errors: Optional[list] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"errors": errors or []}
        )


class RateLimitExceededError(GreenMateException):
    error_code = ErrorCode.RATE_LIMIT_EXCEEDED

    def __init__(self, limit: Optional[str] = None):
        details = {"limit": limit} if limit else {}
        super().__init__(
            message="You have exceeded the rate limit for this endpoint.",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            details=details
        )


class ConfigurationError(GreenMateException):
    """Raised when a component is constructed without required settings."""

    error_code = ErrorCode.CONFIGURATION_ERROR

    def __init__(self, message: str, setting: Optional[str] = None):
        details = {"setting": setting} if setting else {}
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details
        )


class ServiceUnavailableError(GreenMateException):
    error_code = ErrorCode.SERVICE_UNAVAILABLE

    def __init__(self, service: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"{service} is not available",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details={"service": service}
        )
