# 📄 File: app/modules/media/domain/models/upload.py
# 🧭 Purpose (Layman Explanation):
# Describes a photo somebody is uploading, what we concluded after checking it,
# and the cleaned-up photo we actually store.
# 🧪 Purpose (Technical Summary):
# Request-scoped value objects for the upload pipeline: UploadCandidate (raw input),
# ValidationResult (tagged pass/fail outcome), ProcessedImage (re-encoded artifact)
# and the ImageFormat enum of supported output encodings.
# 🔗 Dependencies:
# dataclasses, enum, app.shared.core.exceptions.ErrorCode
# 🔄 Connected Modules / Calls From:
# upload_validator.py, image_processor.py, upload_service.py, upload routes

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from app.shared.core.exceptions import ErrorCode


class ImageFormat(str, Enum):
    """Output encodings supported by the image normalizer."""
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"

    @property
    def extension(self) -> str:
        return {"jpeg": ".jpg", "png": ".png", "webp": ".webp"}[self.value]

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def pil_format(self) -> str:
        return self.value.upper()


@dataclass
class UploadCandidate:
    """
    Raw upload as received by a request handler.

    ``size`` is the size the client declared; it defaults to the length
    of the buffer when the transport did not report one.
    """
    buffer: Optional[bytes]
    content_type: Optional[str]
    filename: str = ""
    size: Optional[int] = None

    def __post_init__(self):
        if self.size is None:
            self.size = len(self.buffer) if self.buffer else 0


@dataclass
class ValidationResult:
    """Outcome of the upload gate, tagged with the failing error code."""
    passed: bool
    failure: Optional[ErrorCode] = None
    message: Optional[str] = None
    detected_type: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "failure": self.failure.value if self.failure else None,
            "message": self.message,
            "detected_type": self.detected_type,
            "width": self.width,
            "height": self.height,
            "details": self.details,
        }


@dataclass
class ProcessedImage:
    """Re-encoded image ready for storage."""
    buffer: bytes
    filename: str
    format: ImageFormat
    width: int
    height: int

    @property
    def size_bytes(self) -> int:
        return len(self.buffer)

    @property
    def content_type(self) -> str:
        return self.format.mime_type

    def metadata(self) -> Dict[str, Any]:
        return {
            "format": self.format.value,
            "width": self.width,
            "height": self.height,
            "size_bytes": self.size_bytes,
        }
