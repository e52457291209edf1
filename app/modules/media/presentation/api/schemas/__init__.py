from .upload_schemas import (
    FOLDER_PATTERN,
    ImageMetadata,
    UploadResponse,
    UploadResult,
    ValidationResponse,
    ValidationResultSchema,
)

__all__ = [
    "FOLDER_PATTERN",
    "ImageMetadata",
    "UploadResponse",
    "UploadResult",
    "ValidationResponse",
    "ValidationResultSchema",
]
