"""
Media domain services

- upload_validator: magic-number, size, decode and dimension gate
- image_processor: downscale, re-encode and thumbnail generation
"""

from .image_processor import (
    create_thumbnail,
    fit_inside,
    generate_secure_filename,
    process_and_optimize_image,
    resolve_format,
)
from .upload_validator import (
    ALLOWED_TYPES,
    MAX_DIMENSION,
    MAX_FILE_SIZE,
    MIN_DIMENSION,
    detect_mime_type,
    inspect_upload,
    sanitize_filename,
    validate_type,
    validate_uploaded_file,
)

__all__ = [
    "ALLOWED_TYPES",
    "MAX_DIMENSION",
    "MAX_FILE_SIZE",
    "MIN_DIMENSION",
    "create_thumbnail",
    "detect_mime_type",
    "fit_inside",
    "generate_secure_filename",
    "inspect_upload",
    "process_and_optimize_image",
    "resolve_format",
    "sanitize_filename",
    "validate_type",
    "validate_uploaded_file",
]
