# 📄 File: app/modules/media/domain/services/upload_validator.py
# 🧭 Purpose (Layman Explanation):
# The bouncer for photo uploads: it checks that a file really is the kind of picture it claims
# to be, is not too big or too tiny, and has a safe name, before anything else touches it.
# 🧪 Purpose (Technical Summary):
# Upload gate combining magic-number sniffing against the declared MIME type, size limits,
# Pillow structural decoding and dimension bounds. Fail-fast in a fixed order; every failure
# is a tagged UploadValidationError subclass.
# 🔗 Dependencies:
# Pillow (decode/verify), app.shared.core.exceptions, media domain models
# 🔄 Connected Modules / Calls From:
# upload_service.py (before any bytes are persisted), /uploads/validate endpoint

"""
Upload validation

Gate order (first failure wins):
1. buffer present and non-empty            -> NoFileProvidedError
2. declared size <= max_file_size          -> FileTooLargeError
3. declared type on the allow-list         -> UnsupportedTypeError
4. leading bytes match the declared type   -> TypeMismatchError
5. buffer decodes as an image              -> InvalidImageError
6. both dimensions within [10, 4096]       -> ImageTooSmallError / ImageTooLargeError
"""

import io
import posixpath
import re
from typing import Dict, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from app.modules.media.domain.models.upload import UploadCandidate, ValidationResult
from app.shared.core.exceptions import (
    FileTooLargeError,
    ImageTooLargeError,
    ImageTooSmallError,
    InvalidFilenameError,
    InvalidImageError,
    NoFileProvidedError,
    TypeMismatchError,
    UnsupportedTypeError,
    UploadValidationError,
)
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)

ALLOWED_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})
MAX_FILE_SIZE = 10 * 1024 * 1024
MIN_DIMENSION = 10
MAX_DIMENSION = 4096
MAX_FILENAME_LENGTH = 255

_JPEG_SIGNATURES = (
    b"\xff\xd8\xff",
    b"\xff\xd8\xff\xe0",
    b"\xff\xd8\xff\xe1",
    b"\xff\xd8\xff\xee",
)

FILE_SIGNATURES: Dict[str, Tuple[bytes, ...]] = {
    "image/jpeg": _JPEG_SIGNATURES,
    "image/jpg": _JPEG_SIGNATURES,
    "image/png": (b"\x89PNG\r\n\x1a\n",),
    "image/webp": (b"RIFF",),
}

# Pillow decoders allowed to touch uploaded bytes
_DECODABLE_FORMATS = ("JPEG", "PNG", "WEBP")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")


def _matches_signature(buffer: bytes, mime_type: str) -> bool:
    signatures = FILE_SIGNATURES.get(mime_type)
    if not signatures:
        return False

    if mime_type == "image/webp":
        # RIFF container: "RIFF" at 0, chunk size at 4..7, "WEBP" at 8
        return buffer[0:4] == signatures[0] and buffer[8:12] == b"WEBP"

    return any(buffer[:len(signature)] == signature for signature in signatures)


def validate_type(buffer: bytes, declared_mime_type: str) -> bool:
    """
    Check that the buffer's magic number matches the declared MIME type.

    A correctly signed PNG declared as image/jpeg fails. Types outside
    ALLOWED_TYPES always fail.
    """
    if not buffer or declared_mime_type not in ALLOWED_TYPES:
        return False
    return _matches_signature(buffer, declared_mime_type)


def detect_mime_type(buffer: bytes) -> Optional[str]:
    """Return the MIME type whose signature the buffer carries, if any."""
    if not buffer:
        return None
    for mime_type in ("image/jpeg", "image/png", "image/webp"):
        if _matches_signature(buffer, mime_type):
            return mime_type
    return None


def sanitize_filename(name: Optional[str]) -> str:
    """
    Reduce a client-supplied filename to a safe basename.

    Keeps only [a-zA-Z0-9._-] and at most 255 characters. An empty
    result means the caller must reject the upload.
    """
    if not name:
        return ""

    basename = posixpath.basename(name.replace("\\", "/"))
    cleaned = _UNSAFE_FILENAME_CHARS.sub("", basename)[:MAX_FILENAME_LENGTH]

    if cleaned in (".", ".."):
        return ""
    return cleaned


def require_safe_filename(candidate: UploadCandidate) -> str:
    """
    Sanitize the candidate's filename or reject it.

    Raises:
        InvalidFilenameError: nothing usable is left after sanitizing
    """
    safe_name = sanitize_filename(candidate.filename)
    if not safe_name:
        raise InvalidFilenameError(candidate.filename)
    return safe_name


def read_image_dimensions(buffer: bytes) -> Tuple[int, int, str]:
    """
    Fully decode the buffer and return (width, height, pillow_format).

    Raises:
        InvalidImageError: the bytes are not a well-formed image
        ImageTooLargeError: Pillow's decompression bomb guard tripped
    """
    try:
        with Image.open(io.BytesIO(buffer), formats=_DECODABLE_FORMATS) as img:
            img.verify()

        # verify() leaves the image unusable; reopen to decode pixel data
        with Image.open(io.BytesIO(buffer), formats=_DECODABLE_FORMATS) as img:
            img.load()
            width, height = img.size
            return width, height, img.format
    except Image.DecompressionBombError as e:
        raise ImageTooLargeError(maximum=MAX_DIMENSION) from e
    except (UnidentifiedImageError, OSError, EOFError, SyntaxError, ValueError) as e:
        raise InvalidImageError(reason=str(e)) from e


def validate_uploaded_file(
    candidate: Optional[UploadCandidate],
    max_file_size: int = MAX_FILE_SIZE
) -> ValidationResult:
    """
    Run the upload gate, raising on the first failed check.

    Returns the passing ValidationResult (detected type and dimensions)
    so callers do not need to decode the image again to log it.
    """
    if candidate is None or not candidate.buffer:
        raise NoFileProvidedError()

    filename = candidate.filename or None

    if candidate.size > max_file_size:
        raise FileTooLargeError(
            max_size=max_file_size,
            actual_size=candidate.size,
            filename=filename
        )

    declared_type = (candidate.content_type or "").lower()
    if declared_type not in ALLOWED_TYPES:
        raise UnsupportedTypeError(candidate.content_type, ALLOWED_TYPES, filename=filename)

    if not validate_type(candidate.buffer, declared_type):
        raise TypeMismatchError(
            declared_type=declared_type,
            detected_type=detect_mime_type(candidate.buffer),
            filename=filename
        )

    width, height, _ = read_image_dimensions(candidate.buffer)

    if width < MIN_DIMENSION or height < MIN_DIMENSION:
        raise ImageTooSmallError(width, height, MIN_DIMENSION, filename=filename)

    if width > MAX_DIMENSION or height > MAX_DIMENSION:
        raise ImageTooLargeError(MAX_DIMENSION, width=width, height=height, filename=filename)

    return ValidationResult(
        passed=True,
        detected_type=detect_mime_type(candidate.buffer),
        width=width,
        height=height,
    )


def inspect_upload(
    candidate: Optional[UploadCandidate],
    max_file_size: int = MAX_FILE_SIZE,
    check_filename: bool = True
) -> ValidationResult:
    """
    Non-raising form of the upload gate.

    With ``check_filename`` the filename must survive sanitizing, as it
    must before a real upload. The candidate is not modified.
    """
    try:
        if check_filename and candidate is not None and candidate.buffer:
            require_safe_filename(candidate)
        return validate_uploaded_file(candidate, max_file_size=max_file_size)
    except UploadValidationError as e:
        logger.info(
            f"Upload rejected: {e.error_code.value}",
            filename=candidate.filename if candidate else None,
        )
        return ValidationResult(
            passed=False,
            failure=e.error_code,
            message=e.message,
            detected_type=detect_mime_type(candidate.buffer) if candidate and candidate.buffer else None,
            details=e.details,
        )
