import pytest

from app.modules.media.domain.models.upload import UploadCandidate
from app.modules.media.domain.services.upload_validator import (
    detect_mime_type,
    inspect_upload,
    sanitize_filename,
    validate_type,
    validate_uploaded_file,
)
from app.shared.core.exceptions import (
    DimensionOutOfRangeError,
    ErrorCode,
    FileTooLargeError,
    ImageTooLargeError,
    ImageTooSmallError,
    InvalidImageError,
    NoFileProvidedError,
    TypeMismatchError,
    UnsupportedTypeError,
    UploadValidationError,
)

from tests.fakes import encode_image

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


def _samples():
    return {
        "image/jpeg": encode_image(20, 20, "JPEG"),
        "image/png": encode_image(20, 20, "PNG"),
        "image/webp": encode_image(20, 20, "WEBP"),
    }


@pytest.mark.parametrize("actual", ["image/jpeg", "image/png", "image/webp"])
@pytest.mark.parametrize("declared", ["image/jpeg", "image/png", "image/webp"])
def test_validate_type_requires_declared_signature(actual, declared):
    buffer = _samples()[actual]
    assert validate_type(buffer, declared) is (actual == declared)


def test_validate_type_accepts_jpg_alias():
    assert validate_type(encode_image(20, 20, "JPEG"), "image/jpg") is True


def test_validate_type_webp_needs_webp_marker():
    webp = encode_image(20, 20, "WEBP")
    assert validate_type(webp, "image/webp") is True

    broken = webp[:8] + b"WAVE" + webp[12:]
    assert validate_type(broken, "image/webp") is False


def test_validate_type_rejects_unknown_types_and_empty_buffers():
    assert validate_type(encode_image(20, 20, "GIF"), "image/gif") is False
    assert validate_type(b"", "image/png") is False


def test_detect_mime_type():
    for mime_type, buffer in _samples().items():
        assert detect_mime_type(buffer) == mime_type
    assert detect_mime_type(b"GIF89a....") is None
    assert detect_mime_type(b"") is None


@pytest.mark.parametrize(
    "name, expected",
    [
        ("../../etc/passwd", "passwd"),
        ("!!!", ""),
        ("..\\..\\windows\\win.ini", "win.ini"),
        ("my plant (1).jpg", "myplant1.jpg"),
        ("fern_2024-06.PNG", "fern_2024-06.PNG"),
        ("..", ""),
        ("uploads/", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_sanitize_filename(name, expected):
    assert sanitize_filename(name) == expected


def test_sanitize_filename_truncates_to_255():
    assert len(sanitize_filename("a" * 300 + ".jpg")) == 255


def test_sanitized_traversal_never_keeps_dotdot():
    for name in ["../../etc/passwd", "..\\secret.png", "a/../../b.jpg"]:
        assert ".." not in sanitize_filename(name)


def test_gate_rejects_missing_file():
    with pytest.raises(NoFileProvidedError):
        validate_uploaded_file(None)
    with pytest.raises(NoFileProvidedError):
        validate_uploaded_file(UploadCandidate(buffer=b"", content_type="image/png", filename="a.png"))


def test_gate_rejects_declared_size_over_limit(png_bytes):
    candidate = UploadCandidate(png_bytes, "image/png", "big.png", size=11 * 1024 * 1024)
    with pytest.raises(FileTooLargeError) as exc_info:
        validate_uploaded_file(candidate)
    assert exc_info.value.status_code == 413
    assert exc_info.value.details["actual_size"] == 11 * 1024 * 1024


def test_gate_honours_custom_size_limit(png_bytes):
    with pytest.raises(FileTooLargeError):
        validate_uploaded_file(UploadCandidate(png_bytes, "image/png", "a.png"), max_file_size=100)


def test_gate_rejects_types_outside_allow_list():
    gif = encode_image(20, 20, "GIF")
    with pytest.raises(UnsupportedTypeError) as exc_info:
        validate_uploaded_file(UploadCandidate(gif, "image/gif", "a.gif"))
    assert exc_info.value.status_code == 415


def test_gate_rejects_signature_mismatch(png_bytes):
    with pytest.raises(TypeMismatchError) as exc_info:
        validate_uploaded_file(UploadCandidate(png_bytes, "image/jpeg", "photo.jpg"))
    assert exc_info.value.details["detected_type"] == "image/png"


def test_gate_rejects_undecodable_image():
    garbage = PNG_HEADER + b"not really a png" * 4
    with pytest.raises(InvalidImageError):
        validate_uploaded_file(UploadCandidate(garbage, "image/png", "broken.png"))


def test_gate_rejects_too_small_dimensions():
    tiny = encode_image(5, 40, "PNG")
    with pytest.raises(ImageTooSmallError) as exc_info:
        validate_uploaded_file(UploadCandidate(tiny, "image/png", "tiny.png"))
    assert exc_info.value.error_code is ErrorCode.DIMENSION_OUT_OF_RANGE
    assert exc_info.value.details["bound"] == "too_small"


def test_gate_rejects_too_large_dimensions():
    wide = encode_image(5000, 20, "PNG")
    with pytest.raises(ImageTooLargeError) as exc_info:
        validate_uploaded_file(UploadCandidate(wide, "image/png", "wide.png"))
    assert isinstance(exc_info.value, DimensionOutOfRangeError)
    assert exc_info.value.details["bound"] == "too_large"


def test_gate_boundaries_are_inclusive():
    for width, height in [(10, 10), (4096, 10)]:
        result = validate_uploaded_file(
            UploadCandidate(encode_image(width, height, "PNG"), "image/png", "edge.png")
        )
        assert result.passed is True


def test_first_failure_wins(png_bytes):
    # Oversized and mismatched: size is checked first
    candidate = UploadCandidate(png_bytes, "image/jpeg", "a.jpg", size=20 * 1024 * 1024)
    with pytest.raises(FileTooLargeError):
        validate_uploaded_file(candidate)


def test_gate_passes_valid_upload(jpeg_bytes):
    result = validate_uploaded_file(UploadCandidate(jpeg_bytes, "image/jpeg", "plant.jpg"))
    assert result.passed is True
    assert result.failure is None
    assert (result.width, result.height) == (640, 480)
    assert result.detected_type == "image/jpeg"


def test_declared_type_is_case_insensitive(png_bytes):
    assert validate_uploaded_file(UploadCandidate(png_bytes, "IMAGE/PNG", "a.png")).passed


def test_validation_errors_are_client_faults(png_bytes):
    with pytest.raises(UploadValidationError) as exc_info:
        validate_uploaded_file(UploadCandidate(png_bytes, "image/webp", "a.webp"))
    assert 400 <= exc_info.value.status_code < 500


def test_inspect_upload_reports_failure_code(png_bytes):
    result = inspect_upload(UploadCandidate(png_bytes, "image/jpeg", "a.jpg"))
    assert result.passed is False
    assert result.failure is ErrorCode.TYPE_MISMATCH
    assert result.detected_type == "image/png"
    assert result.to_dict()["failure"] == "TYPE_MISMATCH"


def test_inspect_upload_passes(webp_bytes):
    result = inspect_upload(UploadCandidate(webp_bytes, "image/webp", "a.webp"))
    assert result.passed is True
    assert result.failure is None


def test_inspect_upload_handles_missing_file():
    result = inspect_upload(None)
    assert result.passed is False
    assert result.failure is ErrorCode.NO_FILE_PROVIDED


def test_inspect_upload_checks_filename(png_bytes):
    candidate = UploadCandidate(png_bytes, "image/png", "???")

    rejected = inspect_upload(candidate)
    assert rejected.failure is ErrorCode.INVALID_FILENAME
    assert candidate.filename == "???"

    assert inspect_upload(candidate, check_filename=False).passed is True
    assert inspect_upload(None).failure is ErrorCode.NO_FILE_PROVIDED
