import io
import re

import pytest
from PIL import Image

from app.modules.media.domain.models.upload import ImageFormat, UploadCandidate
from app.modules.media.domain.services.image_processor import (
    create_thumbnail,
    fit_inside,
    generate_secure_filename,
    process_and_optimize_image,
    resolve_format,
)
from app.modules.media.domain.services.upload_validator import validate_uploaded_file
from app.shared.core.exceptions import ImageProcessingFailedError, UnsupportedFormatError

from tests.fakes import decode_size, encode_image

FILENAME_PATTERN = re.compile(
    r"^\d{13}-[0-9a-f]{8}-[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\.jpg$"
)


def _format_of(buffer: bytes) -> str:
    with Image.open(io.BytesIO(buffer)) as img:
        return img.format


def test_fit_inside_never_enlarges():
    assert fit_inside((400, 300), 1200, 1200) == (400, 300)
    assert fit_inside((2000, 500), 1200, 1200) == (1200, 300)
    assert fit_inside((500, 2000), 1200, 1200) == (300, 1200)
    assert fit_inside((3000, 3000), 800, 600) == (600, 600)


def test_downscales_to_bounding_box():
    processed = process_and_optimize_image(encode_image(2000, 500, "PNG"))

    assert (processed.width, processed.height) == (1200, 300)
    assert decode_size(processed.buffer) == (1200, 300)
    assert processed.format is ImageFormat.JPEG
    assert _format_of(processed.buffer) == "JPEG"


def test_small_images_keep_their_size():
    processed = process_and_optimize_image(encode_image(400, 300, "JPEG"))
    assert (processed.width, processed.height) == (400, 300)


def test_custom_bounds():
    processed = process_and_optimize_image(
        encode_image(1000, 800, "PNG"), max_width=500, max_height=500
    )
    assert (processed.width, processed.height) == (500, 400)


@pytest.mark.parametrize("output_format, pil_format, extension", [
    ("png", "PNG", ".png"),
    ("webp", "WEBP", ".webp"),
    ("JPEG", "JPEG", ".jpg"),
    (ImageFormat.WEBP, "WEBP", ".webp"),
])
def test_output_formats(output_format, pil_format, extension):
    processed = process_and_optimize_image(encode_image(64, 48, "PNG"), format=output_format)

    assert _format_of(processed.buffer) == pil_format
    assert processed.filename.endswith(extension)
    assert processed.content_type == f"image/{processed.format.value}"


def test_rgba_input_is_flattened_for_jpeg():
    rgba = encode_image(64, 64, "PNG", mode="RGBA")
    processed = process_and_optimize_image(rgba, format="jpeg")

    with Image.open(io.BytesIO(processed.buffer)) as img:
        assert img.mode == "RGB"


def test_rgba_input_keeps_alpha_for_png():
    rgba = encode_image(64, 64, "PNG", mode="RGBA")
    processed = process_and_optimize_image(rgba, format="png")

    with Image.open(io.BytesIO(processed.buffer)) as img:
        assert img.mode == "RGBA"


def test_unknown_format_is_rejected():
    with pytest.raises(UnsupportedFormatError) as exc_info:
        process_and_optimize_image(encode_image(64, 64), format="gif")
    assert exc_info.value.details["supported_formats"] == ["jpeg", "png", "webp"]


def test_resolve_format():
    assert resolve_format("WebP") is ImageFormat.WEBP
    assert resolve_format(ImageFormat.PNG) is ImageFormat.PNG
    with pytest.raises(UnsupportedFormatError):
        resolve_format("tiff")


def test_codec_failures_are_wrapped():
    with pytest.raises(ImageProcessingFailedError) as exc_info:
        process_and_optimize_image(b"definitely not an image")
    assert exc_info.value.status_code == 500
    assert exc_info.value.details["reason"]


@pytest.mark.parametrize("size", [(1600, 400), (400, 1600), (50, 50), (300, 300)])
def test_thumbnail_is_square_jpeg(size):
    thumbnail = create_thumbnail(encode_image(*size, "PNG"))

    assert decode_size(thumbnail.buffer) == (300, 300)
    assert (thumbnail.width, thumbnail.height) == (300, 300)
    assert _format_of(thumbnail.buffer) == "JPEG"
    assert thumbnail.format is ImageFormat.JPEG


def test_thumbnail_from_rgba_webp():
    thumbnail = create_thumbnail(encode_image(120, 80, "WEBP", mode="RGBA"), size=64)
    assert decode_size(thumbnail.buffer) == (64, 64)


def test_thumbnail_failure_is_wrapped():
    with pytest.raises(ImageProcessingFailedError) as exc_info:
        create_thumbnail(b"\x89PNG\r\n\x1a\nbroken")
    assert exc_info.value.details["operation"] == "Thumbnail creation"


def test_generated_filenames_are_unique_and_sortable():
    names = {generate_secure_filename("fern.png", ".jpg") for _ in range(50)}

    assert len(names) == 50
    for name in names:
        assert FILENAME_PATTERN.match(name)


def test_validated_uploads_always_process(png_bytes, jpeg_bytes, webp_bytes):
    for buffer, content_type in [
        (png_bytes, "image/png"),
        (jpeg_bytes, "image/jpeg"),
        (webp_bytes, "image/webp"),
        (encode_image(4096, 10, "PNG"), "image/png"),
        (encode_image(10, 10, "PNG", mode="RGBA"), "image/png"),
    ]:
        validate_uploaded_file(UploadCandidate(buffer, content_type, "plant"))

        for output_format in ImageFormat:
            processed = process_and_optimize_image(buffer, format=output_format)
            assert processed.width <= 1200 and processed.height <= 1200
        assert decode_size(create_thumbnail(buffer).buffer) == (300, 300)
