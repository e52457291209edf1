import pytest

from app.modules.media.application.upload_service import ImageUploadService
from app.modules.media.domain.models.upload import UploadCandidate
from app.shared.core.exceptions import (
    ErrorCode,
    InvalidFilenameError,
    NoFileProvidedError,
    StorageUploadError,
    TooManyFilesError,
    TypeMismatchError,
    UnsupportedFormatError,
)

from tests.fakes import FakeStorage, decode_size, encode_image


def _candidate(buffer, content_type="image/png", filename="monstera.png"):
    return UploadCandidate(buffer=buffer, content_type=content_type, filename=filename)


async def test_process_file_upload_stores_image_and_thumbnail(fake_storage):
    service = ImageUploadService(fake_storage)
    result = await service.process_file_upload(_candidate(encode_image(2000, 500, "PNG")))

    original, thumbnail = fake_storage.uploads
    assert original["folder"] == "uploads"
    assert original["content_type"] == "image/jpeg"
    assert decode_size(original["data"]) == (1200, 300)

    assert thumbnail["folder"] == "uploads/thumbnails"
    assert thumbnail["content_type"] == "image/jpeg"
    assert decode_size(thumbnail["data"]) == (300, 300)

    assert result["original_url"] == f"https://cdn.test/{original['path']}"
    assert result["thumbnail_url"] == f"https://cdn.test/{thumbnail['path']}"

    metadata = result["metadata"]
    assert metadata["format"] == "jpeg"
    assert (metadata["width"], metadata["height"]) == (1200, 300)
    assert (metadata["original_width"], metadata["original_height"]) == (2000, 500)
    assert metadata["original_filename"] == "monstera.png"
    assert metadata["filename"] == original["filename"]
    assert metadata["size_bytes"] == len(original["data"])


async def test_thumbnail_is_optional(fake_storage, png_bytes):
    service = ImageUploadService(fake_storage)
    result = await service.process_file_upload(_candidate(png_bytes), create_thumbnail_image=False)

    assert result["thumbnail_url"] is None
    assert len(fake_storage.uploads) == 1


async def test_custom_options_and_folder(fake_storage, jpeg_bytes):
    service = ImageUploadService(fake_storage)
    result = await service.process_file_upload(
        _candidate(jpeg_bytes, "image/jpeg", "fern.jpg"),
        folder="plants/ferns/",
        max_width=320,
        max_height=320,
        format="webp",
    )

    original, thumbnail = fake_storage.uploads
    assert original["folder"] == "plants/ferns/"
    assert original["content_type"] == "image/webp"
    assert original["filename"].endswith(".webp")
    assert thumbnail["folder"] == "plants/ferns/thumbnails"
    assert (result["metadata"]["width"], result["metadata"]["height"]) == (320, 240)


async def test_settings_supply_defaults(fake_storage, settings, png_bytes):
    settings.IMAGE_OUTPUT_FORMAT = "png"
    settings.THUMBNAIL_SIZE = 120
    service = ImageUploadService(fake_storage, settings)

    await service.process_file_upload(_candidate(png_bytes))

    original, thumbnail = fake_storage.uploads
    assert original["content_type"] == "image/png"
    assert decode_size(thumbnail["data"]) == (120, 120)


async def test_validation_failure_stores_nothing(fake_storage, png_bytes):
    service = ImageUploadService(fake_storage)

    with pytest.raises(TypeMismatchError):
        await service.process_file_upload(_candidate(png_bytes, "image/jpeg", "photo.jpg"))
    assert fake_storage.uploads == []


async def test_missing_file_is_reported_before_filename(fake_storage):
    service = ImageUploadService(fake_storage)

    with pytest.raises(NoFileProvidedError):
        await service.process_file_upload(_candidate(b"", filename=""))


async def test_unsafe_filename_is_rejected(fake_storage, png_bytes):
    service = ImageUploadService(fake_storage)

    with pytest.raises(InvalidFilenameError) as exc_info:
        await service.process_file_upload(_candidate(png_bytes, filename="???"))
    assert exc_info.value.details["original_name"] == "???"
    assert fake_storage.uploads == []


async def test_traversal_filename_is_sanitized(fake_storage, png_bytes):
    service = ImageUploadService(fake_storage)
    result = await service.process_file_upload(_candidate(png_bytes, filename="../../etc/cactus.png"))

    assert result["metadata"]["original_filename"] == "cactus.png"
    assert all(".." not in upload["path"] for upload in fake_storage.uploads)


async def test_unknown_format_fails_before_storage(fake_storage, png_bytes):
    service = ImageUploadService(fake_storage)

    with pytest.raises(UnsupportedFormatError):
        await service.process_file_upload(_candidate(png_bytes), format="bmp")
    assert fake_storage.uploads == []


async def test_storage_errors_propagate(png_bytes):
    service = ImageUploadService(FakeStorage(fail=True))

    with pytest.raises(StorageUploadError) as exc_info:
        await service.process_file_upload(_candidate(png_bytes))
    assert exc_info.value.error_code is ErrorCode.STORAGE_UPLOAD_FAILED
    assert exc_info.value.details["backend"] == "fake"


async def test_batch_upload(fake_storage, png_bytes, jpeg_bytes):
    service = ImageUploadService(fake_storage)
    results = await service.process_uploads([
        _candidate(png_bytes),
        _candidate(jpeg_bytes, "image/jpeg", "pothos.jpg"),
    ])

    assert [r["metadata"]["original_filename"] for r in results] == ["monstera.png", "pothos.jpg"]
    assert len(fake_storage.uploads) == 4


async def test_batch_with_one_bad_file_stores_nothing(fake_storage, png_bytes):
    service = ImageUploadService(fake_storage)

    with pytest.raises(TypeMismatchError):
        await service.process_uploads([
            _candidate(png_bytes),
            _candidate(png_bytes, "image/webp", "fake.webp"),
        ])
    assert fake_storage.uploads == []


async def test_batch_limits(fake_storage, png_bytes):
    service = ImageUploadService(fake_storage)

    with pytest.raises(NoFileProvidedError):
        await service.process_uploads([])

    with pytest.raises(TooManyFilesError) as exc_info:
        await service.process_uploads([_candidate(png_bytes) for _ in range(6)])
    assert exc_info.value.details == {"max_files": 5, "received": 6}
    assert fake_storage.uploads == []


async def test_validate_does_not_raise(fake_storage, png_bytes):
    service = ImageUploadService(fake_storage)

    passed = await service.validate(_candidate(png_bytes))
    failed = await service.validate(_candidate(encode_image(5, 5, "PNG")))

    assert passed.passed is True
    assert (passed.width, passed.height) == (640, 480)
    assert failed.failure is ErrorCode.DIMENSION_OUT_OF_RANGE
    assert fake_storage.uploads == []


async def test_validate_rejects_what_upload_rejects(fake_storage, png_bytes):
    service = ImageUploadService(fake_storage)
    candidate = _candidate(png_bytes, filename="!!!")

    result = await service.validate(candidate)

    assert result.passed is False
    assert result.failure is ErrorCode.INVALID_FILENAME
    assert result.details == {"original_name": "!!!"}
    assert candidate.filename == "!!!"

    with pytest.raises(InvalidFilenameError):
        await service.process_file_upload(candidate)
    assert fake_storage.uploads == []
