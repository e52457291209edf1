import io

from starlette.datastructures import Headers, UploadFile

from app.modules.media.presentation.api.v1.uploads import _to_candidate


def _upload(data, size=None):
    return UploadFile(
        file=io.BytesIO(data),
        size=size,
        filename="fern.png",
        headers=Headers({"content-type": "image/png"}),
    )


async def test_oversized_upload_is_read_only_past_the_limit():
    candidate = await _to_candidate(_upload(b"x" * 1000, size=1000), max_file_size=100)

    assert len(candidate.buffer) == 101
    assert candidate.size == 1000
    assert candidate.content_type == "image/png"
    assert candidate.filename == "fern.png"


async def test_upload_without_declared_size_uses_bytes_read():
    small = await _to_candidate(_upload(b"x" * 40), max_file_size=100)
    large = await _to_candidate(_upload(b"x" * 1000), max_file_size=100)

    assert (len(small.buffer), small.size) == (40, 40)
    assert large.size == 101
