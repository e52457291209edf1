import pytest

from app.shared.config.settings import Settings

from tests.fakes import FakeStorage, FakeWeatherProvider, encode_image


@pytest.fixture
def png_bytes():
    return encode_image(640, 480, "PNG")


@pytest.fixture
def jpeg_bytes():
    return encode_image(640, 480, "JPEG")


@pytest.fixture
def webp_bytes():
    return encode_image(640, 480, "WEBP")


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def fake_weather():
    return FakeWeatherProvider()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        ENVIRONMENT="test",
        LOG_FORMAT="text",
        LOG_LEVEL="WARNING",
        RATE_LIMIT_ENABLED=False,
        STORAGE_BACKEND="local",
        STORAGE_LOCAL_ROOT=str(tmp_path / "storage"),
        OPENWEATHER_API_KEY=None,
    )
