import io
from typing import List, Optional, Tuple

from PIL import Image

from app.modules.weather_care.domain.models.weather import WeatherObservation
from app.modules.weather_care.domain.services.weather_provider import WeatherProvider
from app.shared.core.exceptions import StorageUploadError
from app.shared.infrastructure.storage.base import ObjectStorage, build_object_path


def encode_image(
    width: int,
    height: int,
    format: str = "PNG",
    mode: str = "RGB",
    color=(34, 139, 34),
) -> bytes:
    if mode == "RGBA" and len(color) == 3:
        color = (*color, 128)
    img = Image.new(mode, (width, height), color)
    output = io.BytesIO()
    img.save(output, format=format)
    return output.getvalue()


def decode_size(buffer: bytes) -> Tuple[int, int]:
    with Image.open(io.BytesIO(buffer)) as img:
        return img.size


class FakeStorage(ObjectStorage):
    backend_name = "fake"

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads: List[dict] = []
        self.initialized = False
        self.closed = False

    async def initialize(self):
        self.initialized = True

    async def close(self):
        self.closed = True

    async def upload(self, data, filename, folder="uploads", content_type="application/octet-stream"):
        path = build_object_path(folder, filename)
        if self.fail:
            raise StorageUploadError("Upload failed: bucket unavailable", path=path, backend=self.backend_name)
        self.uploads.append({
            "path": path,
            "folder": folder,
            "filename": filename,
            "data": data,
            "content_type": content_type,
        })
        return f"https://cdn.test/{path}"


class FakeWeatherProvider(WeatherProvider):
    provider_name = "fake-weather"

    def __init__(self, observation: Optional[WeatherObservation] = None, error: Optional[Exception] = None):
        self.observation = observation or WeatherObservation(
            temperature=22,
            humidity=55,
            pressure=1012,
            description="few clouds",
            icon="02d",
            wind_speed=3,
        )
        self.error = error
        self.calls: List[tuple] = []

    async def get_weather_by_coordinates(self, lat, lon):
        self.calls.append(("coordinates", lat, lon))
        if self.error:
            raise self.error
        return self.observation

    async def get_weather_by_city(self, city, country=None):
        self.calls.append(("city", city, country))
        if self.error:
            raise self.error
        return self.observation
