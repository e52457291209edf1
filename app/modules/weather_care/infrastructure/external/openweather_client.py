# 📄 File: app/modules/weather_care/infrastructure/external/openweather_client.py

# 🧭 Purpose (Layman Explanation):
# Asks OpenWeatherMap what the weather is like right now at a city or a map position.

# 🧪 Purpose (Technical Summary):
# OpenWeatherMap current-weather client built on the shared APIClient. Requests metric
# units, normalizes the payload into a WeatherObservation and maps every transport,
# status or payload problem to WeatherFetchFailedError. Single attempt, no fallback.

# 🔗 Dependencies:
# - aiohttp (through APIClient)
# - app.modules.weather_care.domain.models.weather

# 🔄 Connected Modules / Calls From:
# Built and closed by the app lifespan; used by WeatherCareService

from typing import Any, Dict, Optional

from aiohttp import ClientSession

from app.modules.weather_care.domain.models.weather import WeatherObservation
from app.modules.weather_care.domain.services.weather_provider import WeatherProvider
from app.shared.core.exceptions import ConfigurationError, WeatherFetchFailedError
from app.shared.infrastructure.external_apis.api_client import APIClient, APIRequestError
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)

PROVIDER_NAME = "openweathermap"
DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"


def _precipitation(payload: Dict[str, Any]) -> float:
    """Last-hour rain, else last-hour snow, else 0."""
    for key in ("rain", "snow"):
        block = payload.get(key)
        if isinstance(block, dict) and block.get("1h") is not None:
            return float(block["1h"])
    return 0.0


def parse_weather_payload(payload: Dict[str, Any]) -> WeatherObservation:
    """
    Normalize an OpenWeatherMap ``/weather`` response.

    Raises:
        WeatherFetchFailedError: required fields are missing or not numeric
    """
    try:
        main = payload["main"]
        condition = (payload.get("weather") or [{}])[0]
        wind = payload.get("wind") or {}

        return WeatherObservation(
            temperature=float(main["temp"]),
            humidity=float(main["humidity"]),
            pressure=float(main["pressure"]),
            description=str(condition.get("description", "")),
            icon=str(condition.get("icon", "")),
            wind_speed=float(wind.get("speed", 0) or 0),
            precipitation=_precipitation(payload),
        )
    except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
        raise WeatherFetchFailedError(
            provider=PROVIDER_NAME,
            reason=f"Malformed weather payload: {e}",
        ) from e


class OpenWeatherClient(APIClient, WeatherProvider):
    """Current conditions from OpenWeatherMap."""

    provider_name = PROVIDER_NAME

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 10,
        session: Optional[ClientSession] = None
    ):
        if not api_key:
            raise ConfigurationError(
                "OpenWeather API key is required for weather-based care",
                setting="OPENWEATHER_API_KEY"
            )

        super().__init__(
            base_url=base_url,
            api_name=PROVIDER_NAME,
            timeout=timeout,
            default_params={"appid": api_key, "units": "metric"},
            session=session,
        )

    async def _fetch(self, params: Dict[str, str]) -> WeatherObservation:
        try:
            payload = await self.get("weather", params=params)
        except APIRequestError as e:
            raise WeatherFetchFailedError(
                provider=PROVIDER_NAME,
                provider_status=e.status,
                reason=str(e),
            ) from e

        if not isinstance(payload, dict):
            raise WeatherFetchFailedError(
                provider=PROVIDER_NAME,
                reason="Weather payload is not a JSON object",
            )
        return parse_weather_payload(payload)

    async def get_weather_by_coordinates(self, lat: float, lon: float) -> WeatherObservation:
        return await self._fetch({"lat": str(lat), "lon": str(lon)})

    async def get_weather_by_city(self, city: str, country: Optional[str] = None) -> WeatherObservation:
        query = f"{city},{country}" if country else city
        return await self._fetch({"q": query})

    async def health_check(self) -> Dict[str, Any]:
        stats = self.get_stats()
        return {
            "status": "healthy" if self.is_initialized else "unhealthy",
            "provider": PROVIDER_NAME,
            "failed_requests": stats["failed_requests"],
            "last_error": stats["recent_errors"][-1]["error_message"] if stats["recent_errors"] else None,
        }
