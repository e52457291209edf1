# 📄 File: app/modules/weather_care/application/weather_care_service.py
# 🧭 Purpose (Layman Explanation):
# Finds out the weather where you are and combines it with our care rules to tell you
# what your plants need today, plus a one-line summary of the day's weather.
# 🧪 Purpose (Technical Summary):
# Application service resolving a LocationQuery, fetching one observation from the
# injected WeatherProvider and assembling the recommendations payload. Provider
# failures propagate unchanged as WeatherFetchFailedError.
# 🔗 Dependencies:
# weather_care domain models and services
# 🔄 Connected Modules / Calls From:
# app.modules.weather_care.presentation.api.v1.weather_care (via presentation.dependencies)

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence, Union

from app.modules.weather_care.domain.models.weather import LocationQuery, WeatherObservation
from app.modules.weather_care.domain.services.recommendation_engine import generate_care_recommendations
from app.modules.weather_care.domain.services.seasonal_tips import get_seasonal_tips
from app.modules.weather_care.domain.services.weather_provider import WeatherProvider
from app.shared.core.exceptions import LocationRequiredError, ServiceUnavailableError
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)


def build_forecast(weather: WeatherObservation) -> str:
    """One-line summary of the observation."""
    forecast = (
        f"Today's weather: {weather.description} with temperature around "
        f"{weather.temperature:g}°C"
    )
    if weather.precipitation > 0:
        forecast += f" and {weather.precipitation:g}mm of precipitation"
    return forecast


class WeatherCareService:
    """Weather lookups and weather-based plant care for one provider."""

    def __init__(self, provider: Optional[WeatherProvider] = None):
        self.provider = provider

    async def _observe(self, location: LocationQuery) -> WeatherObservation:
        if not (location.has_coordinates or location.city):
            raise LocationRequiredError()
        if self.provider is None:
            raise ServiceUnavailableError("weather", "Weather provider is not configured")

        if location.has_coordinates:
            return await self.provider.get_weather_by_coordinates(location.lat, location.lon)
        return await self.provider.get_weather_by_city(location.city, location.country)

    async def get_weather_based_care_recommendations(
        self,
        location: Union[LocationQuery, Dict[str, Any]],
        plant_types: Optional[Sequence[str]] = None,
        now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Fetch current weather for a location and derive care recommendations.

        Coordinates take precedence over city when both are present.

        Raises:
            LocationRequiredError: neither coordinates nor city given
            WeatherFetchFailedError: the provider could not deliver
        """
        if not isinstance(location, LocationQuery):
            location = LocationQuery.model_validate(location)

        now = now or datetime.now(timezone.utc)
        weather = await self._observe(location)
        recommendations = generate_care_recommendations(weather, plant_types, now=now)

        logger.info(
            f"Generated {len(recommendations)} care recommendations",
            location=location.display_name(),
            temperature=weather.temperature,
        )

        return {
            "location": location.display_name(),
            "weather": weather,
            "recommendations": recommendations,
            "forecast": build_forecast(weather),
            "last_updated": now,
        }

    async def get_location_weather(self, city: str, country: Optional[str] = None) -> Dict[str, Any]:
        location = LocationQuery(city=city, country=country)
        weather = await self._observe(location)
        return {
            "location": location.display_name(),
            "weather": weather,
            "last_updated": datetime.now(timezone.utc),
        }

    async def get_coordinates_weather(self, lat: float, lon: float) -> Dict[str, Any]:
        location = LocationQuery(lat=lat, lon=lon)
        weather = await self._observe(location)
        return {
            "location": location.display_name(),
            "weather": weather,
            "last_updated": datetime.now(timezone.utc),
        }

    def get_seasonal_tips(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        return get_seasonal_tips(now)
