# 📄 File: app/modules/weather_care/domain/services/weather_provider.py
# 🧭 Purpose (Layman Explanation):
# What any weather source must be able to answer: the weather at a map position or a city.
# 🧪 Purpose (Technical Summary):
# Abstract provider contract consumed by WeatherCareService. Implementations raise
# WeatherFetchFailedError on any failure.
# 🔗 Dependencies:
# abc, weather domain models
# 🔄 Connected Modules / Calls From:
# Implemented by: infrastructure.external.openweather_client.OpenWeatherClient

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from app.modules.weather_care.domain.models.weather import WeatherObservation


class WeatherProvider(ABC):
    provider_name: str = "abstract"

    @abstractmethod
    async def get_weather_by_coordinates(self, lat: float, lon: float) -> WeatherObservation:
        """Current conditions at a coordinate pair."""

    @abstractmethod
    async def get_weather_by_city(self, city: str, country: Optional[str] = None) -> WeatherObservation:
        """Current conditions for a city, optionally narrowed by country."""

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy", "provider": self.provider_name}
