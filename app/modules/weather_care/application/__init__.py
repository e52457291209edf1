from .weather_care_service import WeatherCareService, build_forecast

__all__ = ["WeatherCareService", "build_forecast"]
