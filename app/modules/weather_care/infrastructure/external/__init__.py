from .openweather_client import OpenWeatherClient, parse_weather_payload

__all__ = ["OpenWeatherClient", "parse_weather_payload"]
