from .weather_care import create_weather_care_router

__all__ = ["create_weather_care_router"]
