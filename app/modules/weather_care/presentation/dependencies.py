# 📄 File: app/modules/weather_care/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands each weather request the weather service connected to our weather source.
# 🧪 Purpose (Technical Summary):
# FastAPI dependency resolving the provider built by the application lifespan
# (app.state.weather_provider, None when no API key is configured).
# 🔗 Dependencies:
# FastAPI, weather_care application service
# 🔄 Connected Modules / Calls From:
# app.modules.weather_care.presentation.api.v1.weather_care

from fastapi import Request

from app.modules.weather_care.application.weather_care_service import WeatherCareService


def get_weather_care_service(request: Request) -> WeatherCareService:
    return WeatherCareService(getattr(request.app.state, "weather_provider", None))
