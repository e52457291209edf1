# 📄 File: app/modules/weather_care/presentation/api/v1/weather_care.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for checking the weather and getting plant care advice based on it.
# 🧪 Purpose (Technical Summary):
# FastAPI routes over WeatherCareService, created by a factory that binds the shared
# slowapi Limiter with the configured weather rate limit.
# 🔗 Dependencies:
# FastAPI, slowapi, weather_care application service and schemas
# 🔄 Connected Modules / Calls From:
# app.api.v1.router

"""
Weather Care API Endpoints

Endpoints:
- POST /recommendations: Care recommendations for a location's current weather
- GET /weather/{city}: Current weather for a city
- POST /weather/coordinates: Current weather for a coordinate pair
- GET /tips: Seasonal care tips
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request
from slowapi import Limiter

from app.modules.weather_care.application.weather_care_service import WeatherCareService
from app.modules.weather_care.presentation.api.schemas.weather_care_schemas import (
    CareRecommendationsRequest,
    CareRecommendationsResponse,
    CoordinatesRequest,
    SeasonalTipsResponse,
    WeatherResponse,
)
from app.modules.weather_care.presentation.dependencies import get_weather_care_service
from app.shared.config.settings import Settings

_PROVIDER_ERRORS = {
    400: {"description": "Location missing"},
    429: {"description": "Too many requests"},
    502: {"description": "Weather provider failure"},
    503: {"description": "Weather provider not configured"},
}


def create_weather_care_router(limiter: Limiter, settings: Settings) -> APIRouter:
    """Build the weather-care router with the configured rate limit."""
    router = APIRouter()

    @router.post(
        "/recommendations",
        response_model=CareRecommendationsResponse,
        summary="Weather-based care recommendations",
        responses=_PROVIDER_ERRORS,
    )
    @limiter.limit(settings.WEATHER_RATE_LIMIT)
    async def get_care_recommendations(
        request: Request,
        body: CareRecommendationsRequest,
        service: WeatherCareService = Depends(get_weather_care_service),
    ) -> CareRecommendationsResponse:
        data = await service.get_weather_based_care_recommendations(
            body.location, body.plant_types
        )
        return CareRecommendationsResponse(data=data)

    @router.get(
        "/weather/{city}",
        response_model=WeatherResponse,
        summary="Current weather for a city",
        responses=_PROVIDER_ERRORS,
    )
    @limiter.limit(settings.WEATHER_RATE_LIMIT)
    async def get_city_weather(
        request: Request,
        city: str = Path(..., min_length=1, max_length=100),
        country: Optional[str] = Query(None, min_length=1, max_length=100),
        service: WeatherCareService = Depends(get_weather_care_service),
    ) -> WeatherResponse:
        data = await service.get_location_weather(city, country)
        return WeatherResponse(data=data)

    @router.post(
        "/weather/coordinates",
        response_model=WeatherResponse,
        summary="Current weather for coordinates",
        responses=_PROVIDER_ERRORS,
    )
    @limiter.limit(settings.WEATHER_RATE_LIMIT)
    async def get_coordinates_weather(
        request: Request,
        body: CoordinatesRequest,
        service: WeatherCareService = Depends(get_weather_care_service),
    ) -> WeatherResponse:
        data = await service.get_coordinates_weather(body.lat, body.lon)
        return WeatherResponse(data=data)

    @router.get(
        "/tips",
        response_model=SeasonalTipsResponse,
        summary="Seasonal care tips",
    )
    async def get_seasonal_tips(
        service: WeatherCareService = Depends(get_weather_care_service),
    ) -> SeasonalTipsResponse:
        return SeasonalTipsResponse(data=service.get_seasonal_tips())

    return router
