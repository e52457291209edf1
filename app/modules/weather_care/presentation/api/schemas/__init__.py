from .weather_care_schemas import (
    CareRecommendationsData,
    CareRecommendationsRequest,
    CareRecommendationsResponse,
    CoordinatesRequest,
    SeasonalTipsData,
    SeasonalTipsResponse,
    WeatherData,
    WeatherResponse,
)

__all__ = [
    "CareRecommendationsData",
    "CareRecommendationsRequest",
    "CareRecommendationsResponse",
    "CoordinatesRequest",
    "SeasonalTipsData",
    "SeasonalTipsResponse",
    "WeatherData",
    "WeatherResponse",
]
