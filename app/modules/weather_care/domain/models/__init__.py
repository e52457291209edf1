from .weather import (
    CareCategory,
    CarePriority,
    CareRecommendation,
    LocationQuery,
    Season,
    SeasonalTip,
    WeatherObservation,
)

__all__ = [
    "CareCategory",
    "CarePriority",
    "CareRecommendation",
    "LocationQuery",
    "Season",
    "SeasonalTip",
    "WeatherObservation",
]
