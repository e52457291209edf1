from .recommendation_engine import generate_care_recommendations, season_for_month
from .seasonal_tips import SEASONAL_TIPS, get_seasonal_tips
from .weather_provider import WeatherProvider

__all__ = [
    "SEASONAL_TIPS",
    "WeatherProvider",
    "generate_care_recommendations",
    "get_seasonal_tips",
    "season_for_month",
]
