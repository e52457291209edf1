# 📄 File: app/modules/weather_care/domain/services/recommendation_engine.py
# 🧭 Purpose (Layman Explanation):
# Looks at today's weather and the time of year and turns them into a to-do list for
# your plants, most important first.
# 🧪 Purpose (Technical Summary):
# Deterministic rule engine mapping a WeatherObservation plus the calendar month to a
# stable, priority-sorted list of CareRecommendation objects.
# 🔗 Dependencies:
# weather_care domain models, datetime
# 🔄 Connected Modules / Calls From:
# weather_care_service.py

"""
Weather-to-care rules

Rules run in a fixed order and each may add up to two recommendations:

1. temperature   > 30 °C  / < 10 °C
2. humidity      > 80 %   / < 30 %
3. precipitation > 5 mm
4. wind speed    > 10 m/s
5. condition text contains "rain", else "sun" or "clear"
6. season (exactly one)

All thresholds are strict. The result is sorted by priority, highest
first; recommendations of equal priority keep rule order.
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence

from app.modules.weather_care.domain.models.weather import (
    CareCategory,
    CarePriority,
    CareRecommendation,
    Season,
    WeatherObservation,
)

HOT_TEMPERATURE_C = 30
COLD_TEMPERATURE_C = 10
HIGH_HUMIDITY_PCT = 80
LOW_HUMIDITY_PCT = 30
HEAVY_PRECIPITATION_MM = 5
STRONG_WIND_MS = 10

# Northern hemisphere, calendar months 1-12
_SEASON_BY_MONTH = {
    3: Season.SPRING, 4: Season.SPRING, 5: Season.SPRING,
    6: Season.SUMMER, 7: Season.SUMMER, 8: Season.SUMMER,
    9: Season.FALL, 10: Season.FALL, 11: Season.FALL,
}


def season_for_month(month: int) -> Season:
    """Map a calendar month (1 = January) to its season."""
    return _SEASON_BY_MONTH.get(month, Season.WINTER)


def _recommend(
    category: CareCategory,
    priority: CarePriority,
    action: str,
    reason: str,
    icon: str,
    due_date: Optional[datetime] = None
) -> CareRecommendation:
    return CareRecommendation(
        category=category,
        priority=priority,
        action=action,
        reason=reason,
        icon=icon,
        due_date=due_date,
    )


def _temperature_rules(weather: WeatherObservation, now: datetime) -> List[CareRecommendation]:
    t = weather.temperature
    if t > HOT_TEMPERATURE_C:
        return [
            _recommend(
                CareCategory.WATERING, CarePriority.HIGH,
                "Increase watering frequency",
                f"High temperature ({t:g}°C) increases evaporation",
                "💧",
                due_date=now,
            ),
            _recommend(
                CareCategory.GENERAL, CarePriority.MEDIUM,
                "Provide shade during peak hours",
                "Protect plants from intense heat stress",
                "🌳",
            ),
        ]
    if t < COLD_TEMPERATURE_C:
        return [
            _recommend(
                CareCategory.WATERING, CarePriority.LOW,
                "Reduce watering frequency",
                f"Low temperature ({t:g}°C) reduces water evaporation",
                "💧",
            ),
            _recommend(
                CareCategory.TEMPERATURE, CarePriority.HIGH,
                "Move sensitive plants indoors",
                "Protect from potential frost damage",
                "🏠",
            ),
        ]
    return []


def _humidity_rules(weather: WeatherObservation) -> List[CareRecommendation]:
    h = weather.humidity
    if h > HIGH_HUMIDITY_PCT:
        return [
            _recommend(
                CareCategory.HUMIDITY, CarePriority.MEDIUM,
                "Ensure good air circulation",
                f"Very high humidity ({h:g}%) increases disease risk",
                "🌬️",
            ),
            _recommend(
                CareCategory.GENERAL, CarePriority.MEDIUM,
                "Check for signs of fungal diseases",
                "High humidity promotes fungal growth",
                "🔍",
            ),
        ]
    if h < LOW_HUMIDITY_PCT:
        return [
            _recommend(
                CareCategory.HUMIDITY, CarePriority.HIGH,
                "Increase humidity around plants",
                f"Low humidity ({h:g}%) can stress plants",
                "💨",
            ),
            _recommend(
                CareCategory.WATERING, CarePriority.MEDIUM,
                "Mist plants regularly",
                "Help compensate for dry air",
                "💦",
            ),
        ]
    return []


def _precipitation_rules(weather: WeatherObservation) -> List[CareRecommendation]:
    p = weather.precipitation or 0
    if p > HEAVY_PRECIPITATION_MM:
        return [
            _recommend(
                CareCategory.WATERING, CarePriority.LOW,
                "Skip outdoor watering today",
                f"Recent rainfall ({p:g}mm) provides natural watering",
                "🌧️",
            ),
            _recommend(
                CareCategory.GENERAL, CarePriority.MEDIUM,
                "Check drainage after rain",
                "Ensure plants are not waterlogged",
                "🔍",
            ),
        ]
    return []


def _wind_rules(weather: WeatherObservation) -> List[CareRecommendation]:
    w = weather.wind_speed
    if w > STRONG_WIND_MS:
        return [
            _recommend(
                CareCategory.GENERAL, CarePriority.MEDIUM,
                "Secure tall plants and containers",
                f"Strong winds ({w:g} m/s) can damage plants",
                "🌪️",
            ),
            _recommend(
                CareCategory.WATERING, CarePriority.MEDIUM,
                "Check soil moisture more frequently",
                "Wind increases water evaporation",
                "💧",
            ),
        ]
    return []


def _condition_rules(weather: WeatherObservation) -> List[CareRecommendation]:
    description = weather.description.lower()
    if "rain" in description:
        return [
            _recommend(
                CareCategory.GENERAL, CarePriority.LOW,
                "Enjoy the natural watering!",
                "Plants love natural rainwater",
                "🌿",
            )
        ]
    if "sun" in description or "clear" in description:
        return [
            _recommend(
                CareCategory.LIGHT, CarePriority.LOW,
                "Perfect day for photosynthesis",
                "Bright sunshine promotes healthy plant growth",
                "☀️",
            )
        ]
    return []


_SEASONAL_RECOMMENDATIONS = {
    Season.SPRING: (
        CareCategory.FERTILIZING, CarePriority.MEDIUM,
        "Start spring fertilizing schedule",
        "Plants are entering their active growing season",
        "🌱",
    ),
    Season.SUMMER: (
        CareCategory.WATERING, CarePriority.MEDIUM,
        "Monitor watering needs closely",
        "Summer growth requires consistent moisture",
        "🌞",
    ),
    Season.FALL: (
        CareCategory.FERTILIZING, CarePriority.LOW,
        "Reduce fertilizing frequency",
        "Plants are preparing for dormancy",
        "🍂",
    ),
    Season.WINTER: (
        CareCategory.WATERING, CarePriority.LOW,
        "Water sparingly",
        "Most plants are dormant and need less water",
        "❄️",
    ),
}


def _seasonal_rule(now: datetime) -> CareRecommendation:
    return _recommend(*_SEASONAL_RECOMMENDATIONS[season_for_month(now.month)])


def generate_care_recommendations(
    weather: WeatherObservation,
    plant_types: Optional[Sequence[str]] = None,
    now: Optional[datetime] = None
) -> List[CareRecommendation]:
    """
    Turn a weather reading into care recommendations, highest priority first.

    Args:
        weather: Current conditions
        plant_types: Accepted for forward compatibility; no rule uses it yet
        now: Clock used for the season and due dates (defaults to UTC now)

    Returns:
        Recommendations sorted by descending priority rank, stable within a rank
    """
    now = now or datetime.now(timezone.utc)

    recommendations: List[CareRecommendation] = []
    recommendations.extend(_temperature_rules(weather, now))
    recommendations.extend(_humidity_rules(weather))
    recommendations.extend(_precipitation_rules(weather))
    recommendations.extend(_wind_rules(weather))
    recommendations.extend(_condition_rules(weather))
    recommendations.append(_seasonal_rule(now))

    # sorted() is stable, so equal priorities keep rule order
    return sorted(recommendations, key=lambda r: -r.priority.rank)
