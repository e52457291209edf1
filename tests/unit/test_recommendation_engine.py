from datetime import datetime, timezone

import pytest

from app.modules.weather_care.domain.models.weather import (
    CareCategory,
    CarePriority,
    Season,
    WeatherObservation,
)
from app.modules.weather_care.domain.services.recommendation_engine import (
    generate_care_recommendations,
    season_for_month,
)
from app.modules.weather_care.domain.services.seasonal_tips import get_seasonal_tips

JULY = datetime(2024, 7, 15, 12, 0, tzinfo=timezone.utc)
JANUARY = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def _weather(**overrides):
    values = {
        "temperature": 20,
        "humidity": 50,
        "pressure": 1013,
        "description": "overcast clouds",
        "wind_speed": 2,
        "precipitation": 0,
    }
    values.update(overrides)
    return WeatherObservation(**values)


def _actions(recommendations):
    return [r.action for r in recommendations]


def test_hot_clear_summer_day():
    recommendations = generate_care_recommendations(
        _weather(temperature=35, description="clear sky"), now=JULY
    )

    assert _actions(recommendations) == [
        "Increase watering frequency",
        "Provide shade during peak hours",
        "Monitor watering needs closely",
        "Perfect day for photosynthesis",
    ]
    watering = recommendations[0]
    assert watering.priority is CarePriority.HIGH
    assert watering.category is CareCategory.WATERING
    assert watering.reason == "High temperature (35°C) increases evaporation"
    assert watering.due_date == JULY


def test_mild_weather_only_gets_the_seasonal_recommendation():
    recommendations = generate_care_recommendations(_weather(), now=JANUARY)

    assert len(recommendations) == 1
    assert recommendations[0].action == "Water sparingly"
    assert recommendations[0].icon == "❄️"


@pytest.mark.parametrize("overrides", [
    {"temperature": 30},
    {"temperature": 10},
    {"humidity": 80},
    {"humidity": 30},
    {"precipitation": 5},
    {"wind_speed": 10},
])
def test_thresholds_are_strict(overrides):
    recommendations = generate_care_recommendations(_weather(**overrides), now=JANUARY)
    assert _actions(recommendations) == ["Water sparingly"]


def test_cold_humid_windy_rainy_day():
    recommendations = generate_care_recommendations(
        _weather(
            temperature=4,
            humidity=92,
            precipitation=7.5,
            wind_speed=12,
            description="Moderate Rain",
        ),
        now=JANUARY,
    )

    assert _actions(recommendations) == [
        "Move sensitive plants indoors",
        "Ensure good air circulation",
        "Check for signs of fungal diseases",
        "Check drainage after rain",
        "Secure tall plants and containers",
        "Check soil moisture more frequently",
        "Reduce watering frequency",
        "Skip outdoor watering today",
        "Enjoy the natural watering!",
        "Water sparingly",
    ]
    reasons = {r.action: r.reason for r in recommendations}
    assert reasons["Skip outdoor watering today"] == "Recent rainfall (7.5mm) provides natural watering"
    assert reasons["Secure tall plants and containers"] == "Strong winds (12 m/s) can damage plants"
    assert reasons["Reduce watering frequency"] == "Low temperature (4°C) reduces water evaporation"


def test_dry_air_recommendations():
    recommendations = generate_care_recommendations(_weather(humidity=20), now=JULY)

    assert _actions(recommendations) == [
        "Increase humidity around plants",
        "Mist plants regularly",
        "Monitor watering needs closely",
    ]
    assert recommendations[0].reason == "Low humidity (20%) can stress plants"


def test_rain_takes_precedence_over_sun():
    recommendations = generate_care_recommendations(
        _weather(description="sun showers and rain"), now=JANUARY
    )
    assert "Enjoy the natural watering!" in _actions(recommendations)
    assert "Perfect day for photosynthesis" not in _actions(recommendations)


def test_result_is_sorted_by_priority():
    recommendations = generate_care_recommendations(
        _weather(temperature=38, humidity=15, precipitation=12, wind_speed=20, description="sunny"),
        now=datetime(2024, 4, 1, tzinfo=timezone.utc),
    )

    ranks = [r.priority.rank for r in recommendations]
    assert ranks == sorted(ranks, reverse=True)
    assert len({r.action for r in recommendations}) == len(recommendations)


def test_plant_types_do_not_change_the_result():
    weather = _weather(temperature=33, humidity=85)

    assert generate_care_recommendations(weather, ["fern", "cactus"], now=JULY) == \
        generate_care_recommendations(weather, now=JULY)


@pytest.mark.parametrize("month, season", [
    (1, Season.WINTER), (2, Season.WINTER), (3, Season.SPRING), (5, Season.SPRING),
    (6, Season.SUMMER), (8, Season.SUMMER), (9, Season.FALL), (11, Season.FALL),
    (12, Season.WINTER),
])
def test_season_for_month(month, season):
    assert season_for_month(month) is season


@pytest.mark.parametrize("month, action", [
    (4, "Start spring fertilizing schedule"),
    (7, "Monitor watering needs closely"),
    (10, "Reduce fertilizing frequency"),
    (12, "Water sparingly"),
])
def test_exactly_one_seasonal_recommendation(month, action):
    now = datetime(2024, month, 10, tzinfo=timezone.utc)
    recommendations = generate_care_recommendations(_weather(), now=now)
    assert _actions(recommendations) == [action]


def test_seasonal_tips():
    result = get_seasonal_tips(datetime(2024, 10, 1, tzinfo=timezone.utc))

    assert result["season"] is Season.FALL
    assert [tip.title for tip in result["tips"]] == [
        "Reduce Fertilizing",
        "Harvest Seeds",
        "Prepare for Winter",
        "Clean Up",
    ]


def test_seasonal_tips_are_copies():
    first = get_seasonal_tips(JULY)
    first["tips"][0].title = "changed"

    assert get_seasonal_tips(JULY)["tips"][0].title == "Consistent Watering"
