from datetime import datetime, timezone

import pytest

from app.modules.weather_care.application.weather_care_service import (
    WeatherCareService,
    build_forecast,
)
from app.modules.weather_care.domain.models.weather import LocationQuery, Season, WeatherObservation
from app.shared.core.exceptions import (
    LocationRequiredError,
    ServiceUnavailableError,
    WeatherFetchFailedError,
)

from tests.fakes import FakeWeatherProvider

JULY = datetime(2024, 7, 15, 9, 30, tzinfo=timezone.utc)


async def test_coordinates_take_precedence_over_city(fake_weather):
    service = WeatherCareService(fake_weather)

    result = await service.get_weather_based_care_recommendations(
        {"lat": 45.764, "lon": 4.8357, "city": "Lyon", "country": "FR"}, now=JULY
    )

    assert fake_weather.calls == [("coordinates", 45.764, 4.8357)]
    assert result["location"] == "45.76, 4.84"


async def test_city_lookup(fake_weather):
    service = WeatherCareService(fake_weather)

    result = await service.get_weather_based_care_recommendations(
        LocationQuery(city="Lyon", country="FR"), now=JULY
    )

    assert fake_weather.calls == [("city", "Lyon", "FR")]
    assert result["location"] == "Lyon, FR"


async def test_only_one_coordinate_falls_back_to_city(fake_weather):
    service = WeatherCareService(fake_weather)

    await service.get_weather_based_care_recommendations({"lat": 10.0, "city": "Accra"}, now=JULY)

    assert fake_weather.calls == [("city", "Accra", None)]


async def test_zero_coordinates_are_valid(fake_weather):
    service = WeatherCareService(fake_weather)

    await service.get_weather_based_care_recommendations({"lat": 0, "lon": 0}, now=JULY)

    assert fake_weather.calls == [("coordinates", 0, 0)]


async def test_location_is_required(fake_weather):
    service = WeatherCareService(fake_weather)

    with pytest.raises(LocationRequiredError) as exc_info:
        await service.get_weather_based_care_recommendations({}, now=JULY)

    assert exc_info.value.status_code == 400
    assert fake_weather.calls == []


async def test_location_is_checked_before_provider():
    service = WeatherCareService(None)

    with pytest.raises(LocationRequiredError):
        await service.get_weather_based_care_recommendations({"country": "FR"})

    with pytest.raises(ServiceUnavailableError):
        await service.get_weather_based_care_recommendations({"city": "Lyon"})


async def test_recommendations_payload(fake_weather):
    service = WeatherCareService(fake_weather)

    result = await service.get_weather_based_care_recommendations(
        {"city": "Lyon"}, plant_types=["monstera"], now=JULY
    )

    assert result["weather"] is fake_weather.observation
    assert result["last_updated"] == JULY
    assert result["forecast"] == "Today's weather: few clouds with temperature around 22°C"
    assert [r.action for r in result["recommendations"]] == ["Monitor watering needs closely"]


async def test_provider_failures_propagate():
    provider = FakeWeatherProvider(error=WeatherFetchFailedError(provider="fake", provider_status=500))
    service = WeatherCareService(provider)

    with pytest.raises(WeatherFetchFailedError) as exc_info:
        await service.get_weather_based_care_recommendations({"city": "Lyon"})

    assert exc_info.value.details["provider_status"] == 500
    assert len(provider.calls) == 1


async def test_location_and_coordinate_weather(fake_weather):
    service = WeatherCareService(fake_weather)

    by_city = await service.get_location_weather("Lyon", "FR")
    by_coordinates = await service.get_coordinates_weather(-33.8688, 151.2093)

    assert by_city["location"] == "Lyon, FR"
    assert by_coordinates["location"] == "-33.87, 151.21"
    assert by_city["weather"] is fake_weather.observation
    assert fake_weather.calls == [("city", "Lyon", "FR"), ("coordinates", -33.8688, 151.2093)]


def test_forecast_mentions_precipitation_only_when_present():
    wet = WeatherObservation(
        temperature=12.5, humidity=90, pressure=1000, description="light rain", precipitation=3.2
    )
    dry = WeatherObservation(temperature=30, humidity=40, pressure=1015, description="clear sky")

    assert build_forecast(wet) == (
        "Today's weather: light rain with temperature around 12.5°C and 3.2mm of precipitation"
    )
    assert build_forecast(dry) == "Today's weather: clear sky with temperature around 30°C"


def test_seasonal_tips_without_provider():
    result = WeatherCareService(None).get_seasonal_tips(JULY)

    assert result["season"] is Season.SUMMER
    assert len(result["tips"]) == 4
