# 📄 File: app/modules/weather_care/domain/models/weather.py
# 🧭 Purpose (Layman Explanation):
# Describes today's weather at a place and the plant care advice we give because of it.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for the weather-to-care engine: WeatherObservation (normalized
# provider reading), CareRecommendation with category/priority enums, LocationQuery,
# Season and SeasonalTip.
# 🔗 Dependencies:
# pydantic, enum, datetime
# 🔄 Connected Modules / Calls From:
# recommendation_engine.py, seasonal_tips.py, openweather_client.py, weather_care_service.py

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CareCategory(str, Enum):
    WATERING = "watering"
    FERTILIZING = "fertilizing"
    HUMIDITY = "humidity"
    LIGHT = "light"
    TEMPERATURE = "temperature"
    GENERAL = "general"


class CarePriority(str, Enum):
    """Recommendation urgency; ``rank`` orders them low (1) to urgent (4)."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANKS[self]


_PRIORITY_RANKS = {
    CarePriority.LOW: 1,
    CarePriority.MEDIUM: 2,
    CarePriority.HIGH: 3,
    CarePriority.URGENT: 4,
}


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


class WeatherObservation(BaseModel):
    """Current conditions in metric units."""

    temperature: float = Field(..., description="Air temperature in °C")
    humidity: float = Field(..., description="Relative humidity in %")
    pressure: float = Field(..., description="Pressure in hPa")
    description: str = Field(..., description="Condition text, e.g. 'light rain'")
    icon: str = Field(default="", description="Provider icon code")
    wind_speed: float = Field(default=0, description="Wind speed in m/s")
    uv_index: Optional[float] = Field(default=None, description="UV index when available")
    precipitation: float = Field(default=0, description="Last hour precipitation in mm")


class CareRecommendation(BaseModel):
    category: CareCategory
    priority: CarePriority
    action: str
    reason: str
    icon: str = ""
    due_date: Optional[datetime] = None


class LocationQuery(BaseModel):
    """Where to look up weather. Coordinates win over city when both are given."""

    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lon: Optional[float] = Field(default=None, ge=-180, le=180)
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    country: Optional[str] = Field(default=None, min_length=1, max_length=100)

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None

    def display_name(self) -> Optional[str]:
        if self.has_coordinates:
            return f"{self.lat:.2f}, {self.lon:.2f}"
        if self.city:
            return f"{self.city}, {self.country}" if self.country else self.city
        return None


class SeasonalTip(BaseModel):
    title: str
    description: str
    icon: str
    priority: CarePriority
