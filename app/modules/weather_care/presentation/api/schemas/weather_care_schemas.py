# 📄 File: app/modules/weather_care/presentation/api/schemas/weather_care_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of the questions you can ask about weather and plant care, and of the answers.
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the /weather-care API, using the standard
# {"success": true, "data": ...} envelope.
# 🔗 Dependencies:
# pydantic, weather_care domain models
# 🔄 Connected Modules / Calls From:
# app.modules.weather_care.presentation.api.v1.weather_care

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.modules.weather_care.domain.models.weather import (
    CareRecommendation,
    LocationQuery,
    Season,
    SeasonalTip,
    WeatherObservation,
)


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class CareRecommendationsRequest(BaseModel):
    location: LocationQuery = Field(default_factory=LocationQuery)
    plant_types: Optional[List[str]] = Field(
        default=None,
        description="Plant types in the collection (reserved, does not change the result yet)"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "location": {"city": "London", "country": "GB"},
                "plant_types": ["monstera", "fern"]
            }
        }
    )


class CoordinatesRequest(BaseModel):
    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lon: float = Field(..., ge=-180, le=180, description="Longitude")


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class CareRecommendationsData(BaseModel):
    location: Optional[str]
    weather: WeatherObservation
    recommendations: List[CareRecommendation]
    forecast: str
    last_updated: datetime


class CareRecommendationsResponse(BaseModel):
    success: Literal[True] = True
    data: CareRecommendationsData


class WeatherData(BaseModel):
    location: Optional[str]
    weather: WeatherObservation
    last_updated: datetime


class WeatherResponse(BaseModel):
    success: Literal[True] = True
    data: WeatherData


class SeasonalTipsData(BaseModel):
    season: Season
    tips: List[SeasonalTip]


class SeasonalTipsResponse(BaseModel):
    success: Literal[True] = True
    data: SeasonalTipsData
