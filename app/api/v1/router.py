# 📄 File: app/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The map of every GreenMate web address under /api/v1 and which part of the app answers it.
# 🧪 Purpose (Technical Summary):
# Builds the v1 APIRouter by including the health router and the module routers, which
# are created with the application's Limiter and Settings.
# 🔗 Dependencies:
# FastAPI, slowapi, media and weather_care presentation routers
# 🔄 Connected Modules / Calls From:
# app.main (create_application)

"""
API Version 1 Router

Routes:
- /health, /health/ready: service health
- /uploads: photo validation, normalization and storage
- /weather-care: weather lookups, care recommendations and seasonal tips
"""

from fastapi import APIRouter
from slowapi import Limiter

from app.api.v1.health import health_router
from app.modules.media.presentation.api.v1.uploads import create_uploads_router
from app.modules.weather_care.presentation.api.v1.weather_care import create_weather_care_router
from app.shared.config.settings import Settings


def create_api_v1_router(limiter: Limiter, settings: Settings) -> APIRouter:
    api_v1_router = APIRouter()

    api_v1_router.include_router(health_router, tags=["Health Check"])
    api_v1_router.include_router(
        create_uploads_router(limiter, settings),
        prefix="/uploads",
        tags=["Uploads"],
    )
    api_v1_router.include_router(
        create_weather_care_router(limiter, settings),
        prefix="/weather-care",
        tags=["Weather Care"],
    )
    return api_v1_router
