# 📄 File: app/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts GreenMate, connects photo storage and the weather
# service, and makes sure everything is ready before requests come in.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point. The factory builds the rate limiter and
# routers; the lifespan constructs the storage backend and weather client exactly once,
# publishes them on app.state for dependency injection and closes them on shutdown.
#
# 🔗 Dependencies:
# - FastAPI framework, slowapi, uvicorn
# - app.shared.config.settings
# - app.shared.infrastructure.storage, weather_care OpenWeatherClient
# - app.api.v1.router, app.api.middleware
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - Docker container entry point
# - Test suite (create_application with injected fakes)

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.middleware import RequestLoggingMiddleware, register_exception_handlers
from app.api.v1 import create_api_v1_router
from app.modules.weather_care.domain.services.weather_provider import WeatherProvider
from app.modules.weather_care.infrastructure.external.openweather_client import OpenWeatherClient
from app.shared.config.settings import Settings, get_settings
from app.shared.core.rate_limiter import create_rate_limiter
from app.shared.infrastructure.storage import ObjectStorage, create_object_storage
from app.shared.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def _build_weather_provider(settings: Settings) -> Optional[OpenWeatherClient]:
    if not settings.weather_enabled:
        logger.warning("OPENWEATHER_API_KEY not set; weather-based care is disabled")
        return None
    return OpenWeatherClient(
        api_key=settings.OPENWEATHER_API_KEY,
        base_url=settings.OPENWEATHER_API_URL,
        timeout=settings.WEATHER_TIMEOUT_SECONDS,
    )


def _create_lifespan(
    settings: Settings,
    object_storage: Optional[ObjectStorage],
    weather_provider: Optional[WeatherProvider]
):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application lifespan context manager.

        Injected collaborators are used as given and left open on shutdown;
        collaborators built here are owned and closed here.
        """
        logger.info(f"🌱 {settings.APP_NAME} starting up...")

        owns_storage = object_storage is None
        storage = object_storage or create_object_storage(settings)
        owns_provider = weather_provider is None
        provider = weather_provider if weather_provider is not None else _build_weather_provider(settings)

        if owns_storage:
            await storage.initialize()
        logger.info(f"✅ Object storage ready ({storage.backend_name})")

        if owns_provider and provider is not None:
            await provider.initialize()
            logger.info("✅ Weather provider initialized")

        app.state.storage = storage
        app.state.weather_provider = provider

        try:
            logger.info(f"✅ {settings.APP_NAME} startup complete")
            yield
        finally:
            logger.info(f"🔄 {settings.APP_NAME} shutting down...")

            if owns_provider and provider is not None:
                await provider.close()
            if owns_storage:
                await storage.close()

            app.state.storage = None
            app.state.weather_provider = None
            logger.info(f"✅ {settings.APP_NAME} shutdown complete")

    return lifespan


def create_application(
    settings: Optional[Settings] = None,
    *,
    object_storage: Optional[ObjectStorage] = None,
    weather_provider: Optional[WeatherProvider] = None
) -> FastAPI:
    """
    Application factory function.

    Args:
        settings: Settings to use, defaults to get_settings()
        object_storage: Storage backend to use instead of the configured one
        weather_provider: Weather provider to use instead of OpenWeatherMap

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    setup_logging(
        log_level=settings.LOG_LEVEL,
        log_format=settings.LOG_FORMAT,
        log_file=settings.LOG_FILE,
    )

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=_create_lifespan(settings, object_storage, weather_provider),
        debug=settings.DEBUG,
    )

    limiter = create_rate_limiter(settings)
    app.state.settings = settings
    app.state.limiter = limiter
    app.state.storage = None
    app.state.weather_provider = None

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    if not settings.is_testing:
        app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    register_exception_handlers(app, settings)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(create_api_v1_router(limiter, settings), prefix="/api/v1")

    if settings.STORAGE_BACKEND == "local" and object_storage is None:
        # Serves files written by LocalObjectStorage
        app.mount(
            "/static",
            StaticFiles(directory=settings.STORAGE_LOCAL_ROOT, check_dir=False),
            name="static",
        )

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "docs_url": "/docs" if settings.DEBUG else None,
            "health_check": "/api/v1/health",
            "api_base": "/api/v1",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


# Create the FastAPI application
app = create_application()


def main():
    """Run the development server (``python -m app.main``)."""
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
