# 📄 File: app/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# Tells monitoring tools whether GreenMate is up, and whether photo storage and the
# weather service it depends on are ready.
# 🧪 Purpose (Technical Summary):
# Liveness and readiness endpoints. Readiness asks the lifespan-owned storage backend
# for its health and reports the weather provider state (disabled without an API key).
# 🔗 Dependencies:
# FastAPI, app.state (storage, weather_provider, settings)
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, load balancers, container orchestration probes

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.shared.utils.logging import get_logger

logger = get_logger(__name__)

health_router = APIRouter()

SERVICE_NAME = "greenmate-api"


@health_router.get(
    "/health",
    summary="Basic Health Check",
    description="Liveness check for load balancers and monitoring",
)
async def health_check(request: Request) -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "version": request.app.state.settings.APP_VERSION,
        }
    )


async def _storage_health(request: Request) -> Dict[str, Any]:
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        return {"status": "unhealthy", "reason": "not_initialized"}
    try:
        return await storage.health_check()
    except Exception as e:
        logger.error(f"Storage health check failed: {e}")
        return {"status": "unhealthy", "backend": storage.backend_name, "reason": str(e)}


async def _weather_health(request: Request) -> Dict[str, Any]:
    provider = getattr(request.app.state, "weather_provider", None)
    if provider is None:
        return {"status": "disabled"}
    try:
        return await provider.health_check()
    except Exception as e:
        logger.error(f"Weather provider health check failed: {e}")
        return {"status": "unhealthy", "provider": provider.provider_name, "reason": str(e)}


@health_router.get(
    "/health/ready",
    summary="Readiness Probe",
    description="Ready when the storage backend is healthy",
)
async def readiness_probe(request: Request) -> JSONResponse:
    """
    Readiness probe

    Storage is critical; the weather provider is reported but optional,
    since uploads keep working without it.
    """
    checks = {
        "storage": await _storage_health(request),
        "weather": await _weather_health(request),
    }
    ready = checks["storage"].get("status") == "healthy"

    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "checks": checks,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    )
