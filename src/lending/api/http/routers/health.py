"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.lending.api.http.app_data import ApplicationDependencies
from src.lending.api.http.deps import get_app_dependencies
from src.lending.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


def _database_type() -> str:
    return "sqlite" if get_config().database.is_sqlite else "postgresql"


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe; does not check dependencies."""
    return {"status": "healthy", "service": "catalog"}


@router.get("/ready", response_model=None)
async def readiness(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Readiness check; 503 when the database is unreachable."""
    db_healthy = app_deps.database_service.health_check()

    response = {
        "status": "ready" if db_healthy else "not_ready",
        "environment": get_config().app.environment,
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": _database_type(),
            }
        },
    }
    if not db_healthy:
        return JSONResponse(status_code=503, content=response)
    return response


@router.get("/database", response_model=None)
async def health_database(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Database-specific health check with connection pool status."""
    try:
        healthy = app_deps.database_service.health_check()
        return {
            "status": "healthy" if healthy else "unhealthy",
            "type": _database_type(),
            "pool": app_deps.database_service.get_pool_status(),
        }
    except Exception as e:
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "error": str(e),
                "error_type": type(e).__name__,
            },
        )
