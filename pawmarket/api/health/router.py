"""Health check endpoints for debugging and monitoring."""

from fastapi import APIRouter

from pawmarket.api.core.dependencies import AsyncSessionDep, ImageStorageDep
from pawmarket.modules.health.service import HealthService, OverallHealthStatus

# Create separate routers for root and health endpoints
root_router = APIRouter()
router = APIRouter(prefix="/health", tags=["health"])


@root_router.get("/")
async def root():
    return {"service": "pawmarket-api", "docs": "/docs"}


@router.get("")
async def health_check(
    db: AsyncSessionDep,
    storage: ImageStorageDep,
) -> OverallHealthStatus:
    """Database and storage health."""
    health_service = HealthService(db, storage)
    return await health_service.run_all_checks()


@router.get("/liveness")
async def liveness_check():
    """Simple liveness check - indicates if service is running."""
    return {"status": "alive", "service": "pawmarket-api"}
