import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pawmarket.modules.storage.service import LocalStorage
from pawmarket.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class HealthCheckResult:
    """Result of a health check."""

    service: str
    status: Literal["healthy", "unhealthy", "degraded"]
    connected: bool
    details: dict
    error: str | None = None


@dataclass
class OverallHealthStatus:
    """Overall health status with individual service results."""

    status: Literal["healthy", "degraded", "unhealthy"]
    services: dict[str, HealthCheckResult]
    timestamp: str


class HealthService:
    """Service for performing health checks on various system components."""

    def __init__(self, db: AsyncSession, storage=None):
        self.db = db
        self.storage = storage

    async def check_database_health(self) -> HealthCheckResult:
        """Database connection health check."""
        try:
            result = await self.db.execute(text("SELECT 1 as test"))
            test_value = result.scalar()

            return HealthCheckResult(
                service="database",
                status="healthy",
                connected=True,
                details={"test_query_result": test_value},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database health check error: {e}")
            return HealthCheckResult(
                service="database",
                status="unhealthy",
                connected=False,
                details={},
                error=str(e),
            )

    async def check_storage_health(self) -> HealthCheckResult:
        """Image storage check; only local disk can be probed cheaply."""
        if not isinstance(self.storage, LocalStorage):
            return HealthCheckResult(
                service="storage",
                status="healthy",
                connected=True,
                details={"backend": type(self.storage).__name__},
            )

        def _probe() -> bool:
            self.storage.base_path.mkdir(parents=True, exist_ok=True)
            probe = self.storage.base_path / ".health"
            probe.write_bytes(b"ok")
            probe.unlink()
            return True

        try:
            await asyncio.to_thread(_probe)
            return HealthCheckResult(
                service="storage",
                status="healthy",
                connected=True,
                details={"backend": "local", "path": str(self.storage.base_path)},
            )
        except OSError as e:
            logger.error(f"Storage health check error: {e}")
            return HealthCheckResult(
                service="storage",
                status="degraded",
                connected=False,
                details={"backend": "local"},
                error=str(e),
            )

    async def run_all_checks(self) -> OverallHealthStatus:
        """Run all health checks and return the overall status."""
        results = [
            await self.check_database_health(),
            await self.check_storage_health(),
        ]

        overall_status: Literal["healthy", "degraded", "unhealthy"] = "healthy"
        for result in results:
            if result.status == "unhealthy":
                overall_status = "unhealthy"
            elif result.status == "degraded" and overall_status == "healthy":
                overall_status = "degraded"

        return OverallHealthStatus(
            status=overall_status,
            services={result.service: result for result in results},
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
