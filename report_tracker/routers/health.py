"""Health check router."""

from datetime import datetime, timezone

from fastapi import APIRouter
from sqlalchemy import text

from report_tracker import __version__
from report_tracker.dependencies import ArtifactStoreDep, DbSession
from report_tracker.schemas.health import HealthResponse, ServiceStatus
from report_tracker.utils.logger import get_logger

router = APIRouter()
log = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health_check(db: DbSession, artifact_store: ArtifactStoreDep) -> HealthResponse:
    """
    Health check for the service dependencies.

    Checks:
    - Database connectivity
    - Upload directory presence

    Returns:
        HealthResponse with status and service details
    """
    services = {}
    overall_status = "ok"

    # Check database
    try:
        await db.execute(text("SELECT 1"))
        services["database"] = ServiceStatus(status="healthy", message="Connected")
    except Exception as e:
        log.error("health check failed", service="database", error=str(e))
        services["database"] = ServiceStatus(status="unhealthy", message="Service unavailable")
        overall_status = "degraded"

    # Check artifact storage
    base_dir = artifact_store.base_dir
    if base_dir.is_dir():
        services["storage"] = ServiceStatus(
            status="healthy", message="Upload directory available", details={"path": str(base_dir)}
        )
    else:
        log.error("health check failed", service="storage", path=str(base_dir))
        services["storage"] = ServiceStatus(status="unhealthy", message="Upload directory missing")
        overall_status = "degraded"

    return HealthResponse(
        status=overall_status,
        version=__version__,
        services=services,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
