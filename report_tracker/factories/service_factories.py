"""Factory functions for business logic services."""

from functools import lru_cache
from sqlalchemy.ext.asyncio import AsyncSession
from report_tracker.config import get_settings
from report_tracker.repositories.report_repository import ReportRepository
from report_tracker.services.artifact_store import LocalArtifactStore
from report_tracker.services.report_service import ReportService


@lru_cache(maxsize=1)
def get_artifact_store() -> LocalArtifactStore:
    """
    Create singleton artifact store rooted at the configured upload dir.

    Returns:
        LocalArtifactStore instance
    """
    settings = get_settings()
    return LocalArtifactStore(base_dir=settings.upload_dir)


def get_report_service(
    db_session: AsyncSession,
    report_repository: ReportRepository | None = None,
    artifact_store: LocalArtifactStore | None = None,
) -> ReportService:
    """
    Create ReportService with dependencies.

    Note: Not cached because depends on request-scoped db session.

    Args:
        db_session: Database session
        report_repository: Repository bound to db_session; built if omitted
        artifact_store: Override for the shared artifact store

    Returns:
        ReportService instance
    """
    return ReportService(
        session=db_session,
        report_repository=report_repository or ReportRepository(db_session),
        artifact_store=artifact_store or get_artifact_store(),
    )
