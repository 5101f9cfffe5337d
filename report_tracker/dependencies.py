"""FastAPI dependency injection providers."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from report_tracker.database import get_db
from report_tracker.exceptions import InvalidTokenError, MissingTokenError
from report_tracker.factories.service_factories import get_artifact_store, get_report_service
from report_tracker.repositories.report_repository import ReportRepository
from report_tracker.repositories.user_repository import UserRepository
from report_tracker.services.artifact_store import LocalArtifactStore
from report_tracker.services.auth_service import AuthService, get_auth_service
from report_tracker.services.report_service import ReportService
from report_tracker.utils.logger import get_logger

log = get_logger(__name__)


# Type aliases for cleaner router signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]

# Singletons
ArtifactStoreDep = Annotated[LocalArtifactStore, Depends(get_artifact_store)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


# ============================================================================
# Repositories (request-scoped)
# ============================================================================


def get_report_repository(db: DbSession) -> ReportRepository:
    """Get ReportRepository with database session."""
    return ReportRepository(db)


def get_user_repository(db: DbSession) -> UserRepository:
    """Get UserRepository with database session."""
    return UserRepository(db)


ReportRepoDep = Annotated[ReportRepository, Depends(get_report_repository)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


# ============================================================================
# Services
# ============================================================================


def get_report_service_dep(
    db: DbSession, report_repo: ReportRepoDep, artifact_store: ArtifactStoreDep
) -> ReportService:
    """Get ReportService with database session."""
    return get_report_service(db, report_repository=report_repo, artifact_store=artifact_store)


ReportServiceDep = Annotated[ReportService, Depends(get_report_service_dep)]


# ============================================================================
# Authentication Dependencies
# ============================================================================


async def get_current_user_id(
    user_repo: UserRepoDep,
    auth_service: AuthServiceDep,
    authorization: Annotated[str | None, Header(alias="Authorization")] = None,
) -> UUID:
    """Verify the bearer token and return the caller's user ID, raise 401 otherwise."""
    if not authorization:
        raise MissingTokenError()

    principal = auth_service.verify_token(authorization)
    user = await user_repo.get_by_id(principal.user_id)
    if user is None:
        log.warning("token subject not found", user_id=str(principal.user_id))
        raise InvalidTokenError("User no longer exists")
    return user.id


CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]
