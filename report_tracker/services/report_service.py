"""Service for the ownership-scoped report lifecycle."""

import asyncio
from datetime import date, datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from report_tracker.exceptions import (
    InvalidStatusTransitionError,
    ResourceNotFoundError,
    StorageError,
)
from report_tracker.models.report import Report
from report_tracker.models.report_status import (
    ReportStatus,
    allowed_transitions,
    is_valid_transition,
)
from report_tracker.repositories.report_repository import ReportRepository
from report_tracker.services.artifact_store import LocalArtifactStore
from report_tracker.services.ownership import assert_ownership
from report_tracker.utils.logger import get_logger

log = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReportService:
    """
    Orchestrates the artifact store, report repository, transition rules
    and ownership checks.

    Every operation takes the caller's user ID explicitly. The service owns
    the transaction boundary for operations whose ordering matters:

    - create: file stored first, row inserted and committed second
    - delete: row deleted and committed first, file removed second
    """

    def __init__(
        self,
        session: AsyncSession,
        report_repository: ReportRepository,
        artifact_store: LocalArtifactStore,
    ):
        self.session = session
        self.report_repository = report_repository
        self.artifact_store = artifact_store

    async def _run_blocking(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def _get_owned_report(self, report_id: UUID, caller_id: UUID) -> Report:
        """Locate a report and verify the caller owns it."""
        report = await self.report_repository.get_by_id(report_id)
        if report is None:
            raise ResourceNotFoundError("Report", str(report_id))
        assert_ownership(report, caller_id)
        return report

    async def create_report(
        self,
        caller_id: UUID,
        name: str,
        report_type: str,
        report_date: date,
        content: bytes,
        original_filename: Optional[str] = None,
    ) -> Report:
        """
        Store an uploaded file and record it as a new UPLOADED report.

        Raises:
            StorageError: If the file cannot be written; no row is created
        """
        location = await self._run_blocking(
            self.artifact_store.store, caller_id, content, original_filename
        )

        try:
            report = await self.report_repository.create(
                user_id=caller_id,
                name=name,
                report_type=report_type,
                report_date=report_date,
                file_path=location,
                created_at=_utcnow(),
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            await self._discard_artifact(location, reason="create_failed")
            raise

        log.info(
            "report_created",
            report_id=str(report.id),
            user_id=str(caller_id),
            report_type=report_type,
        )
        return report

    async def list_reports(
        self, caller_id: UUID, status: Optional[ReportStatus] = None
    ) -> list[Report]:
        """List the caller's reports, newest first."""
        return await self.report_repository.list_by_user(caller_id, status=status)

    async def get_report(self, report_id: UUID, caller_id: UUID) -> Report:
        """
        Get a single report owned by the caller.

        Raises:
            ResourceNotFoundError: No report has this ID
            ReportAccessDeniedError: The report belongs to another user
        """
        return await self._get_owned_report(report_id, caller_id)

    async def read_report_file(self, report_id: UUID, caller_id: UUID) -> tuple[Report, bytes]:
        """Get a report owned by the caller together with its file content."""
        report = await self._get_owned_report(report_id, caller_id)
        content = await self._run_blocking(self.artifact_store.read, report.file_path)
        return report, content

    async def update_report_status(
        self,
        report_id: UUID,
        caller_id: UUID,
        new_status: ReportStatus,
        summary: Optional[str] = None,
    ) -> Report:
        """
        Advance a report's status, optionally overwriting its summary.

        The write is a conditional update on the status that was validated.
        If another request moved the report first, the row is re-read and
        the transition re-validated against the fresh status.

        Raises:
            ResourceNotFoundError: No report has this ID
            ReportAccessDeniedError: The report belongs to another user
            InvalidStatusTransitionError: new_status is not reachable
        """
        report = await self._get_owned_report(report_id, caller_id)

        # Status only ever advances, so this terminates
        while True:
            current_status = report.status
            self._validate_transition(report, current_status, new_status)

            updated = await self.report_repository.update_status_if_current(
                report_id=report.id,
                expected_status=current_status,
                new_status=new_status,
                updated_at=_utcnow(),
                summary=summary,
            )

            report = await self.report_repository.get_by_id(report_id, populate_existing=True)
            if report is None:
                raise ResourceNotFoundError("Report", str(report_id))
            if updated:
                break

            log.info(
                "report_status_conflict",
                report_id=str(report_id),
                expected_status=current_status,
                actual_status=report.status,
            )

        await self.session.commit()
        log.info(
            "report_status_updated",
            report_id=str(report_id),
            from_status=current_status,
            to_status=new_status,
            summary_set=summary is not None,
        )
        return report

    async def delete_report(self, report_id: UUID, caller_id: UUID) -> None:
        """
        Delete a report row and then its file.

        The database delete decides success. File removal failures are
        logged and never propagated.

        Raises:
            ResourceNotFoundError: No report has this ID
            ReportAccessDeniedError: The report belongs to another user
        """
        report = await self._get_owned_report(report_id, caller_id)
        location = report.file_path

        await self.report_repository.delete(report)
        await self.session.commit()
        log.info("report_deleted", report_id=str(report_id), user_id=str(caller_id))

        await self._discard_artifact(location, reason="report_deleted")

    def _validate_transition(
        self, report: Report, current_status: ReportStatus, new_status: ReportStatus
    ) -> None:
        if not is_valid_transition(current_status, new_status):
            log.info(
                "invalid_status_transition",
                report_id=str(report.id),
                current_status=current_status,
                requested_status=new_status,
            )
            raise InvalidStatusTransitionError(
                str(current_status),
                str(new_status),
                [str(s) for s in allowed_transitions(current_status)],
            )

    async def _discard_artifact(self, location: str, reason: str) -> None:
        """Best-effort artifact removal; failures leave an orphaned file."""
        try:
            await self._run_blocking(self.artifact_store.delete, location)
        except StorageError as e:
            log.warning(
                "artifact_delete_failed",
                location=location,
                reason=reason,
                error=e.message,
            )
