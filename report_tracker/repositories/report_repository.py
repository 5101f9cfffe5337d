"""Repository for Report model operations."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from report_tracker.models.report import Report
from report_tracker.models.report_status import ReportStatus
from report_tracker.utils.logger import get_logger

log = get_logger(__name__)


class ReportRepository:
    """Repository for Report CRUD operations.

    Lookups are not ownership-scoped: ReportService needs to tell a missing
    report apart from one owned by someone else.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        user_id: UUID,
        name: str,
        report_type: str,
        report_date: date,
        file_path: str,
        created_at: datetime,
    ) -> Report:
        """
        Create a new report record in UPLOADED status.

        Caller is responsible for committing the transaction.
        """
        report = Report(
            user_id=user_id,
            name=name,
            type=report_type,
            report_date=report_date,
            file_path=file_path,
            status=ReportStatus.UPLOADED,
            created_at=created_at,
            updated_at=created_at,
        )
        self.session.add(report)
        await self.session.flush()
        await self.session.refresh(report)
        log.debug("report_created", report_id=str(report.id), user_id=str(user_id))
        return report

    async def get_by_id(self, report_id: UUID, populate_existing: bool = False) -> Optional[Report]:
        """
        Get report by ID.

        Args:
            report_id: Report UUID
            populate_existing: Overwrite any identity-map copy with the row
                as currently stored

        Returns:
            The report, or None if no row has that ID
        """
        stmt = select(Report).where(Report.id == report_id)
        if populate_existing:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_user(
        self, user_id: UUID, status: Optional[ReportStatus] = None
    ) -> list[Report]:
        """List a user's reports, newest first (ties by id), optionally filtered by status."""
        stmt = select(Report).where(Report.user_id == user_id)
        if status is not None:
            stmt = stmt.where(Report.status == status)
        stmt = stmt.order_by(Report.created_at.desc(), Report.id.desc())

        result = await self.session.execute(stmt)
        reports = list(result.scalars().all())
        log.debug("query result", user_id=str(user_id), status=status, count=len(reports))
        return reports

    async def update_status_if_current(
        self,
        report_id: UUID,
        expected_status: ReportStatus,
        new_status: ReportStatus,
        updated_at: datetime,
        summary: Optional[str] = None,
    ) -> bool:
        """
        Atomically move a report from expected_status to new_status.

        The UPDATE only matches while the stored status still equals
        expected_status, so of two racing writers at most one succeeds.
        Summary is only written when provided.

        Caller is responsible for committing the transaction.

        Returns:
            True if the row was updated, False if its status had changed
            (or the row is gone)
        """
        values: dict = {"status": new_status, "updated_at": updated_at}
        if summary is not None:
            values["summary"] = summary

        result = await self.session.execute(
            update(Report)
            .where(Report.id == report_id, Report.status == expected_status)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        updated = result.rowcount == 1
        log.debug(
            "report_status_update",
            report_id=str(report_id),
            expected_status=expected_status,
            new_status=new_status,
            updated=updated,
        )
        return updated

    async def delete(self, report: Report) -> None:
        """
        Delete a report row.

        Caller is responsible for committing the transaction.
        """
        await self.session.delete(report)
        await self.session.flush()
        log.debug("report_deleted", report_id=str(report.id))
