"""Ownership check shared by every per-report operation."""

from uuid import UUID

from report_tracker.exceptions import ReportAccessDeniedError
from report_tracker.models.report import Report
from report_tracker.utils.logger import get_logger

log = get_logger(__name__)


def assert_ownership(report: Report, caller_id: UUID) -> None:
    """Raise ReportAccessDeniedError unless caller_id owns the report."""
    if report.user_id != caller_id:
        log.warning("report_access_denied", report_id=str(report.id), caller_id=str(caller_id))
        raise ReportAccessDeniedError()
