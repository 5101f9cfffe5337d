"""Database models."""

from report_tracker.models.report_status import ReportStatus
from report_tracker.models.report import Report
from report_tracker.models.user import User

__all__ = [
    "ReportStatus",
    "Report",
    "User",
]
